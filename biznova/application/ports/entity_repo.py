"""Port interface for registered entity (shop / customer) persistence."""

from abc import ABC, abstractmethod

from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.value_objects.enums import EntityRole


class EntityRepository(ABC):
    @abstractmethod
    async def save(self, entity: RegisteredEntity) -> RegisteredEntity:
        ...

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> RegisteredEntity | None:
        ...

    @abstractmethod
    async def get_all(self, role: EntityRole | None = None) -> list[RegisteredEntity]:
        ...

    @abstractmethod
    async def get_with_location(self, role: EntityRole) -> list[RegisteredEntity]:
        """Entities of ``role`` with a usable fix (both coordinates set, not the (0, 0) placeholder), ordered by id."""
        ...

    @abstractmethod
    async def update_location(self, entity: RegisteredEntity) -> RegisteredEntity:
        ...
