"""UpdateLocationUseCase — store an entity's GPS fix and locality."""

from __future__ import annotations

import logging

from biznova.application.ports.entity_repo import EntityRepository
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.errors import EntityNotFoundError
from biznova.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class UpdateLocationUseCase:
    def __init__(self, entity_repo: EntityRepository):
        self._entities = entity_repo

    async def execute(
        self,
        entity_id: int,
        latitude: object,
        longitude: object,
        locality: str | None = None,
    ) -> RegisteredEntity:
        """Set coordinates and locality on an existing entity.

        Raises:
            InvalidCoordinateError: coordinates missing or out of range.
            EntityNotFoundError: no entity with ``entity_id``.
        """
        location = GeoPoint(latitude=latitude, longitude=longitude)

        entity = await self._entities.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_id)

        entity.move_to(location, locality.strip() if locality else None)
        await self._entities.update_location(entity)

        logger.info(
            "Location updated for %s %s: [%f, %f] locality=%s",
            entity.role.value, entity.id, location.latitude, location.longitude, entity.locality,
        )
        return entity
