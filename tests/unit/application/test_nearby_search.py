"""Tests for NearbySearchUseCase with an in-memory repository."""

from __future__ import annotations

import pytest

from biznova.application.ports.entity_repo import EntityRepository
from biznova.application.use_cases.nearby_search import NearbySearchUseCase
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.errors import InvalidCoordinateError, InvalidRadiusError
from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeEntityRepo(EntityRepository):
    def __init__(self, entities: list[RegisteredEntity] | None = None):
        self.entities: dict[int, RegisteredEntity] = {e.id: e for e in entities or []}
        self.location_queries: list[EntityRole] = []

    async def save(self, entity):
        entity.id = max(self.entities, default=0) + 1
        self.entities[entity.id] = entity
        return entity

    async def get_by_id(self, entity_id):
        return self.entities.get(entity_id)

    async def get_all(self, role=None):
        return [e for e in self.entities.values() if role is None or e.role == role]

    async def get_with_location(self, role):
        self.location_queries.append(role)
        return [e for e in self.entities.values() if e.role == role and e.has_gps()]

    async def update_location(self, entity):
        self.entities[entity.id] = entity
        return entity


def make_entity(id, location=None, role=EntityRole.RETAILER, **kwargs) -> RegisteredEntity:
    return RegisteredEntity(id=id, role=role, name=f"{role.value}-{id}", location=location, **kwargs)


NEAR = GeoPoint(latitude=26.250000, longitude=78.171000)  # ~0.15 km from origin
TOWN = GeoPoint(latitude=26.300000, longitude=78.169700)  # ~5.6 km
FAR = GeoPoint(latitude=26.500000, longitude=78.169700)  # ~27.9 km


def _repo() -> FakeEntityRepo:
    return FakeEntityRepo([
        make_entity(1, FAR, shop_name="Far Traders"),
        make_entity(2, NEAR, shop_name="Corner Kirana"),
        make_entity(3, None, shop_name="No GPS Store"),
        make_entity(4, TOWN, shop_name="Town Mart"),
        make_entity(5, NEAR, role=EntityRole.CUSTOMER),
    ])


@pytest.mark.asyncio
async def test_finds_shops_nearest_first():
    uc = NearbySearchUseCase(_repo())
    outcome = await uc.execute(26.249273, 78.169700, 10)
    assert outcome.count == 2
    assert [r.entity.id for r in outcome.results] == [2, 4]
    assert outcome.target_role is EntityRole.RETAILER


@pytest.mark.asyncio
async def test_default_radius_applied():
    uc = NearbySearchUseCase(_repo(), default_radius_km=30)
    outcome = await uc.execute(26.249273, 78.169700)
    assert outcome.query.radius_km == 30
    assert outcome.count == 3


@pytest.mark.asyncio
async def test_search_customers_only_sees_customers():
    repo = _repo()
    outcome = await NearbySearchUseCase(repo).execute(
        26.249273, 78.169700, 10, target_role=EntityRole.CUSTOMER,
    )
    assert [r.entity.id for r in outcome.results] == [5]
    assert repo.location_queries == [EntityRole.CUSTOMER]


@pytest.mark.asyncio
async def test_invalid_coordinates_do_not_hit_repository():
    repo = _repo()
    with pytest.raises(InvalidCoordinateError):
        await NearbySearchUseCase(repo).execute(95, 78.1697, 10)
    assert repo.location_queries == []


@pytest.mark.asyncio
async def test_invalid_radius_do_not_hit_repository():
    repo = _repo()
    with pytest.raises(InvalidRadiusError):
        await NearbySearchUseCase(repo).execute(26.2, 78.1, 0)
    assert repo.location_queries == []


@pytest.mark.asyncio
async def test_missing_radius_without_default_rejected():
    with pytest.raises(InvalidRadiusError):
        await NearbySearchUseCase(_repo(), default_radius_km=None).execute(26.2, 78.1)


@pytest.mark.asyncio
async def test_repository_errors_propagate_unchanged():
    class BrokenRepo(FakeEntityRepo):
        async def get_with_location(self, role):
            raise ConnectionError("database is down")

    with pytest.raises(ConnectionError, match="database is down"):
        await NearbySearchUseCase(BrokenRepo()).execute(26.2, 78.1, 10)


@pytest.mark.asyncio
async def test_empty_store_is_not_an_error():
    outcome = await NearbySearchUseCase(FakeEntityRepo()).execute(26.2, 78.1, 10)
    assert outcome.count == 0
    assert outcome.results == []
