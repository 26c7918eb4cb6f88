"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from biznova.adapters.persistence.models import RegisteredEntityModel
from biznova.application.ports.entity_repo import EntityRepository
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.errors import InvalidCoordinateError
from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _location_to_domain(m: RegisteredEntityModel) -> GeoPoint | None:
    if m.latitude is None or m.longitude is None:
        return None
    try:
        point = GeoPoint(latitude=m.latitude, longitude=m.longitude)
    except InvalidCoordinateError:
        logger.warning(
            "Entity %s has invalid stored coordinates [%s, %s], treating as unlocated",
            m.id, m.latitude, m.longitude,
        )
        return None
    # (0, 0) is what legacy records carry instead of a real fix
    return None if point.is_placeholder else point


def _entity_to_domain(m: RegisteredEntityModel) -> RegisteredEntity:
    return RegisteredEntity(
        id=m.id,
        role=EntityRole(m.role),
        name=m.name,
        shop_name=m.shop_name,
        email=m.email,
        phone=m.phone,
        address=m.address,
        locality=m.locality,
        location=_location_to_domain(m),
        avatar_url=m.avatar_url,
        category=m.category,
        updated_at=m.updated_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlEntityRepository(EntityRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, entity: RegisteredEntity) -> RegisteredEntity:
        m = RegisteredEntityModel(
            role=entity.role.value,
            name=entity.name,
            shop_name=entity.shop_name,
            email=entity.email,
            phone=entity.phone,
            address=entity.address,
            locality=entity.locality,
            latitude=entity.location.latitude if entity.location else None,
            longitude=entity.location.longitude if entity.location else None,
            avatar_url=entity.avatar_url,
            category=entity.category,
        )
        self._s.add(m)
        await self._s.flush()
        entity.id = m.id
        return entity

    async def get_by_id(self, entity_id: int) -> RegisteredEntity | None:
        m = await self._s.get(RegisteredEntityModel, entity_id)
        return _entity_to_domain(m) if m else None

    async def get_all(self, role: EntityRole | None = None) -> list[RegisteredEntity]:
        stmt = select(RegisteredEntityModel).order_by(RegisteredEntityModel.id)
        if role is not None:
            stmt = stmt.where(RegisteredEntityModel.role == role.value)
        result = await self._s.execute(stmt)
        return [_entity_to_domain(m) for m in result.scalars()]

    async def get_with_location(self, role: EntityRole) -> list[RegisteredEntity]:
        result = await self._s.execute(
            select(RegisteredEntityModel)
            .where(
                RegisteredEntityModel.role == role.value,
                RegisteredEntityModel.latitude.is_not(None),
                RegisteredEntityModel.longitude.is_not(None),
                or_(RegisteredEntityModel.latitude != 0, RegisteredEntityModel.longitude != 0),
            )
            .order_by(RegisteredEntityModel.id)
        )
        return [_entity_to_domain(m) for m in result.scalars()]

    async def update_location(self, entity: RegisteredEntity) -> RegisteredEntity:
        await self._s.execute(
            update(RegisteredEntityModel)
            .where(RegisteredEntityModel.id == entity.id)
            .values(
                latitude=entity.location.latitude if entity.location else None,
                longitude=entity.location.longitude if entity.location else None,
                locality=entity.locality,
                updated_at=entity.updated_at,
            )
        )
        await self._s.flush()
        return entity
