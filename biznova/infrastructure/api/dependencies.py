"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from biznova.adapters.persistence.database import get_session
from biznova.adapters.persistence.repositories import SqlEntityRepository
from biznova.application.ports.entity_repo import EntityRepository
from biznova.application.use_cases.nearby_search import NearbySearchUseCase
from biznova.application.use_cases.update_location import UpdateLocationUseCase
from biznova.config import settings


def get_entity_repo(session: AsyncSession = Depends(get_session)) -> EntityRepository:
    return SqlEntityRepository(session)


def get_nearby_search_uc(
    entity_repo: EntityRepository = Depends(get_entity_repo),
) -> NearbySearchUseCase:
    return NearbySearchUseCase(entity_repo, default_radius_km=settings.default_radius_km)


def get_update_location_uc(
    entity_repo: EntityRepository = Depends(get_entity_repo),
) -> UpdateLocationUseCase:
    return UpdateLocationUseCase(entity_repo)
