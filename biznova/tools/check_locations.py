"""Audit stored locations: who is discoverable by nearby search and who is not.

Usage:
    python -m biznova.tools.check_locations
    python -m biznova.tools.check_locations --clear-placeholders
    python -m biznova.tools.check_locations --search-radius 10
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Collection
from dataclasses import dataclass, field

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from biznova.adapters.persistence.database import async_session_factory
from biznova.adapters.persistence.models import RegisteredEntityModel
from biznova.adapters.persistence.repositories import SqlEntityRepository
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.policies.proximity_search import find_nearby
from biznova.domain.value_objects.enums import EntityRole

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

_PLACEHOLDER = and_(RegisteredEntityModel.latitude == 0, RegisteredEntityModel.longitude == 0)


@dataclass
class LocationReport:
    role: EntityRole
    total: int = 0
    with_gps: int = 0
    placeholders: list[RegisteredEntity] = field(default_factory=list)
    missing: list[RegisteredEntity] = field(default_factory=list)

    @property
    def discoverable(self) -> int:
        return self.with_gps


def build_report(
    role: EntityRole,
    entities: list[RegisteredEntity],
    placeholder_ids: Collection[int] = (),
) -> LocationReport:
    """Classify entities into located, placeholder (0, 0) and missing.

    Placeholder rows load without a location, so the caller passes their ids
    to tell them apart from entities that never had coordinates.
    """
    report = LocationReport(role=role, total=len(entities))
    for entity in entities:
        if entity.has_gps():
            report.with_gps += 1
        elif entity.id in placeholder_ids:
            report.placeholders.append(entity)
        else:
            report.missing.append(entity)
    return report


async def _placeholder_ids(session: AsyncSession, role: EntityRole) -> set[int]:
    result = await session.execute(
        select(RegisteredEntityModel.id).where(RegisteredEntityModel.role == role.value, _PLACEHOLDER)
    )
    return set(result.scalars())


def _print_report(report: LocationReport) -> None:
    print(f"\n{report.role.value.upper()}S")
    print(f"  Total:             {report.total}")
    print(f"  Discoverable:      {report.discoverable}")
    print(f"  Placeholder (0,0): {len(report.placeholders)}")
    print(f"  Missing GPS:       {len(report.missing)}")
    for entity in report.missing[:20]:
        print(f"  - missing GPS: #{entity.id} {entity.display_name} (locality: {entity.locality or '-'})")
    if len(report.missing) > 20:
        print(f"  ... and {len(report.missing) - 20} more")


async def clear_placeholders() -> int:
    """Null out (0, 0) coordinates so those rows are plainly unlocated."""
    async with async_session_factory() as session:
        result = await session.execute(
            update(RegisteredEntityModel).where(_PLACEHOLDER).values(latitude=None, longitude=None)
        )
        await session.commit()
    logger.info("Cleared placeholder coordinates on %d entities", result.rowcount)
    return result.rowcount


async def check(search_radius_km: float | None = None) -> dict[EntityRole, LocationReport]:
    async with async_session_factory() as session:
        repo = SqlEntityRepository(session)
        reports = {
            role: build_report(role, await repo.get_all(role), await _placeholder_ids(session, role))
            for role in EntityRole
        }
        retailers = await repo.get_with_location(EntityRole.RETAILER)

    for report in reports.values():
        _print_report(report)

    if search_radius_km is not None:
        if not retailers:
            logger.warning("No located retailers to search around")
        else:
            origin = retailers[0]
            found = find_nearby(origin.location, search_radius_km, retailers)
            print(f"\nSearch around {origin.display_name} within {search_radius_km:g}km: {len(found)} shops")
            for r in found[:10]:
                print(f"  {r.distance_km:7.2f} km  {r.entity.display_name}")

    return reports


def main():
    parser = argparse.ArgumentParser(description="Audit entity locations for nearby search")
    parser.add_argument(
        "--clear-placeholders", action="store_true",
        help="Set (0, 0) coordinates to NULL before reporting",
    )
    parser.add_argument(
        "--search-radius", type=float, default=None,
        help="Run a nearby search (km) around the first located retailer",
    )
    args = parser.parse_args()

    async def run_all():
        if args.clear_placeholders:
            await clear_placeholders()
        await check(args.search_radius)

    asyncio.run(run_all())


if __name__ == "__main__":
    main()
