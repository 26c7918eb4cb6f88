"""Seed database from CSV files.

Usage:
    python -m biznova.tools.seed_db
    python -m biznova.tools.seed_db --data-dir data
    python -m biznova.tools.seed_db --drop  # drop existing data first
    python -m biznova.tools.seed_db --no-geocode
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from biznova.adapters.csv_loader.loader import load_entities
from biznova.adapters.geocoder.google_maps_adapter import GoogleMapsAdapter
from biznova.adapters.geocoder.nominatim_adapter import NominatimAdapter
from biznova.adapters.persistence.database import async_session_factory
from biznova.adapters.persistence.models import RegisteredEntityModel
from biznova.adapters.persistence.repositories import SqlEntityRepository
from biznova.application.ports.geocoder_port import GeocoderPort
from biznova.config import settings
from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.errors import InvalidCoordinateError
from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

CSV_HINTS: dict[EntityRole, list[str]] = {
    EntityRole.RETAILER: ["retailers", "shops", "stores"],
    EntityRole.CUSTOMER: ["customers"],
}


def build_geocoder() -> GeocoderPort:
    if settings.google_maps_api_key:
        logger.info("Using Google Maps for geocoding")
        return GoogleMapsAdapter()
    return NominatimAdapter()


def row_to_entity(row: dict, role: EntityRole) -> RegisteredEntity:
    """Build a domain entity from a loader row; bad coordinates become 'no location'."""
    location = None
    if row["latitude"] is not None and row["longitude"] is not None:
        try:
            location = GeoPoint(latitude=row["latitude"], longitude=row["longitude"])
        except InvalidCoordinateError as e:
            logger.warning("%s '%s': %s, ignoring coordinates", role.value, row["name"], e)
        else:
            if location.is_placeholder:
                location = None
    return RegisteredEntity(
        id=None,
        role=role,
        name=row["name"] or row["shop_name"] or "",
        shop_name=row["shop_name"],
        email=row["email"],
        phone=row["phone"],
        address=row["address"],
        locality=row["locality"],
        location=location,
        avatar_url=row["avatar_url"],
        category=row["category"],
    )


async def _exists(session: AsyncSession, entity: RegisteredEntity) -> bool:
    """Duplicate check: same role and same email, phone, or (name, shop_name)."""
    same_identity = [
        (RegisteredEntityModel.name == entity.name)
        & (RegisteredEntityModel.shop_name.is_not_distinct_from(entity.shop_name))
    ]
    if entity.email:
        same_identity.append(RegisteredEntityModel.email == entity.email)
    if entity.phone:
        same_identity.append(RegisteredEntityModel.phone == entity.phone)
    result = await session.execute(
        select(RegisteredEntityModel.id)
        .where(RegisteredEntityModel.role == entity.role.value, or_(*same_identity))
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def _drop_data(session: AsyncSession) -> None:
    await session.execute(delete(RegisteredEntityModel))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(data_dir: Path, drop: bool = False, geocode: bool = True) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records per role plus geocoding stats."""
    counts = {"retailers": 0, "customers": 0, "geocoded": 0, "skipped": 0}
    geocoder = build_geocoder() if geocode else None

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)
        repo = SqlEntityRepository(session)

        for role, hints in CSV_HINTS.items():
            csv_path = _find_csv(data_dir, hints)
            if csv_path is None:
                logger.info("No %s CSV found in %s — skipping", role.value, data_dir)
                continue

            for row in load_entities(csv_path):
                entity = row_to_entity(row, role)
                if not entity.name:
                    logger.warning("Row without a name in %s, skipping", csv_path.name)
                    counts["skipped"] += 1
                    continue
                if await _exists(session, entity):
                    logger.debug("%s '%s' already exists, skipping", role.value, entity.display_name)
                    counts["skipped"] += 1
                    continue

                if entity.location is None and geocoder is not None:
                    query = entity.build_geocode_query()
                    point = await geocoder.geocode(query) if query else None
                    if point:
                        entity.location = point
                        counts["geocoded"] += 1
                    else:
                        logger.warning(
                            "%s '%s' has no coordinates — it will not appear in nearby search",
                            role.value, entity.display_name,
                        )

                await repo.save(entity)
                counts[f"{role.value}s"] += 1

            await session.commit()

    logger.info(
        "Seed complete: %d retailers, %d customers (%d geocoded, %d skipped)",
        counts["retailers"], counts["customers"], counts["geocoded"], counts["skipped"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        rows = await session.execute(
            select(
                RegisteredEntityModel.role,
                func.count(),
                func.count(RegisteredEntityModel.latitude),
            ).group_by(RegisteredEntityModel.role)
        )

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        for role, total, with_coords in rows:
            print(f"{role:<10} total: {total:<6} with coordinates: {with_coords}/{total}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed BizNova database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help=f"Directory containing CSV files (default: {settings.csv_data_path})",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--no-geocode", action="store_true",
        help="Do not geocode entities that lack coordinates",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop, geocode=not args.no_geocode)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
