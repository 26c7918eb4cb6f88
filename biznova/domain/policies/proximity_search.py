"""ProximitySearchPolicy — rank registered entities by distance from a point."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.errors import InvalidCoordinateError, InvalidRadiusError
from biznova.domain.value_objects.geo_point import GeoPoint

DEFAULT_RADIUS_KM = 10.0


@dataclass(frozen=True)
class ProximityQuery:
    """Validated search input: where to search from and how far."""

    origin: GeoPoint
    radius_km: float

    @classmethod
    def build(
        cls,
        latitude: object,
        longitude: object,
        radius_km: object = None,
        default_radius_km: float | None = DEFAULT_RADIUS_KM,
    ) -> ProximityQuery:
        """Validate raw coordinates and radius.

        Raises:
            InvalidCoordinateError: latitude/longitude missing or out of range.
            InvalidRadiusError: radius not usable and no default to fall back to.
        """
        origin = GeoPoint(latitude=latitude, longitude=longitude)
        return cls(origin=origin, radius_km=resolve_radius(radius_km, default_radius_km))


@dataclass(frozen=True)
class ProximityResult:
    entity: RegisteredEntity
    distance_km: float


def resolve_radius(
    radius_km: object,
    default_radius_km: float | None = DEFAULT_RADIUS_KM,
) -> float:
    """Return a positive finite radius, applying the default when none is given.

    Raises:
        InvalidRadiusError: radius is non-numeric, non-finite or <= 0, or it is
            absent and ``default_radius_km`` is None.
    """
    if radius_km is None:
        if default_radius_km is None:
            raise InvalidRadiusError("radius is required")
        radius_km = default_radius_km

    if isinstance(radius_km, bool):
        raise InvalidRadiusError(f"radius must be a number, got {radius_km!r}")
    try:
        value = float(radius_km)
    except (TypeError, ValueError):
        raise InvalidRadiusError(f"radius must be a number, got {radius_km!r}") from None

    if not math.isfinite(value) or value <= 0:
        raise InvalidRadiusError(f"radius must be a positive finite number, got {radius_km!r}")
    return value


def find_nearby(
    origin: GeoPoint,
    radius_km: float | None,
    candidates: Iterable[RegisteredEntity],
    default_radius_km: float | None = DEFAULT_RADIUS_KM,
) -> list[ProximityResult]:
    """Select candidates within ``radius_km`` of ``origin``, nearest first.

    Candidates without a location are skipped. A candidate exactly on the
    radius is kept. Ties keep their input order.

    Args:
        origin: point to measure from.
        radius_km: maximum distance in km; None falls back to ``default_radius_km``.
        candidates: snapshot of entities to evaluate (may be empty).
        default_radius_km: radius used when ``radius_km`` is None.

    Returns:
        ProximityResult list sorted by ascending distance.

    Raises:
        InvalidCoordinateError: origin is missing or not a GeoPoint.
        InvalidRadiusError: see ``resolve_radius``.
    """
    if not isinstance(origin, GeoPoint):
        raise InvalidCoordinateError(f"origin must be a GeoPoint, got {origin!r}")
    radius = resolve_radius(radius_km, default_radius_km)

    in_range = []
    for entity in candidates:
        if not entity.has_gps():
            continue
        distance = origin.haversine_km(entity.location)
        if distance <= radius:
            in_range.append(ProximityResult(entity=entity, distance_km=distance))

    # sorted() is stable: equal distances keep candidate order
    return sorted(in_range, key=lambda r: r.distance_km)
