"""GeoPoint value object — immutable, validated (lat, lon) pair."""

from __future__ import annotations

import math
from dataclasses import dataclass

from biznova.domain.errors import InvalidCoordinateError

EARTH_RADIUS_KM = 6371.0


def _coerce(value: object, name: str, bound: float) -> float:
    if isinstance(value, bool) or value is None:
        raise InvalidCoordinateError(f"{name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number) or not -bound <= number <= bound:
        raise InvalidCoordinateError(f"{name} must be within [-{bound:g}, {bound:g}], got {value!r}")
    return number


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", _coerce(self.latitude, "latitude", 90.0))
        object.__setattr__(self, "longitude", _coerce(self.longitude, "longitude", 180.0))

    @property
    def is_placeholder(self) -> bool:
        """True for (0, 0), the value legacy records carry instead of a real fix."""
        return self.latitude == 0.0 and self.longitude == 0.0

    def haversine_km(self, other: GeoPoint) -> float:
        """Calculate distance in km between two points using the Haversine formula."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        # Rounding can push a past 1 for near-antipodal points
        a = min(1.0, a)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c
