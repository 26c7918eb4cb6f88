"""RegisteredEntity — a shop or customer that can be discovered by location."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint


@dataclass
class RegisteredEntity:
    id: int | None
    role: EntityRole
    name: str
    shop_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    locality: str | None = None
    location: GeoPoint | None = None
    avatar_url: str | None = None
    category: str | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.shop_name or self.name

    def has_gps(self) -> bool:
        return self.location is not None

    def move_to(self, location: GeoPoint, locality: str | None = None) -> None:
        self.location = location
        self.locality = locality or None
        self.updated_at = datetime.now(timezone.utc)

    def build_geocode_query(self) -> str | None:
        """Address parts joined for geocoding, or None if nothing usable is known."""
        parts = [p for p in (self.address, self.locality) if p]
        if not parts:
            return None
        return ", ".join(parts)
