"""Port interface for turning a shop address or locality into coordinates."""

from abc import ABC, abstractmethod

from biznova.domain.value_objects.geo_point import GeoPoint


class GeocoderPort(ABC):
    """Used when seeding entities that registered without a GPS fix."""

    @abstractmethod
    async def geocode(self, address: str) -> GeoPoint | None:
        """Resolve a free-form address ("Sarafa Bazaar, Lashkar, Gwalior").

        Returns None when nothing matches; adapters log and swallow network
        errors so one bad lookup does not abort a seeding run.
        """
        ...
