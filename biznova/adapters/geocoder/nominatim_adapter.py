"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging
import re

import httpx

from biznova.application.ports.geocoder_port import GeocoderPort
from biznova.config import settings
from biznova.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"

# City centroid fallback for localities OSM search does not resolve
CITY_CENTROIDS: dict[str, GeoPoint] = {
    "gwalior": GeoPoint(latitude=26.218287, longitude=78.182831),
    "delhi": GeoPoint(latitude=28.613939, longitude=77.209021),
    "mumbai": GeoPoint(latitude=19.075984, longitude=72.877656),
    "bengaluru": GeoPoint(latitude=12.971599, longitude=77.594566),
    "bangalore": GeoPoint(latitude=12.971599, longitude=77.594566),
    "kolkata": GeoPoint(latitude=22.572646, longitude=88.363895),
    "chennai": GeoPoint(latitude=13.082680, longitude=80.270718),
    "hyderabad": GeoPoint(latitude=17.385044, longitude=78.486671),
    "pune": GeoPoint(latitude=18.520430, longitude=73.856744),
    "ahmedabad": GeoPoint(latitude=23.022505, longitude=72.571365),
    "jaipur": GeoPoint(latitude=26.912434, longitude=75.787271),
    "lucknow": GeoPoint(latitude=26.846694, longitude=80.946166),
    "indore": GeoPoint(latitude=22.719569, longitude=75.857726),
    "bhopal": GeoPoint(latitude=23.259933, longitude=77.412615),
    "agra": GeoPoint(latitude=27.176670, longitude=78.008075),
    "jhansi": GeoPoint(latitude=25.448426, longitude=78.568459),
    "kanpur": GeoPoint(latitude=26.449923, longitude=80.331874),
    "nagpur": GeoPoint(latitude=21.145800, longitude=79.088155),
}


class NominatimAdapter(GeocoderPort):
    """Nominatim geocoding with city centroid fallback and caching."""

    def __init__(
        self,
        user_agent: str | None = None,
        country_codes: str | None = None,
        timeout: float = 10.0,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._country_codes = country_codes or settings.geocoder_country_codes
        self._timeout = timeout
        self._cache: dict[str, GeoPoint | None] = {}

    async def geocode(self, address: str) -> GeoPoint | None:
        """Geocode an address string to GeoPoint.

        Strategy:
        1. Check in-memory cache
        2. Try Nominatim API
        3. Fall back to city centroid lookup
        """
        cache_key = address.strip().lower()

        if cache_key in self._cache:
            logger.debug("Cache hit for '%s'", address)
            return self._cache[cache_key]

        point = await self._nominatim_lookup(address)
        if point is None:
            point = self._city_centroid_lookup(address)

        self._cache[cache_key] = point
        return point

    async def _nominatim_lookup(self, address: str) -> GeoPoint | None:
        """Query Nominatim API."""
        try:
            async with httpx.AsyncClient() as client:
                for query in self._build_queries(address):
                    response = await client.get(
                        NOMINATIM_URL,
                        params={
                            "q": query,
                            "format": "json",
                            "limit": 1,
                            "countrycodes": self._country_codes,
                        },
                        headers={"User-Agent": self._user_agent},
                        timeout=self._timeout,
                    )
                    response.raise_for_status()
                    results = response.json()

                    if results:
                        point = GeoPoint(
                            latitude=float(results[0]["lat"]),
                            longitude=float(results[0]["lon"]),
                        )
                        logger.info(
                            "Nominatim resolved '%s' (q='%s') → (%f, %f)",
                            address, query, point.latitude, point.longitude,
                        )
                        return point

                logger.info("Nominatim returned no results for '%s'", address)
                return None

        except (httpx.HTTPError, ValueError, KeyError):
            logger.exception("Nominatim API error for '%s'", address)
            return None

    @staticmethod
    def _city_centroid_lookup(address: str) -> GeoPoint | None:
        """Try to match a city name in the address for centroid fallback."""
        address_lower = address.lower()
        for city, point in CITY_CENTROIDS.items():
            if re.search(rf"\b{re.escape(city)}\b", address_lower):
                logger.info("City centroid fallback: '%s' → %s", address, city)
                return point
        logger.warning("No geocoding result for '%s'", address)
        return None

    @staticmethod
    def _build_queries(address: str) -> list[str]:
        """Build a few query variants for better hit rate.

        1) full address
        2) without shop/house numbers and PIN codes (more robust for markets and colonies)
        """
        q1 = address.strip()
        q2 = " ".join(
            p for p in q1.lower().replace(",", " ").split()
            if not any(ch.isdigit() for ch in p)
        ).strip()
        queries = [q1]
        if q2 and q2 != q1.lower():
            queries.append(q2)
        return queries
