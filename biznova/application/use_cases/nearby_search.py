"""NearbySearchUseCase — load a location snapshot and rank it around a point."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from biznova.application.ports.entity_repo import EntityRepository
from biznova.domain.policies.proximity_search import (
    DEFAULT_RADIUS_KM,
    ProximityQuery,
    ProximityResult,
    find_nearby,
)
from biznova.domain.value_objects.enums import EntityRole

logger = logging.getLogger(__name__)


@dataclass
class NearbySearchResult:
    """Outcome of one nearby search."""

    query: ProximityQuery
    target_role: EntityRole
    results: list[ProximityResult] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.results)


class NearbySearchUseCase:
    """Finds shops near a customer, or customers near a retailer."""

    def __init__(
        self,
        entity_repo: EntityRepository,
        default_radius_km: float | None = DEFAULT_RADIUS_KM,
    ):
        self._entities = entity_repo
        self._default_radius_km = default_radius_km

    async def execute(
        self,
        latitude: object,
        longitude: object,
        radius_km: object = None,
        target_role: EntityRole = EntityRole.RETAILER,
    ) -> NearbySearchResult:
        """Validate the query, load candidates of ``target_role`` and rank them.

        Validation happens before the repository is touched, so bad input
        never costs a database round-trip. Repository errors propagate as-is.
        """
        query = ProximityQuery.build(
            latitude, longitude, radius_km, default_radius_km=self._default_radius_km,
        )
        logger.info(
            "Searching %ss within %gkm of [%f, %f]",
            target_role.value, query.radius_km,
            query.origin.latitude, query.origin.longitude,
        )

        candidates = await self._entities.get_with_location(target_role)
        results = find_nearby(query.origin, query.radius_km, candidates)

        logger.info(
            "Found %d of %d located %ss within %gkm",
            len(results), len(candidates), target_role.value, query.radius_km,
        )
        return NearbySearchResult(query=query, target_role=target_role, results=results)
