"""Nearby search endpoint — shops near a customer, customers near a retailer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from biznova.application.use_cases.nearby_search import NearbySearchUseCase
from biznova.domain.policies.proximity_search import ProximityResult
from biznova.domain.value_objects.enums import EntityRole
from biznova.infrastructure.api.dependencies import get_nearby_search_uc
from biznova.infrastructure.api.security import Caller, get_current_caller, require_retailer

router = APIRouter(prefix="/nearby-search", tags=["nearby"])


@router.get("")
async def nearby_search(
    latitude: str | None = Query(default=None),
    longitude: str | None = Query(default=None),
    radius: str | None = Query(default=None, description="Search radius in km (default 10)"),
    target: EntityRole = Query(default=EntityRole.RETAILER),
    caller: Caller = Depends(get_current_caller),
    search_uc: NearbySearchUseCase = Depends(get_nearby_search_uc),
):
    """Find entities of ``target`` role within ``radius`` km, nearest first."""
    if not latitude or not longitude:
        raise HTTPException(status_code=400, detail="Latitude and longitude are required")
    if target is EntityRole.CUSTOMER:
        require_retailer(caller)

    outcome = await search_uc.execute(latitude, longitude, radius or None, target_role=target)
    query = outcome.query

    return {
        "success": True,
        "message": f"Found {outcome.count} {target.value}s within {query.radius_km:g}km",
        "data": {
            "shops": [_serialize_result(r) for r in outcome.results],
            "searchLocation": {
                "latitude": query.origin.latitude,
                "longitude": query.origin.longitude,
            },
            "radius": query.radius_km,
            "count": outcome.count,
        },
    }


def _serialize_result(result: ProximityResult) -> dict:
    e = result.entity
    return {
        "id": e.id,
        "name": e.name,
        "shop_name": e.shop_name,
        "email": e.email,
        "phone": e.phone,
        "address": e.address,
        "locality": e.locality,
        "latitude": e.location.latitude,
        "longitude": e.location.longitude,
        "avatar_url": e.avatar_url,
        "category": e.category,
        "distance": round(result.distance_km, 2),
    }
