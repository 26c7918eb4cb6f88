"""Location update endpoint — the caller stores their own GPS fix."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from biznova.application.use_cases.update_location import UpdateLocationUseCase
from biznova.infrastructure.api.dependencies import get_update_location_uc
from biznova.infrastructure.api.security import Caller, get_current_caller

router = APIRouter(prefix="/auth", tags=["location"])


class UpdateLocationRequest(BaseModel):
    latitude: float | None = None
    longitude: float | None = None
    accuracy: float | None = None
    locality: str | None = None


@router.put("/update-location")
async def update_location(
    body: UpdateLocationRequest,
    caller: Caller = Depends(get_current_caller),
    update_uc: UpdateLocationUseCase = Depends(get_update_location_uc),
):
    if body.latitude is None or body.longitude is None:
        raise HTTPException(status_code=400, detail="Latitude and longitude are required")

    entity = await update_uc.execute(
        caller.entity.id, body.latitude, body.longitude, locality=body.locality,
    )
    return {
        "success": True,
        "message": "Location updated successfully",
        "data": {
            "latitude": entity.location.latitude,
            "longitude": entity.location.longitude,
            "locality": entity.locality,
            "updatedAt": entity.updated_at.isoformat() if entity.updated_at else None,
        },
    }
