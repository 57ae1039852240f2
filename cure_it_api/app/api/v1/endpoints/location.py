"""
Location detection endpoint for API v1.

Public.  Never fails because of the geocoding provider: if it is
unreachable or returns garbage, the default location is returned.
"""

from fastapi import APIRouter, Depends

from cure_it_api.app.api.deps import get_location_service
from cure_it_api.app.schemas.location import LocationRead, LocationRequest
from cure_it_api.app.services.location_service import LocationService

router = APIRouter()


@router.post("/detect", response_model=LocationRead)
async def detect_location(
    payload: LocationRequest,
    locations: LocationService = Depends(get_location_service),
) -> LocationRead:
    return await locations.detect(payload.latitude, payload.longitude)
