"""
Geospatial API endpoints for device distribution maps.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from app.dependencies import get_dashboard_service
from app.schemas.geospatial import (
    ActiveDevicesResponse,
    GeoStats,
    PincodeLookupResponse,
    StateCentroid,
)
from app.services.dashboard_service import DashboardService
from app.utils.constants import STATE_CENTROIDS
from app.utils.date_utils import validate_date_range
from datetime import date
from typing import List, Optional

router = APIRouter()


@router.get("/distribution", response_model=GeoStats)
def get_geo_distribution(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Device counts by country, Indian state and city.

    The date window is only applied when GEO_USES_DATE_WINDOW is enabled;
    `date_window_applied` in the response says whether it was.
    """
    if start_date and end_date:
        is_valid, error_msg = validate_date_range(start_date, end_date)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error_msg)

    return service.get_geo_distribution(start_date, end_date)


@router.get("/active-devices", response_model=ActiveDevicesResponse)
def get_active_devices(service: DashboardService = Depends(get_dashboard_service)):
    """
    Live active devices placed on the map.

    Returns array of {pincode, count, lat, lng, state, precision, intensity}
    objects plus per-state totals, largest first.
    """
    return service.get_active_devices()


@router.get("/pincode/{pincode}", response_model=PincodeLookupResponse)
def resolve_pincode(
    pincode: str,
    service: DashboardService = Depends(get_dashboard_service)
):
    """Resolve a pincode to coordinates; non six-digit input is unresolved."""
    location = service.geo.postal_lookup.resolve(pincode)
    return PincodeLookupResponse(
        pincode=pincode.strip(),
        resolved=location is not None,
        location=location,
    )


@router.get("/centroids/states", response_model=List[StateCentroid])
def get_state_centroids():
    """Get state centroid coordinates for map zoom."""
    return [
        StateCentroid(name=name, lat=coords["lat"], lng=coords["lng"])
        for name, coords in STATE_CENTROIDS.items()
    ]
