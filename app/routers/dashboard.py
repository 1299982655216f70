"""
Dashboard API endpoints for card metrics.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from app.dependencies import get_dashboard_service
from app.schemas.analytics import AggregatedMetrics
from app.schemas.common import LoadSummary
from app.services.dashboard_service import DashboardService
from app.utils.date_utils import default_date_range, validate_date_range
from datetime import date
from typing import Optional

router = APIRouter()


@router.post("/reload", response_model=LoadSummary)
def reload_dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """
    Re-fetch device records, active devices and institute details.

    Upstream failures do not fail the request; they are listed in `errors`
    and the affected part of the dataset is left empty.
    """
    return service.load()


@router.get("/metrics", response_model=AggregatedMetrics)
def get_dashboard_metrics(
    start_date: Optional[date] = Query(None, description="First day of the window (inclusive)"),
    end_date: Optional[date] = Query(None, description="Last day of the window (inclusive)"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Get card metrics for a date window.

    Returns:
    - Registered devices, unique and high-volume institutes
    - Locked devices and training tickets
    - Organization type and linking source breakdowns
    - Delinked/generated totals from the link stats API
    """
    default_start, default_end = default_date_range()
    start_date = start_date or default_start
    end_date = end_date or default_end

    is_valid, error_msg = validate_date_range(start_date, end_date)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    return service.get_metrics(start_date, end_date)
