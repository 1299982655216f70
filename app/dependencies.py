"""
Shared dashboard service and its FastAPI dependency.
"""
from functools import lru_cache

from app.services.dashboard_service import DashboardService, build_dashboard_service


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    """
    Dependency for getting the process-wide dashboard service.
    Use with FastAPI's Depends().
    """
    return build_dashboard_service()
