"""
Device management API endpoints.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.dependencies import get_dashboard_service
from app.schemas.common import LockActionResult, LockRequest
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.post("/{device_serial_no}/lock", response_model=LockActionResult)
def set_device_lock(
    device_serial_no: str,
    request: LockRequest,
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Lock or unlock a device.

    Resident records are patched only after the upstream API accepts the
    change; a rejected request returns 502 with the failure message and
    leaves local state untouched.
    """
    result = service.set_lock_state(device_serial_no, request.is_locked)
    if not result.success:
        return JSONResponse(status_code=502, content=result.model_dump())
    return result
