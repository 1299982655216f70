"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class LoadSummary(BaseModel):
    """Outcome of a full fetch-and-merge pass."""
    records_fetched: int
    test_devices_excluded: int
    records_loaded: int
    institutes_requested: int
    institutes_resolved: int
    active_device_locations: int
    loaded_at: Optional[datetime] = None
    errors: List[str] = Field(default_factory=list)


class LockRequest(BaseModel):
    """Desired lock state for a device."""
    is_locked: bool


class LockActionResult(BaseModel):
    """Outcome of a lock/unlock request."""
    success: bool
    message: str
    device_serial_no: str
    is_locked: bool
    records_patched: int = 0


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    records_loaded: int
    last_loaded_at: Optional[datetime] = None
