"""
Schemas package initialization.
"""
from app.schemas.common import (
    LoadSummary,
    LockRequest,
    LockActionResult,
    HealthResponse,
)
from app.schemas.device import (
    DeviceRecord,
    MergedRecord,
    InstituteMetadata,
    InstituteAddress,
    sanitize_device_records,
    sanitize_institute_map,
)
from app.schemas.analytics import (
    AggregatedMetrics,
    InstituteCount,
    OrgTypeBreakdown,
    SourceBreakdown,
    LinkStats,
)
from app.schemas.geospatial import (
    LocationPrecision,
    PostalEntry,
    ResolvedLocation,
    CityStat,
    GeoStats,
    ActiveDevicePoint,
    ActiveDevicesResponse,
    StateTotal,
    StateCentroid,
    PincodeLookupResponse,
)

__all__ = [
    # Common
    "LoadSummary",
    "LockRequest",
    "LockActionResult",
    "HealthResponse",
    # Device
    "DeviceRecord",
    "MergedRecord",
    "InstituteMetadata",
    "InstituteAddress",
    "sanitize_device_records",
    "sanitize_institute_map",
    # Analytics
    "AggregatedMetrics",
    "InstituteCount",
    "OrgTypeBreakdown",
    "SourceBreakdown",
    "LinkStats",
    # Geospatial
    "LocationPrecision",
    "PostalEntry",
    "ResolvedLocation",
    "CityStat",
    "GeoStats",
    "ActiveDevicePoint",
    "ActiveDevicesResponse",
    "StateTotal",
    "StateCentroid",
    "PincodeLookupResponse",
]
