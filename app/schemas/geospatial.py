"""
Geospatial Pydantic schemas for map data.
"""
from pydantic import BaseModel
from typing import List, Dict, Optional
from enum import Enum


class LocationPrecision(str, Enum):
    """How a pincode was placed on the map."""
    EXACT = "exact"
    APPROXIMATE = "approximate"  # two-digit prefix centre plus jitter
    COUNTRY = "country"  # centre of India, no state/city


class PostalEntry(BaseModel):
    """Exact pincode directory entry."""
    pincode: str
    state: str
    city: str
    lat: float
    lng: float


class ResolvedLocation(BaseModel):
    """Result of resolving a pincode."""
    pincode: str
    state: str
    city: str
    lat: float
    lng: float
    precision: LocationPrecision


class CityStat(BaseModel):
    """Devices in one city with the mean coordinate of their pincodes."""
    count: int
    lat: float
    lng: float
    state: str


class GeoStats(BaseModel):
    """Device counts by country, Indian state and city."""
    by_country: Dict[str, int]
    by_indian_state: Dict[str, int]
    by_city: Dict[str, CityStat]
    date_window_applied: bool = False


class ActiveDevicePoint(BaseModel):
    """Live device count at one pincode."""
    pincode: str
    count: int
    lat: float
    lng: float
    state: str
    precision: LocationPrecision
    intensity: float  # 0-100 normalized


class StateTotal(BaseModel):
    """Live device count for one state."""
    state: str
    count: int


class ActiveDevicesResponse(BaseModel):
    """Response for the live active-devices map."""
    locations: List[ActiveDevicePoint]
    state_totals: List[StateTotal]
    total_devices: int
    total_locations: int


class StateCentroid(BaseModel):
    """State name with its map centre."""
    name: str
    lat: float
    lng: float


class PincodeLookupResponse(BaseModel):
    """Response for the pincode resolve endpoint."""
    pincode: str
    resolved: bool
    location: Optional[ResolvedLocation] = None
