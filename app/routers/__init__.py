"""
Routers package initialization.
"""
from app.routers import dashboard
from app.routers import geospatial
from app.routers import devices

__all__ = [
    "dashboard",
    "geospatial",
    "devices",
]
