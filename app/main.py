"""
FastAPI application entry point.

Device Onboarding Analytics - dashboard metrics and maps over the devices
linked through the institute device-linking API.
"""
import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.dependencies import get_dashboard_service
from app.routers import dashboard, devices, geospatial
from app.schemas.common import HealthResponse
from app.services.dashboard_service import DashboardService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **Device Onboarding Analytics API**

    Aggregates device onboarding records from the device-linking API into
    dashboard metrics and geographic distributions.

    ## Key Features

    * **Card Metrics**: Registered, locked and high-volume counts for any date window
    * **Breakdowns**: Organization types and linking sources
    * **Geography**: Devices by country, Indian state and city
    * **Active Devices**: Live device counts placed on the map by pincode
    * **Device Lock**: Lock or unlock a device and see it reflected immediately

    ## Data Freshness

    Device records are fetched once (on first use) and kept in memory.
    Call `POST /api/dashboard/reload` to re-fetch them; changing the date
    window only recomputes the metrics.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers with prefixes
app.include_router(
    dashboard.router,
    prefix=f"{settings.API_PREFIX}/dashboard",
    tags=["Dashboard"]
)
app.include_router(
    geospatial.router,
    prefix=f"{settings.API_PREFIX}/geo",
    tags=["Geospatial Data"]
)
app.include_router(
    devices.router,
    prefix=f"{settings.API_PREFIX}/devices",
    tags=["Devices"]
)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "dashboard": f"{settings.API_PREFIX}/dashboard",
            "geo": f"{settings.API_PREFIX}/geo",
            "devices": f"{settings.API_PREFIX}/devices",
        }
    }


# Health check
@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(service: DashboardService = Depends(get_dashboard_service)):
    """Health check endpoint; reports degraded when the last load had errors."""
    snapshot = service.snapshot
    return HealthResponse(
        status="degraded" if snapshot.errors else "healthy",
        version=settings.VERSION,
        records_loaded=len(snapshot.records),
        last_loaded_at=snapshot.loaded_at,
    )


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "status_code": 500
        }
    )
