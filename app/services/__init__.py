"""
Services package initialization.
"""
from app.services.pipeline_policy import PipelinePolicy
from app.services.postal_lookup import PostalLookup
from app.services.record_merger import RecordMerger
from app.services.metrics_aggregator import MetricsAggregator
from app.services.geo_aggregator import GeoAggregator
from app.services.upstream_client import DeviceDataClient, UpstreamError
from app.services.dashboard_service import DashboardService, build_dashboard_service

__all__ = [
    "PipelinePolicy",
    "PostalLookup",
    "RecordMerger",
    "MetricsAggregator",
    "GeoAggregator",
    "DeviceDataClient",
    "UpstreamError",
    "DashboardService",
    "build_dashboard_service",
]
