"""
Dashboard metrics Pydantic schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Dict
from datetime import date


class InstituteCount(BaseModel):
    """Registered devices attributed to one institute."""
    id: str
    name: str
    count: int


class OrgTypeBreakdown(BaseModel):
    """Device counts and per-institute lists by organization type."""
    counts: Dict[str, int]
    lists: Dict[str, List[InstituteCount]]


class SourceBreakdown(BaseModel):
    """Registered devices by linking channel."""
    ifp: int = 0
    web: int = 0
    mobile: int = 0
    other: int = 0


class LinkStats(BaseModel):
    """Server-side linking/delinking totals for a date window."""
    delinking_count: int = 0
    linking_count: int = 0
    available: bool = True


class AggregatedMetrics(BaseModel):
    """Snapshot of dashboard card metrics for one date window."""
    start_date: date
    end_date: date

    registered: int = 0
    delinked: int = 0  # pass-through from link stats
    generated: int = 0  # pass-through from link stats
    unique_institutes: int = 0
    high_volume_institutes: List[InstituteCount] = Field(default_factory=list)
    locked: int = 0
    training_tickets: int = 0
    org_types: OrgTypeBreakdown
    by_source: SourceBreakdown = Field(default_factory=SourceBreakdown)

    codes_generated_today: int = 0
    link_stats_available: bool = True
