"""
Metrics aggregator service - dashboard card metrics for a date window.
"""
from typing import Dict, Iterable, List, Optional

from app.schemas.analytics import (
    AggregatedMetrics,
    InstituteCount,
    LinkStats,
    OrgTypeBreakdown,
    SourceBreakdown,
)
from app.schemas.device import MergedRecord
from app.services.pipeline_policy import PipelinePolicy, DEFAULT_POLICY
from app.utils.aggregators import rank_by_count
from app.utils.constants import (
    LINKING_SOURCE_OTHER,
    LINKING_SOURCES,
    ORG_TYPE_FALLBACK,
    ORG_TYPE_RULES,
    ORG_TYPES,
    UNKNOWN,
)
from app.utils.date_utils import TimeWindow


def classify_org_type(institute_type: Optional[str]) -> str:
    """Bucket a free-text institute type; the first matching rule wins."""
    text = (institute_type or "").lower()
    for category, keywords in ORG_TYPE_RULES:
        if any(keyword in text for keyword in keywords):
            return category
    return ORG_TYPE_FALLBACK


def linking_source_bucket(linking_source: Optional[str]) -> str:
    """Exact match on the known channels, everything else is "other"."""
    return LINKING_SOURCES.get(linking_source or "", LINKING_SOURCE_OTHER)


class MetricsAggregator:
    """Compute dashboard metrics from merged records."""

    def __init__(self, policy: PipelinePolicy = DEFAULT_POLICY):
        self.policy = policy

    def is_registered(self, record: MergedRecord) -> bool:
        if record.deleted:
            return False
        if self.policy.require_onboarding_setup and not record.onboarding_setup:
            return False
        return True

    def filter_registered(self, records: Iterable[MergedRecord], window: TimeWindow) -> List[MergedRecord]:
        """Registered records created inside the window."""
        return [
            r for r in records
            if self.is_registered(r)
            and window.contains(r.created_at, self.policy.missing_timestamp)
        ]

    def count_locked(self, records: Iterable[MergedRecord], window: TimeWindow) -> int:
        """Distinct devices locked, with the lock time inside the window."""
        locked = set()
        for record in records:
            if not record.is_locked:
                continue
            if record.locked_at is None and self.policy.locked_requires_timestamp:
                continue
            if not window.contains(record.locked_at, self.policy.missing_timestamp):
                continue
            key = record.device_key
            if key is not None:
                locked.add(key)
        return len(locked)

    def institute_counts(self, registered: Iterable[MergedRecord]) -> List[InstituteCount]:
        """Registered devices per institute, in first-seen order."""
        stats: Dict[str, Dict] = {}
        for record in registered:
            if not record.institute_id:
                continue
            entry = stats.setdefault(record.institute_id, {
                "id": record.institute_id,
                "name": record.institute_name or UNKNOWN,
                "count": 0,
            })
            entry["count"] += 1
        return [InstituteCount(**entry) for entry in stats.values()]

    def high_volume(self, institutes: List[InstituteCount]) -> List[InstituteCount]:
        """Institutes strictly above the threshold, largest first."""
        qualifying = [
            i.model_dump() for i in institutes
            if i.count > self.policy.high_volume_threshold
        ]
        return [InstituteCount(**entry) for entry in rank_by_count(qualifying)]

    def org_type_breakdown(self, registered: Iterable[MergedRecord]) -> OrgTypeBreakdown:
        counts = {category: 0 for category in ORG_TYPES}
        per_institute: Dict[str, Dict[str, Dict]] = {category: {} for category in ORG_TYPES}

        for record in registered:
            category = classify_org_type(record.institute_type)
            counts[category] += 1

            if not record.institute_id:
                continue
            entry = per_institute[category].setdefault(record.institute_id, {
                "id": record.institute_id,
                "name": record.institute_name or UNKNOWN,
                "count": 0,
            })
            entry["count"] += 1

        lists = {
            category: [InstituteCount(**e) for e in rank_by_count(list(entries.values()))]
            for category, entries in per_institute.items()
        }
        return OrgTypeBreakdown(counts=counts, lists=lists)

    def source_breakdown(self, registered: Iterable[MergedRecord]) -> SourceBreakdown:
        counts = {"ifp": 0, "web": 0, "mobile": 0, LINKING_SOURCE_OTHER: 0}
        for record in registered:
            counts[linking_source_bucket(record.linking_source)] += 1
        return SourceBreakdown(**counts)

    def aggregate(
        self,
        records: List[MergedRecord],
        window: TimeWindow,
        link_stats: Optional[LinkStats] = None,
        codes_generated_today: int = 0,
    ) -> AggregatedMetrics:
        """
        Build the metrics snapshot for one date window.

        Args:
            records: Every resident merged record (the window is applied here)
            window: Selected date window
            link_stats: Server-side delinked/generated totals for the window,
                passed through unchanged
            codes_generated_today: Passed through from the device feed

        Returns:
            AggregatedMetrics; all zeros for an empty input
        """
        link_stats = link_stats or LinkStats(available=False)
        registered = self.filter_registered(records, window)
        institutes = self.institute_counts(registered)

        return AggregatedMetrics(
            start_date=window.start_date,
            end_date=window.end_date,
            registered=len(registered),
            delinked=link_stats.delinking_count,
            generated=link_stats.linking_count,
            unique_institutes=len(institutes),
            high_volume_institutes=self.high_volume(institutes),
            locked=self.count_locked(records, window),
            training_tickets=sum(1 for r in registered if r.training_required),
            org_types=self.org_type_breakdown(registered),
            by_source=self.source_breakdown(registered),
            codes_generated_today=codes_generated_today,
            link_stats_available=link_stats.available,
        )
