"""
Dashboard service - fetch, merge and keep device records resident, and
derive metrics and geography from them on demand.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone, tzinfo
from typing import Dict, List, Optional, Tuple

import numpy as np

from app.config import Settings, settings as default_settings

from app.schemas.analytics import AggregatedMetrics, LinkStats
from app.schemas.common import LoadSummary, LockActionResult
from app.schemas.device import (
    InstituteMetadata,
    MergedRecord,
    sanitize_device_records,
    sanitize_institute_map,
)
from app.schemas.geospatial import ActiveDevicesResponse, GeoStats
from app.services.geo_aggregator import GeoAggregator, bucket_active_devices
from app.services.metrics_aggregator import MetricsAggregator
from app.services.pipeline_policy import PipelinePolicy, DEFAULT_POLICY
from app.services.postal_lookup import PostalLookup, clean_pincode
from app.services.record_merger import RecordMerger, collect_institute_ids, exclude_test_devices
from app.services.upstream_client import DeviceDataClient, UpstreamError
from app.utils.date_utils import TimeWindow, resolve_timezone
from app.utils.normalizers import coerce_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Resident data of one fetch-and-merge pass; replaced, never mutated."""
    records: Tuple[MergedRecord, ...] = ()
    institute_map: Dict[str, InstituteMetadata] = field(default_factory=dict)
    active_pincode_counts: Dict[str, int] = field(default_factory=dict)
    codes_generated_today: int = 0
    loaded_at: Optional[datetime] = None
    errors: Tuple[str, ...] = ()


class DashboardService:
    """Orchestrate the aggregation pipeline over the resident collection."""

    def __init__(
        self,
        client: DeviceDataClient,
        postal_lookup: PostalLookup,
        policy: PipelinePolicy = DEFAULT_POLICY,
        tz: Optional[tzinfo] = None,
    ):
        self.client = client
        self.policy = policy
        self.tz = tz or resolve_timezone()
        self.merger = RecordMerger(normalize_unmatched_country=policy.normalize_unmatched_country)
        self.metrics = MetricsAggregator(policy)
        self.geo = GeoAggregator(postal_lookup, policy)

        self._lock = threading.Lock()
        self._load_lock = threading.Lock()
        self._snapshot = DashboardSnapshot()
        # serial -> (is_locked, locked_at) patched while a load is fetching
        self._pending_patches: Optional[Dict[str, Tuple[bool, Optional[float]]]] = None

    @property
    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self.snapshot.loaded_at is not None

    def ensure_loaded(self) -> None:
        """Run the first load if nothing has been fetched yet."""
        if self.is_loaded:
            return
        with self._load_lock:
            if not self.is_loaded:
                self._load()

    def load(self) -> LoadSummary:
        """
        Fetch device records and the active-device feed concurrently, look up
        their institutes in one batch, merge, and swap in the new snapshot.

        Upstream failures degrade the dataset instead of raising. Loads are
        serialized, and lock changes accepted while one is fetching are
        re-applied to the new snapshot.
        """
        with self._load_lock:
            return self._load()

    def _load(self) -> LoadSummary:
        with self._lock:
            self._pending_patches = {}
        try:
            return self._fetch_and_swap()
        finally:
            with self._lock:
                self._pending_patches = None

    def _fetch_and_swap(self) -> LoadSummary:
        errors: List[str] = []

        with ThreadPoolExecutor(max_workers=2) as pool:
            devices_future = pool.submit(self.client.fetch_device_records)
            active_future = pool.submit(self.client.fetch_active_devices)

            try:
                raw_records, codes_generated_today = devices_future.result()
            except UpstreamError as e:
                logger.error(f"Device records fetch failed: {e}")
                errors.append("Failed to fetch device records")
                raw_records, codes_generated_today = [], 0

            try:
                active_feed = active_future.result()
            except UpstreamError as e:
                logger.warning(f"Active devices fetch failed: {e}")
                errors.append("Failed to fetch active devices")
                active_feed = {}

        records = sanitize_device_records(raw_records)
        kept = records
        if self.policy.exclude_test_devices:
            kept = exclude_test_devices(records, self.policy.test_serial_marker)

        feed_institute_ids = [key for key in active_feed if clean_pincode(key) is None]
        institute_ids = collect_institute_ids(kept, feed_institute_ids)

        try:
            raw_institutes = self.client.fetch_institute_details(institute_ids)
        except UpstreamError as e:
            logger.warning(f"Batch institute fetch failed: {e}")
            errors.append("Failed to fetch institute details")
            raw_institutes = {}
        institute_map = sanitize_institute_map(raw_institutes)

        merged = self.merger.merge(kept, institute_map)
        pincode_counts = bucket_active_devices(active_feed, institute_map)
        loaded_at = datetime.now(timezone.utc)

        with self._lock:
            resident = tuple(merged)
            for serial, (is_locked, locked_at) in self._pending_patches.items():
                resident, _ = _patch_records(resident, serial, is_locked, locked_at)
            self._snapshot = DashboardSnapshot(
                records=resident,
                institute_map=institute_map,
                active_pincode_counts=pincode_counts,
                codes_generated_today=codes_generated_today,
                loaded_at=loaded_at,
                errors=tuple(errors),
            )

        logger.info(
            f"Loaded {len(merged)} device records "
            f"({len(records) - len(kept)} test devices excluded, "
            f"{len(institute_map)}/{len(institute_ids)} institutes resolved, "
            f"{len(pincode_counts)} active device locations)"
        )

        return LoadSummary(
            records_fetched=len(records),
            test_devices_excluded=len(records) - len(kept),
            records_loaded=len(merged),
            institutes_requested=len(institute_ids),
            institutes_resolved=len(institute_map),
            active_device_locations=len(pincode_counts),
            loaded_at=loaded_at,
            errors=errors,
        )

    def window(self, start_date: date, end_date: date) -> TimeWindow:
        return TimeWindow.from_dates(start_date, end_date, self.tz)

    def fetch_link_stats(self, window: TimeWindow) -> LinkStats:
        """Server-side delinked/generated totals; zeros when unavailable."""
        start_ts, end_ts = window.timestamps()
        try:
            obj = self.client.fetch_link_stats(start_ts, end_ts)
        except UpstreamError as e:
            logger.warning(f"Failed to fetch delinking stats: {e}")
            return LinkStats(available=False)

        return LinkStats(
            delinking_count=coerce_count(obj.get("delinking_count"), "delinking_count"),
            linking_count=coerce_count(obj.get("linking_count"), "linking_count"),
        )

    def get_metrics(self, start_date: date, end_date: date) -> AggregatedMetrics:
        """Recompute card metrics for a window from resident records."""
        self.ensure_loaded()
        snapshot = self.snapshot
        window = self.window(start_date, end_date)
        return self.metrics.aggregate(
            list(snapshot.records),
            window,
            link_stats=self.fetch_link_stats(window),
            codes_generated_today=snapshot.codes_generated_today,
        )

    def get_geo_distribution(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> GeoStats:
        """Geo distribution; the window only applies under geo_uses_date_window."""
        self.ensure_loaded()
        window = None
        if self.policy.geo_uses_date_window and start_date and end_date:
            window = self.window(start_date, end_date)
        return self.geo.aggregate(self.snapshot.records, window)

    def get_active_devices(self) -> ActiveDevicesResponse:
        self.ensure_loaded()
        return self.geo.active_devices(self.snapshot.active_pincode_counts)

    def apply_lock_patch(self, device_serial_no: str, is_locked: bool, locked_at: Optional[float]) -> int:
        """
        Patch lock state of resident records for one serial number.

        The snapshot is replaced under the lock, so an aggregation pass sees
        either every patched record or none of them.
        """
        with self._lock:
            if self._pending_patches is not None:
                self._pending_patches[device_serial_no] = (is_locked, locked_at)
            records, patched = _patch_records(self._snapshot.records, device_serial_no, is_locked, locked_at)
            if patched:
                self._snapshot = replace(self._snapshot, records=records)
            return patched

    def set_lock_state(self, device_serial_no: str, is_locked: bool) -> LockActionResult:
        """Request a lock change upstream; patch local state only on success."""
        action = "lock" if is_locked else "unlock"
        try:
            self.client.set_lock_state(device_serial_no, is_locked)
        except UpstreamError as e:
            logger.warning(f"Failed to {action} device {device_serial_no}: {e}")
            return LockActionResult(
                success=False,
                message=f"Failed to {action} device {device_serial_no}: {e}",
                device_serial_no=device_serial_no,
                is_locked=is_locked,
            )

        locked_at = time.time() if is_locked else None
        patched = self.apply_lock_patch(device_serial_no, is_locked, locked_at)
        logger.info(f"Device {device_serial_no} {action}ed ({patched} resident records patched)")

        return LockActionResult(
            success=True,
            message=f"Device {device_serial_no} {action}ed",
            device_serial_no=device_serial_no,
            is_locked=is_locked,
            records_patched=patched,
        )


def _patch_records(
    records: Tuple[MergedRecord, ...],
    device_serial_no: str,
    is_locked: bool,
    locked_at: Optional[float],
) -> Tuple[Tuple[MergedRecord, ...], int]:
    """Copy of records with the lock state of one serial number replaced."""
    patched = 0
    updated: List[MergedRecord] = []
    for record in records:
        if record.device_serial_no == device_serial_no:
            record = record.model_copy(update={"is_locked": is_locked, "locked_at": locked_at})
            patched += 1
        updated.append(record)
    return tuple(updated), patched


def build_dashboard_service(
    config: Optional[Settings] = None,
    rng: Optional[np.random.Generator] = None,
) -> DashboardService:
    """Wire the service from settings."""
    config = config or default_settings
    policy = PipelinePolicy.from_settings(config)
    postal_lookup = PostalLookup.with_table_file(
        config.pincode_table_file,
        rng=rng if rng is not None else np.random.default_rng(config.JITTER_SEED),
        jitter_degrees=policy.jitter_degrees,
        attribute_prefix_state=policy.attribute_prefix_state,
    )
    return DashboardService(
        client=DeviceDataClient(config),
        postal_lookup=postal_lookup,
        policy=policy,
        tz=resolve_timezone(config.DASHBOARD_TIMEZONE),
    )
