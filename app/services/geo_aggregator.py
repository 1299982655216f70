"""
Geo aggregator service - device distribution by country, Indian state and city.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.schemas.device import InstituteMetadata, MergedRecord
from app.schemas.geospatial import (
    ActiveDevicePoint,
    ActiveDevicesResponse,
    CityStat,
    GeoStats,
    LocationPrecision,
    StateTotal,
)
from app.services.pipeline_policy import PipelinePolicy, DEFAULT_POLICY
from app.services.postal_lookup import PostalLookup, clean_pincode
from app.services.record_merger import find_institute, resolve_country
from app.utils.aggregators import normalize_intensity, rank_by_count, summarize_city_points
from app.utils.constants import INDIA, UNKNOWN
from app.utils.date_utils import TimeWindow
from app.utils.normalizers import normalize_place_name

logger = logging.getLogger(__name__)


def bucket_active_devices(
    feed: Mapping[str, Any],
    institute_map: Mapping[str, InstituteMetadata],
) -> Dict[str, int]:
    """
    Fold the live active-device feed into pincode -> device count.

    Feed keys are either six-digit pincodes or institute ids; institute ids
    are mapped to their institute's pincode, summing institutes that share one.
    """
    pincode_counts: Dict[str, int] = {}

    for key, raw_count in feed.items():
        try:
            count = int(raw_count)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric active device count for {key!r}: {raw_count!r}")
            continue

        clean_key = str(key).strip()
        pincode = clean_pincode(clean_key)
        if pincode is None:
            details = find_institute(institute_map, clean_key)
            if details is None or not details.pincode:
                logger.warning(f"Institute details not found for active device key {clean_key!r}")
                continue
            pincode = details.pincode

        pincode_counts[pincode] = pincode_counts.get(pincode, 0) + count

    return pincode_counts


class GeoAggregator:
    """Bucket merged records geographically for the distribution maps."""

    def __init__(self, postal_lookup: PostalLookup, policy: PipelinePolicy = DEFAULT_POLICY):
        self.postal_lookup = postal_lookup
        self.policy = policy

    def record_country(self, record: MergedRecord) -> str:
        """Normalised country, India for bare six-character pincodes, else Unknown."""
        return resolve_country(record.effective_country, record.effective_pincode) or UNKNOWN

    def aggregate(
        self,
        records: Iterable[MergedRecord],
        window: Optional[TimeWindow] = None,
    ) -> GeoStats:
        """
        Count devices by country, Indian state and city.

        Args:
            records: Merged records (not modified)
            window: When given, only records created inside it are counted

        Returns:
            GeoStats with per-city mean coordinates
        """
        by_country: Dict[str, int] = {}
        by_state: Dict[str, int] = {}
        city_points: List[Dict[str, Any]] = []

        for record in records:
            if window is not None and not window.contains(record.created_at, self.policy.missing_timestamp):
                continue

            country = self.record_country(record)
            by_country[country] = by_country.get(country, 0) + 1

            pincode = record.effective_pincode
            if country != INDIA or not pincode:
                continue

            location = self.postal_lookup.resolve(pincode)
            state = normalize_place_name(location.state) if location else UNKNOWN
            by_state[state] = by_state.get(state, 0) + 1

            # Jittered or country-level coordinates never feed a city mean
            if location is not None and location.precision == LocationPrecision.EXACT and location.city != UNKNOWN:
                city_points.append({
                    "city": normalize_place_name(location.city),
                    "state": state,
                    "lat": location.lat,
                    "lng": location.lng,
                })

        by_city = {
            city: CityStat(**stat)
            for city, stat in summarize_city_points(city_points).items()
        }

        return GeoStats(
            by_country=by_country,
            by_indian_state=by_state,
            by_city=by_city,
            date_window_applied=window is not None,
        )

    def active_devices(self, pincode_counts: Mapping[str, int]) -> ActiveDevicesResponse:
        """Place live device counts on the map and total them by state."""
        resolved = []
        for pincode, count in pincode_counts.items():
            location = self.postal_lookup.resolve(pincode)
            if location is None:
                logger.warning(f"Cannot place active devices for pincode {pincode!r}")
                continue
            resolved.append((location, count))

        intensities = normalize_intensity([count for _, count in resolved])
        points = [
            ActiveDevicePoint(
                pincode=location.pincode,
                count=count,
                lat=location.lat,
                lng=location.lng,
                state=normalize_place_name(location.state) or UNKNOWN,
                precision=location.precision,
                intensity=intensity,
            )
            for (location, count), intensity in zip(resolved, intensities)
        ]

        state_counts: Dict[str, int] = {}
        for point in points:
            state_counts[point.state] = state_counts.get(point.state, 0) + point.count

        state_totals = rank_by_count([
            {"state": state, "count": count} for state, count in state_counts.items()
        ])

        return ActiveDevicesResponse(
            locations=points,
            state_totals=[StateTotal(**t) for t in state_totals],
            total_devices=sum(p.count for p in points),
            total_locations=len(points),
        )
