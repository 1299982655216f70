"""
Utils package initialization.
"""
from app.utils.date_utils import (
    TimeWindow,
    to_epoch_seconds,
    is_within_range,
    validate_date_range,
    default_date_range,
    parse_date_string,
)
from app.utils.aggregators import (
    summarize_city_points,
    rank_by_count,
    normalize_intensity,
)
from app.utils.normalizers import (
    normalize_place_name,
    coerce_flag,
)
from app.utils.constants import (
    STATE_CENTROIDS,
    PINCODE_DIRECTORY,
    PINCODE_PREFIX_CENTERS,
)

__all__ = [
    "TimeWindow",
    "to_epoch_seconds",
    "is_within_range",
    "validate_date_range",
    "default_date_range",
    "parse_date_string",
    "summarize_city_points",
    "rank_by_count",
    "normalize_intensity",
    "normalize_place_name",
    "coerce_flag",
    "STATE_CENTROIDS",
    "PINCODE_DIRECTORY",
    "PINCODE_PREFIX_CENTERS",
]
