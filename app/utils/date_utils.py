"""
Date utility functions for dashboard date-window handling.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from app.config import settings, MissingTimestampPolicy
from app.utils.constants import MILLISECOND_THRESHOLD
from app.utils.normalizers import coerce_timestamp

DateLike = Union[date, datetime]

# Last representable instant of a day at millisecond resolution
END_OF_DAY = time(23, 59, 59, 999000)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """Timezone the day boundaries are evaluated in (defaults to settings)."""
    name = name or settings.DASHBOARD_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_epoch_seconds(timestamp: Any) -> Optional[float]:
    """
    Normalise an epoch timestamp of unknown unit to seconds.

    Values above 10_000_000_000 are taken to be milliseconds.

    Returns:
        Seconds since epoch, or None when the value is missing or not numeric
    """
    ts = coerce_timestamp(timestamp)
    if ts is None:
        return None
    if ts > MILLISECOND_THRESHOLD:
        ts = ts / 1000
    return ts


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start-of-day, end-of-day] window over whole calendar days."""
    start_date: date
    end_date: date
    tz: tzinfo = timezone.utc

    @classmethod
    def from_dates(cls, start: DateLike, end: DateLike, tz: Optional[tzinfo] = None) -> "TimeWindow":
        return cls(_as_date(start), _as_date(end), tz or resolve_timezone())

    @property
    def start(self) -> datetime:
        return datetime.combine(self.start_date, time.min, tzinfo=self.tz)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.end_date, END_OF_DAY, tzinfo=self.tz)

    def timestamps(self) -> Tuple[float, float]:
        """Window bounds as epoch seconds, as the link-stats API expects them."""
        return self.start.timestamp(), self.end.timestamp()

    def contains(
        self,
        timestamp: Any,
        missing_policy: MissingTimestampPolicy = MissingTimestampPolicy.INCLUDE,
    ) -> bool:
        seconds = to_epoch_seconds(timestamp)
        if seconds is None:
            return missing_policy == MissingTimestampPolicy.INCLUDE
        start_ts, end_ts = self.timestamps()
        return start_ts <= seconds <= end_ts


def is_within_range(
    timestamp: Any,
    start: DateLike,
    end: DateLike,
    missing_policy: MissingTimestampPolicy = MissingTimestampPolicy.INCLUDE,
    tz: Optional[tzinfo] = None,
) -> bool:
    """
    Check whether an event timestamp falls inside a whole-day date range.

    Args:
        timestamp: Epoch seconds or milliseconds (ambiguous, detected by size)
        start: First day of the range (from its start of day)
        end: Last day of the range (up to 23:59:59.999)
        missing_policy: Outcome for a missing or non-numeric timestamp
        tz: Timezone of the day boundaries

    Returns:
        True if the timestamp is inside the inclusive range
    """
    return TimeWindow.from_dates(start, end, tz).contains(timestamp, missing_policy)


def validate_date_range(start_date: date, end_date: date) -> Tuple[bool, str]:
    """
    Validate a user-selected date range.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if start_date > end_date:
        return False, f"Start date {start_date} is after end date {end_date}"
    return True, ""


def parse_date_string(date_str: str) -> Optional[date]:
    """
    Parse date string to date object.
    Handles multiple formats.

    Returns:
        Parsed date or None if invalid
    """
    formats = [
        "%Y-%m-%d",  # YYYY-MM-DD (ISO format)
        "%d-%m-%Y",  # DD-MM-YYYY
        "%d/%m/%Y",  # DD/MM/YYYY
        "%Y/%m/%d",  # YYYY/MM/DD
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue

    return None


def default_date_range(today: Optional[date] = None) -> Tuple[date, date]:
    """Dashboard default window: configured start date through today."""
    tz = resolve_timezone()
    end = today or datetime.now(tz).date()
    start = parse_date_string(settings.DEFAULT_START_DATE) or end
    return min(start, end), end
