"""
Tests for whole-day date windows and timestamp unit detection.
"""
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.config import MissingTimestampPolicy
from app.utils.date_utils import (
    TimeWindow,
    default_date_range,
    is_within_range,
    parse_date_string,
    to_epoch_seconds,
    validate_date_range,
)

JAN_1 = date(2024, 1, 1)
START_OF_DAY = datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
END_OF_DAY = datetime(2024, 1, 1, 23, 59, 59, 999000, tzinfo=timezone.utc).timestamp()


class TestEpochSeconds:

    def test_milliseconds_detected_by_magnitude(self):
        assert to_epoch_seconds(1700000000000) == 1700000000
        assert to_epoch_seconds(1700000000) == 1700000000
        assert to_epoch_seconds("1700000000000") == 1700000000

    def test_missing_or_non_numeric(self):
        assert to_epoch_seconds(None) is None
        assert to_epoch_seconds("not a time") is None


class TestTimeWindow:

    def test_single_day_boundaries_inclusive(self):
        window = TimeWindow.from_dates(JAN_1, JAN_1, timezone.utc)
        assert window.contains(START_OF_DAY)
        assert window.contains(END_OF_DAY)
        assert not window.contains(START_OF_DAY - 0.001)
        assert not window.contains(START_OF_DAY + 86400)

    def test_one_second_past_end_of_day_excluded(self):
        assert not is_within_range(END_OF_DAY + 1, JAN_1, JAN_1, tz=timezone.utc)

    def test_seconds_and_milliseconds_agree(self):
        start, end = date(2023, 11, 14), date(2023, 11, 14)
        seconds = is_within_range(1700000000, start, end, tz=timezone.utc)
        millis = is_within_range(1700000000000, start, end, tz=timezone.utc)
        assert seconds is millis is True

    def test_millisecond_boundaries(self):
        window = TimeWindow.from_dates(JAN_1, JAN_1, timezone.utc)
        assert window.contains(int(START_OF_DAY * 1000))
        assert window.contains(int(END_OF_DAY * 1000))

    @pytest.mark.parametrize("policy, expected", [
        (MissingTimestampPolicy.INCLUDE, True),
        (MissingTimestampPolicy.EXCLUDE, False),
    ])
    def test_missing_timestamp_follows_policy(self, policy, expected):
        window = TimeWindow.from_dates(JAN_1, JAN_1, timezone.utc)
        assert window.contains(None, policy) is expected
        assert window.contains("garbage", policy) is expected

    def test_day_boundaries_follow_timezone(self):
        kolkata = ZoneInfo("Asia/Kolkata")
        window = TimeWindow.from_dates(JAN_1, JAN_1, kolkata)
        # 2023-12-31T20:00Z is 01:30 on Jan 1 in Kolkata
        late_utc = datetime(2023, 12, 31, 20, 0, tzinfo=timezone.utc).timestamp()
        assert window.contains(late_utc)
        assert not TimeWindow.from_dates(JAN_1, JAN_1, timezone.utc).contains(late_utc)

    def test_timestamps_cover_whole_days(self):
        window = TimeWindow.from_dates(JAN_1, date(2024, 1, 2), timezone.utc)
        start_ts, end_ts = window.timestamps()
        assert start_ts == START_OF_DAY
        assert end_ts == pytest.approx(END_OF_DAY + 86400)

    def test_accepts_datetimes(self):
        window = TimeWindow.from_dates(datetime(2024, 1, 1, 15, 0), datetime(2024, 1, 1, 16, 0), timezone.utc)
        assert window.start_date == window.end_date == JAN_1


class TestDateHelpers:

    def test_validate_date_range(self):
        assert validate_date_range(JAN_1, JAN_1) == (True, "")
        is_valid, error_msg = validate_date_range(date(2024, 2, 1), JAN_1)
        assert not is_valid
        assert "after" in error_msg

    @pytest.mark.parametrize("text", ["2024-01-01", "01-01-2024", "01/01/2024", "2024/01/01"])
    def test_parse_date_string(self, text):
        assert parse_date_string(text) == JAN_1

    def test_parse_date_string_invalid(self):
        assert parse_date_string("January first") is None

    def test_default_date_range_ends_today(self):
        start, end = default_date_range(today=date(2024, 6, 30))
        assert end == date(2024, 6, 30)
        assert start <= end
