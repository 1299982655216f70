"""
Tests for dashboard card metrics.
"""
from datetime import date, datetime, timezone

import pytest

from app.config import MissingTimestampPolicy
from app.schemas.analytics import LinkStats
from app.services.metrics_aggregator import MetricsAggregator, classify_org_type, linking_source_bucket
from app.services.pipeline_policy import PipelinePolicy
from app.utils.date_utils import TimeWindow
from tests.factories import MID_JANUARY, merged_record

JANUARY = TimeWindow.from_dates(date(2024, 1, 1), date(2024, 1, 31), timezone.utc)
MARCH = datetime(2024, 3, 1, tzinfo=timezone.utc).timestamp()


@pytest.fixture
def aggregator(policy):
    return MetricsAggregator(policy)


class TestClassification:

    @pytest.mark.parametrize("institute_type, expected", [
        ("High School", "school"),
        ("Tuition Centre", "coaching"),
        ("coaching", "coaching"),
        ("State University", "college"),
        ("Home", "corporate"),
        ("Business", "corporate"),
        ("Others", "corporate"),
        ("School of Coaching", "school"),
        ("Hospital", "others"),
        (None, "others"),
        ("", "others"),
    ])
    def test_classify_org_type(self, institute_type, expected):
        assert classify_org_type(institute_type) == expected

    @pytest.mark.parametrize("source, expected", [
        ("IFP", "ifp"),
        ("ADMIN_WEB", "web"),
        ("CUSTOMER_ONBOARD_MOBILE", "mobile"),
        ("ifp", "other"),
        (None, "other"),
    ])
    def test_linking_source_bucket(self, source, expected):
        assert linking_source_bucket(source) == expected


class TestMetricsAggregator:

    def test_empty_input_gives_zeros(self, aggregator):
        metrics = aggregator.aggregate([], JANUARY)
        assert metrics.registered == 0
        assert metrics.unique_institutes == 0
        assert metrics.locked == 0
        assert metrics.training_tickets == 0
        assert metrics.high_volume_institutes == []
        assert set(metrics.org_types.counts.values()) == {0}
        assert metrics.by_source.model_dump() == {"ifp": 0, "web": 0, "mobile": 0, "other": 0}

    def test_deleted_and_out_of_window_records(self, aggregator):
        records = [
            merged_record(institute_id="A", institute_type="School"),
            merged_record(_id="rec-2", institute_id="A", institute_type="School", deleted=True),
            merged_record(_id="rec-3", institute_id="B", institute_type="School", c=MARCH),
        ]
        metrics = aggregator.aggregate(records, JANUARY)
        assert metrics.registered == 1
        assert metrics.org_types.counts["school"] == 1
        assert metrics.unique_institutes == 1
        assert metrics.high_volume_institutes == []

    def test_high_volume_threshold_is_strict(self, aggregator):
        records = [merged_record(_id=f"big-{i}", institute_id="BIG1", institute_name="Big One") for i in range(51)]
        records += [merged_record(_id=f"mid-{i}", institute_id="MID", institute_name="Mid") for i in range(50)]
        metrics = aggregator.aggregate(records, JANUARY)
        assert [(i.id, i.count) for i in metrics.high_volume_institutes] == [("BIG1", 51)]

    def test_high_volume_sorted_descending(self):
        aggregator = MetricsAggregator(PipelinePolicy(high_volume_threshold=1))
        records = [merged_record(_id=f"a-{i}", institute_id="A") for i in range(2)]
        records += [merged_record(_id=f"b-{i}", institute_id="B") for i in range(3)]
        metrics = aggregator.aggregate(records, JANUARY)
        assert [i.id for i in metrics.high_volume_institutes] == ["B", "A"]

    def test_missing_created_at_follows_policy(self):
        records = [merged_record(c=None)]
        include = MetricsAggregator(PipelinePolicy(missing_timestamp=MissingTimestampPolicy.INCLUDE))
        exclude = MetricsAggregator(PipelinePolicy(missing_timestamp=MissingTimestampPolicy.EXCLUDE))
        assert include.aggregate(records, JANUARY).registered == 1
        assert exclude.aggregate(records, JANUARY).registered == 0

    def test_onboarding_setup_requirement(self):
        records = [merged_record(onboarding_setup=False), merged_record(_id="rec-2", onboarding_setup="true")]
        strict = MetricsAggregator(PipelinePolicy(require_onboarding_setup=True))
        assert strict.aggregate(records, JANUARY).registered == 1

    def test_locked_counts_distinct_devices_in_window(self, aggregator):
        records = [
            merged_record(is_locked=True, locked_at=MID_JANUARY),
            merged_record(_id="rec-2", is_locked=True, locked_at=MID_JANUARY * 1000),
            merged_record(_id="rec-3", unique_device_id="dev-3", is_locked=True, locked_at=MARCH),
            merged_record(_id="rec-4", unique_device_id="dev-4", is_locked=True, locked_at=None),
            merged_record(_id="rec-5", unique_device_id="dev-5", is_locked=False, locked_at=MID_JANUARY),
            merged_record(_id="rec-6", unique_device_id="dev-6", is_locked="true", locked_at=MID_JANUARY),
        ]
        assert aggregator.aggregate(records, JANUARY).locked == 2

    def test_locked_without_timestamp_when_policy_relaxed(self):
        aggregator = MetricsAggregator(PipelinePolicy(locked_requires_timestamp=False))
        records = [merged_record(is_locked=True, locked_at=None)]
        assert aggregator.aggregate(records, JANUARY).locked == 1

    def test_training_tickets(self, aggregator):
        records = [
            merged_record(training_required=True),
            merged_record(_id="rec-2", meta={"training_required": "true"}),
            merged_record(_id="rec-3", meta={"is_training_required": True}, deleted=True),
            merged_record(_id="rec-4"),
        ]
        assert aggregator.aggregate(records, JANUARY).training_tickets == 2

    def test_org_type_lists_ranked_and_skip_missing_ids(self, aggregator):
        records = [
            merged_record(_id="r1", institute_id="S1", institute_name="One", institute_type="school"),
            merged_record(_id="r2", institute_id="S2", institute_name="Two", institute_type="school"),
            merged_record(_id="r3", institute_id="S2", institute_name="Two", institute_type="school"),
            merged_record(_id="r4", institute_id=None, institute_type="school"),
        ]
        breakdown = aggregator.aggregate(records, JANUARY).org_types
        assert breakdown.counts["school"] == 4
        assert [(i.id, i.count) for i in breakdown.lists["school"]] == [("S2", 2), ("S1", 1)]
        assert sum(breakdown.counts.values()) == 4

    def test_source_breakdown(self, aggregator):
        records = [
            merged_record(_id="r1", linking_source="IFP"),
            merged_record(_id="r2", linking_source="ADMIN_WEB"),
            merged_record(_id="r3", linking_source="CUSTOMER_ONBOARD_MOBILE"),
            merged_record(_id="r4", linking_source="SOMETHING_ELSE"),
        ]
        by_source = aggregator.aggregate(records, JANUARY).by_source
        assert by_source.model_dump() == {"ifp": 1, "web": 1, "mobile": 1, "other": 1}

    def test_link_stats_passed_through(self, aggregator):
        metrics = aggregator.aggregate(
            [], JANUARY, link_stats=LinkStats(delinking_count=3, linking_count=7), codes_generated_today=4
        )
        assert (metrics.delinked, metrics.generated, metrics.codes_generated_today) == (3, 7, 4)
        assert metrics.link_stats_available is True

    def test_missing_link_stats_reported(self, aggregator):
        metrics = aggregator.aggregate([], JANUARY)
        assert metrics.link_stats_available is False
        assert metrics.delinked == metrics.generated == 0

    def test_inputs_not_modified(self, aggregator):
        records = [merged_record(), merged_record(_id="rec-2")]
        before = [r.model_dump() for r in records]
        aggregator.aggregate(records, JANUARY)
        assert [r.model_dump() for r in records] == before
