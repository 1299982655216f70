"""
Tests for name canonicalisation and raw value coercion.
"""
import pytest

from app.utils.normalizers import (
    TRAINING_FLAG_PATHS,
    any_flag,
    clean_identifier,
    coerce_count,
    coerce_flag,
    coerce_timestamp,
    field_path,
    first_present,
    normalize_place_name,
)


class TestNormalizePlaceName:

    @pytest.mark.parametrize("raw, expected", [
        ("UK", "United Kingdom"),
        ("usa", "United States"),
        ("  united   states of america ", "United States"),
        ("uae", "United Arab Emirates"),
        ("india", "India"),
        ("INDIA", "India"),
        ("new zealand", "New Zealand"),
    ])
    def test_aliases_and_title_case(self, raw, expected):
        assert normalize_place_name(raw) == expected

    def test_connector_words_stay_lower_case(self):
        assert normalize_place_name("JAMMU AND KASHMIR") == "Jammu and Kashmir"
        assert normalize_place_name("isle of man") == "Isle of Man"

    def test_leading_connector_is_capitalised(self):
        assert normalize_place_name("the gambia") == "The Gambia"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_input(self, raw):
        assert normalize_place_name(raw) == ""

    def test_idempotent(self):
        once = normalize_place_name("tamil   nadu")
        assert normalize_place_name(once) == once == "Tamil Nadu"


class TestCoercion:

    @pytest.mark.parametrize("value, expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("TRUE", True),
        ("false", False),
        ("yes", False),
        (1, False),
        (None, False),
    ])
    def test_coerce_flag(self, value, expected):
        assert coerce_flag(value) is expected

    @pytest.mark.parametrize("value, expected", [
        (1700000000, 1700000000.0),
        ("1700000000000", 1700000000000.0),
        (" 12.5 ", 12.5),
        ("soon", None),
        (None, None),
        (True, None),
        ({}, None),
    ])
    def test_coerce_timestamp(self, value, expected):
        assert coerce_timestamp(value) == expected

    @pytest.mark.parametrize("value, expected", [
        (7, 7),
        ("12", 12),
        ("12.0", 12),
        (3.9, 3),
        (None, 0),
        ("", 0),
        ("n/a", 0),
        ("nan", 0),
        ("inf", 0),
        (True, 0),
        ([1], 0),
    ])
    def test_coerce_count(self, value, expected):
        assert coerce_count(value, "codes_generated_today") == expected

    def test_clean_identifier(self):
        assert clean_identifier("  I1 ") == "I1"
        assert clean_identifier(110001) == "110001"
        assert clean_identifier("   ") is None
        assert clean_identifier(None) is None


class TestFieldAccess:

    def test_field_path_reads_nested_keys(self):
        record = {"meta": {"training_required": "true"}}
        assert field_path("meta", "training_required")(record) == "true"
        assert field_path("meta", "missing")(record) is None
        assert field_path("training_required", "deeper")({"training_required": True}) is None

    def test_first_present_skips_empty_values(self):
        record = {"a": "", "b": {"c": "value"}}
        assert first_present(record, [field_path("a"), field_path("b", "c")]) == "value"
        assert first_present(record, [field_path("x")]) is None

    @pytest.mark.parametrize("record, expected", [
        ({"training_required": True}, True),
        ({"meta": {"training_required": "True"}}, True),
        ({"meta": {"is_training_required": True}}, True),
        ({"training_required": False, "meta": {"is_training_required": "true"}}, True),
        ({"meta": {"training_required": "no"}}, False),
        ({}, False),
    ])
    def test_training_flag_is_or_across_locations(self, record, expected):
        assert any_flag(record, TRAINING_FLAG_PATHS) is expected
