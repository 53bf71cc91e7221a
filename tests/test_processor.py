"""
Tests for processing modules.

Tests custom range validation, metadata merging, sorting and descriptions.
"""

import pytest  # type: ignore
from datetime import datetime, timedelta

import pytz

from src.geomag_dashboard.core import constants
from src.geomag_dashboard.models import Observatory, Selection, SeriesRecord, TimeMode
from src.geomag_dashboard.processing import (
    DescriptionFormatter,
    MetadataMerger,
    RangeValidator,
)
from src.geomag_dashboard.services import ObservatoryCollection


def utc(*args):
    return datetime(*args, tzinfo=pytz.UTC)


def record(code, channel="H", **metadata):
    metadata["observatory"] = code
    return SeriesRecord(channel=channel, metadata=metadata)


class TestRangeValidator:
    """Test cases for RangeValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return RangeValidator()

    def test_valid_range(self, validator):
        result = validator.validate("2021-01-01 00:00:00", "2021-01-02 00:00:00")
        assert result == (utc(2021, 1, 1), utc(2021, 1, 2))
        assert validator.error is None

    @pytest.mark.parametrize("days", [1, 7, 30, 31])
    def test_spans_up_to_31_days_pass(self, validator, days):
        start = utc(2021, 3, 1)
        end = start + timedelta(days=days)
        assert validator.validate(start, end) == (start, end)
        assert validator.error is None

    @pytest.mark.parametrize("start,end", [
        (None, "2021-01-02 00:00:00"),
        ("2021-01-01 00:00:00", ""),
        ("not a date", "2021-01-02 00:00:00"),
        ("2021-01-01 00:00:00", "2021-02-30 00:00:00"),
    ])
    def test_invalid_time(self, validator, start, end):
        assert validator.validate(start, end) is None
        assert validator.error == "Please enter a valid time."

    @pytest.mark.parametrize("start,end", [
        ("2021-01-02 00:00:00", "2021-01-01 00:00:00"),
        ("2021-01-01 00:00:00", "2021-01-01 00:00:00"),
    ])
    def test_start_must_be_before_end(self, validator, start, end):
        assert validator.validate(start, end) is None
        assert validator.error == "Start Time must come before End Time."

    def test_order_is_not_swapped(self, validator):
        validator.validate("2021-01-02 00:00:00", "2021-01-01 00:00:00")
        assert validator.validate("2021-01-02 00:00:00", "2021-01-01 00:00:00") is None

    def test_range_over_one_month(self, validator):
        start = utc(2021, 1, 1)
        end = start + timedelta(milliseconds=constants.MAX_CUSTOM_RANGE_MS + 1)
        assert validator.validate(start, end) is None
        assert validator.error == "Please select less than 1 month of data."

    def test_error_is_replaced_not_appended(self, validator):
        validator.validate("bad", "2021-01-01 00:00:00")
        assert validator.error == "Please enter a valid time."

        validator.validate("2021-01-02 00:00:00", "2021-01-01 00:00:00")
        assert validator.error == "Start Time must come before End Time."

        validator.validate("2021-01-01 00:00:00", "2021-01-02 00:00:00")
        assert validator.error is None

    def test_invalid_time_short_circuits(self, validator):
        # an over-long range with an unparsable end only reports the parse error
        assert validator.validate("2020-01-01 00:00:00", "2021-99-01") is None
        assert validator.error == "Please enter a valid time."


class TestMetadataMerger:
    """Test cases for MetadataMerger."""

    @pytest.fixture
    def observatories(self):
        return ObservatoryCollection([
            Observatory("BOU", "Boulder", latitude=40.137, longitude=-105.237),
            Observatory("BRW", "Barrow", latitude=71.322, longitude=-156.623),
            Observatory("HON", "Honolulu", latitude=21.316, longitude=-158.0),
        ])

    @pytest.fixture
    def merger(self):
        return MetadataMerger()

    def test_merge_adds_reference_fields(self, merger, observatories):
        records = merger.merge([record("BOU", network="NT")], observatories)

        metadata = records[0].metadata
        assert metadata["observatory"] == "BOU"
        assert metadata["network"] == "NT"
        assert metadata["name"] == "Boulder"
        assert metadata["latitude"] == 40.137
        assert metadata["longitude"] == -105.237

    def test_merge_leaves_unknown_observatory(self, merger, observatories):
        records = merger.merge([record("XXX")], observatories)
        assert records[0].metadata == {"observatory": "XXX"}

    def test_sort_by_latitude_descending(self, merger):
        records = merger.sort([record("A", latitude=20.0), record("B", latitude=40.0)])
        assert [r.observatory for r in records] == ["B", "A"]

    def test_sort_by_code_without_latitude(self, merger):
        records = merger.sort([record("BOU"), record("ARC")])
        assert [r.observatory for r in records] == ["ARC", "BOU"]

    def test_mixed_latitude_falls_back_to_code(self, merger):
        records = merger.sort([record("ZZZ", latitude=80.0), record("AAA")])
        assert [r.observatory for r in records] == ["AAA", "ZZZ"]

    def test_zero_latitude_is_a_latitude(self, merger):
        records = merger.sort([record("AAA", latitude=0.0), record("ZZZ", latitude=10.0)])
        assert [r.observatory for r in records] == ["ZZZ", "AAA"]

    def test_sort_is_stable(self, merger):
        records = merger.sort([
            record("BOU", channel="H", latitude=40.0),
            record("BOU", channel="E", latitude=40.0),
            record("BOU", channel="Z", latitude=40.0),
        ])
        assert [r.channel for r in records] == ["H", "E", "Z"]

    def test_merge_and_sort(self, merger, observatories):
        records = merger.merge_and_sort(
            [record("HON"), record("XXX"), record("BRW"), record("BOU")],
            observatories
        )
        known = [r.observatory for r in records if r.observatory != "XXX"]
        assert known == ["BRW", "BOU", "HON"]


class TestDescriptionFormatter:
    """Test cases for DescriptionFormatter."""

    @pytest.fixture
    def formatter(self):
        return DescriptionFormatter()

    @pytest.fixture
    def observatories(self):
        return ObservatoryCollection([Observatory("BOU", "Boulder", 40.137, -105.237)])

    def test_observatory_with_name(self, formatter, observatories):
        description = formatter.format(
            Selection(channel=None, observatory="BOU", time_mode=TimeMode.REALTIME),
            observatories
        )
        assert description.title == "BOU Boulder Observatory"
        assert description.subtitle == "Past 15 Minutes, all observatory channels"

    def test_observatory_not_loaded_yet(self, formatter):
        description = formatter.format(
            Selection(channel=None, observatory="BOU", time_mode=TimeMode.PASTDAY),
            ObservatoryCollection()
        )
        assert description.title == "BOU Observatory"
        assert description.subtitle == "Past day, all observatory channels"

    def test_channel(self, formatter, observatories):
        description = formatter.format(
            Selection(channel="H", time_mode=TimeMode.PASTDAY), observatories
        )
        assert description.title == "H Channel"
        assert description.subtitle == "Past day, all observatories with this channel."

    def test_custom_range(self, formatter):
        selection = Selection(
            channel="Z",
            time_mode=TimeMode.CUSTOM,
            start_time=utc(2021, 1, 1, 0, 0, 0, 500000),
            end_time=utc(2021, 1, 2, 12, 30, 0),
        )
        description = formatter.format(selection)
        assert description.subtitle == (
            "2021-01-01 00:00:00 - 2021-01-02 12:30:00, all observatories with this channel."
        )
