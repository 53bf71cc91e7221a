"""
Tests for time window resolution.
"""

import pytest  # type: ignore
from datetime import datetime, timedelta

import pytz

from src.geomag_dashboard.models import Selection, TimeMode
from src.geomag_dashboard.services import TimeWindowResolver


def utc(*args):
    return datetime(*args, tzinfo=pytz.UTC)


class TestTimeWindowResolver:
    """Test cases for TimeWindowResolver."""

    @pytest.fixture
    def resolver(self):
        return TimeWindowResolver()

    def test_realtime(self, resolver):
        window = resolver.resolve(Selection(channel="H", time_mode=TimeMode.REALTIME),
                                  utc(2021, 1, 1, 12, 3, 30))
        assert window.end == utc(2021, 1, 1, 12, 4)
        assert window.start == utc(2021, 1, 1, 11, 49)
        assert window.use_seconds_resolution
        assert window.refresh_interval_ms == 300000
        assert window.is_live

    def test_pastday(self, resolver):
        window = resolver.resolve(Selection(channel="H", time_mode=TimeMode.PASTDAY),
                                  utc(2021, 1, 1, 12, 3))
        assert window.end == utc(2021, 1, 1, 12, 5)
        assert window.start == utc(2020, 12, 31, 12, 5)
        assert not window.use_seconds_resolution
        assert window.refresh_interval_ms == 300000

    def test_pastday_on_boundary_advances(self, resolver):
        window = resolver.resolve(Selection(channel="H", time_mode=TimeMode.PASTDAY),
                                  utc(2021, 1, 1, 0, 5))
        assert window.end == utc(2021, 1, 1, 0, 10)

    def test_custom_verbatim(self, resolver):
        selection = Selection(
            channel="H",
            time_mode=TimeMode.CUSTOM,
            start_time=utc(2021, 1, 1),
            end_time=utc(2021, 1, 3),
        )
        window = resolver.resolve(selection, utc(2022, 6, 1))
        assert (window.start, window.end) == (utc(2021, 1, 1), utc(2021, 1, 3))
        assert window.refresh_interval_ms is None
        assert not window.is_live
        assert not window.use_seconds_resolution

    @pytest.mark.parametrize("minutes,expected", [(29, True), (30, True), (31, False)])
    def test_seconds_resolution_threshold(self, resolver, minutes, expected):
        start = utc(2021, 1, 1)
        selection = Selection(
            channel="H",
            time_mode=TimeMode.CUSTOM,
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
        )
        assert resolver.resolve(selection, start).use_seconds_resolution is expected

    def test_custom_without_range(self, resolver):
        with pytest.raises(ValueError):
            resolver.resolve(Selection(channel="H", time_mode=TimeMode.CUSTOM), utc(2021, 1, 1))

    def test_configured_refresh_interval(self):
        resolver = TimeWindowResolver(refresh_interval_ms=60000)
        window = resolver.resolve(Selection(channel="H"), utc(2021, 1, 1))
        assert window.refresh_interval_ms == 60000

    def test_custom_window_kept_while_live(self, resolver):
        selection = Selection(
            channel="H",
            time_mode=TimeMode.REALTIME,
            start_time=utc(2021, 1, 1),
            end_time=utc(2021, 1, 3),
        )
        window = resolver.resolve(selection, utc(2021, 6, 1, 0, 0, 1))
        assert window.end == utc(2021, 6, 1, 0, 1)
