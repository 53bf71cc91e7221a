"""
Tests for the selection store and selection event handling.
"""

import pytest  # type: ignore
from datetime import datetime
from unittest.mock import Mock

import pytz

from src.geomag_dashboard.models import Selection, TimeMode
from src.geomag_dashboard.services import ConfigurationStore, SelectionHandler


def utc(*args):
    return datetime(*args, tzinfo=pytz.UTC)


class TestConfigurationStore:
    """Test cases for ConfigurationStore."""

    @pytest.fixture
    def store(self):
        return ConfigurationStore(Selection(channel="H", time_mode=TimeMode.REALTIME))

    def test_get(self, store):
        assert store.get("channel") == "H"
        assert store.get("observatory") is None
        assert store.get("time_mode") is TimeMode.REALTIME

    def test_get_unknown_key(self, store):
        with pytest.raises(KeyError):
            store.get("color")

    def test_set_notifies_once_with_full_update(self, store):
        seen = []
        store.subscribe(lambda selection, changed: seen.append((selection, changed)))

        assert store.set(time_mode="custom", start_time=utc(2021, 1, 1), end_time=utc(2021, 1, 2))

        assert len(seen) == 1
        selection, changed = seen[0]
        assert selection.time_mode is TimeMode.CUSTOM
        assert selection.start_time == utc(2021, 1, 1)
        assert selection.end_time == utc(2021, 1, 2)
        assert changed == {"time_mode", "start_time", "end_time"}

    def test_set_without_change_does_not_notify(self, store):
        listener = Mock()
        store.subscribe(listener)
        assert not store.set(channel="H")
        listener.assert_not_called()

    def test_observatory_clears_channel(self, store):
        store.set(observatory="BOU")
        assert store.get("observatory") == "BOU"
        assert store.get("channel") is None

    def test_channel_clears_observatory(self, store):
        store.set(observatory="BOU")
        store.set(channel="Z")
        assert store.get("channel") == "Z"
        assert store.get("observatory") is None

    def test_both_selected_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.set(channel="H", observatory="BOU")
        assert store.get("channel") == "H"

    def test_clearing_the_only_selection_is_rejected(self, store):
        listener = Mock()
        store.subscribe(listener)

        with pytest.raises(ValueError):
            store.set(channel=None)

        listener.assert_not_called()
        assert store.get("channel") == "H"
        assert store.get("observatory") is None

    def test_default_selection(self):
        selection = ConfigurationStore().snapshot()
        assert selection.channel == "H"
        assert selection.observatory is None
        assert selection.time_mode is TimeMode.REALTIME

    @pytest.mark.parametrize("channel,observatory", [(None, None), ("H", "BOU")])
    def test_selection_requires_exactly_one(self, channel, observatory):
        with pytest.raises(ValueError):
            Selection(channel=channel, observatory=observatory)

    def test_change_made_by_listener_is_delivered_in_order(self, store):
        seen = []

        def first(selection, changed):
            seen.append(("first", selection.channel))
            if selection.channel == "E":
                store.set(channel="Z")

        def second(selection, changed):
            seen.append(("second", selection.channel))

        store.subscribe(first)
        store.subscribe(second)
        store.set(channel="E")

        assert seen == [
            ("first", "E"),
            ("second", "E"),
            ("first", "Z"),
            ("second", "Z"),
        ]
        assert store.get("channel") == "Z"

    def test_unknown_field_is_rejected(self, store):
        with pytest.raises(KeyError):
            store.set({"colour": "red"})

    def test_unknown_time_mode_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.set(time_mode="pasthour")

    def test_unsubscribe(self, store):
        listener = Mock()
        unsubscribe = store.subscribe(listener)
        unsubscribe()
        store.set(channel="E")
        listener.assert_not_called()

    def test_listener_sees_complete_state(self, store):
        snapshots = []
        store.subscribe(lambda selection, changed: snapshots.append(
            (store.get("channel"), store.get("observatory"))
        ))
        store.set(observatory="BOU")
        assert snapshots == [(None, "BOU")]


class TestSelectionHandler:
    """Test cases for SelectionHandler."""

    @pytest.fixture
    def store(self):
        return ConfigurationStore(Selection(channel="H", time_mode=TimeMode.REALTIME))

    @pytest.fixture
    def handler(self, store):
        return SelectionHandler(store)

    def test_select_observatory_then_channel(self, handler, store):
        handler.select_observatory("BOU")
        assert (store.get("channel"), store.get("observatory")) == (None, "BOU")

        handler.select_channel("E")
        assert (store.get("channel"), store.get("observatory")) == ("E", None)

    def test_empty_selection_is_ignored(self, handler, store):
        assert not handler.select_channel("")
        assert not handler.select_observatory(None)
        assert store.get("channel") == "H"

    def test_choosing_custom_does_not_update_store(self, handler, store):
        listener = Mock()
        store.subscribe(listener)

        assert not handler.select_time_mode("custom")

        listener.assert_not_called()
        assert handler.inputs()["time_mode"] is TimeMode.CUSTOM
        assert store.get("time_mode") is TimeMode.REALTIME

    def test_submit_valid_custom_range(self, handler, store):
        assert handler.submit_custom_range("2021-01-01 00:00:00", "2021-01-02 00:00:00")
        assert store.get("time_mode") is TimeMode.CUSTOM
        assert store.get("start_time") == utc(2021, 1, 1)
        assert store.get("end_time") == utc(2021, 1, 2)
        assert handler.error is None

    def test_submit_invalid_custom_range_is_not_committed(self, handler, store):
        listener = Mock()
        store.subscribe(listener)

        assert not handler.submit_custom_range("2021-01-02 00:00:00", "2021-01-01 00:00:00")

        assert handler.error == "Start Time must come before End Time."
        listener.assert_not_called()
        assert store.get("time_mode") is TimeMode.REALTIME
        assert store.get("start_time") is None

    def test_error_cleared_by_valid_submission(self, handler):
        handler.submit_custom_range("2021-01-01 00:00:00", "2021-03-01 00:00:00")
        assert handler.error == "Please select less than 1 month of data."

        handler.submit_custom_range("2021-01-01 00:00:00", "2021-01-31 00:00:00")
        assert handler.error is None

    def test_custom_values_survive_mode_switch(self, handler, store):
        handler.submit_custom_range("2021-01-01 00:00:00", "2021-01-02 00:00:00")

        handler.select_time_mode("realtime")
        assert store.get("time_mode") is TimeMode.REALTIME
        assert store.get("start_time") == utc(2021, 1, 1)

        handler.select_time_mode(TimeMode.CUSTOM)
        inputs = handler.inputs()
        assert inputs["start_time"] == "2021-01-01 00:00:00"
        assert inputs["end_time"] == "2021-01-02 00:00:00"

    def test_inputs_list_selectable_values(self, store):
        handler = SelectionHandler(store, channels=["H", "Z"], observatories=["BOU", "HON"])

        inputs = handler.inputs()

        assert inputs["channels"] == ["H", "Z"]
        assert inputs["observatories"] == ["BOU", "HON"]
        assert inputs["channel"] == "H"
        assert inputs["observatory"] is None

    def test_resubmitting_same_range_after_switch(self, handler, store):
        handler.submit_custom_range("2021-01-01 00:00:00", "2021-01-02 00:00:00")
        handler.select_time_mode("pastday")

        inputs = handler.inputs()
        assert handler.submit_custom_range(inputs["start_time"], inputs["end_time"])
        assert store.get("time_mode") is TimeMode.CUSTOM
