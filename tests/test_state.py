"""
Tests for the application state owner and the deferred task.
"""

import threading
from datetime import datetime
from unittest.mock import Mock

import pytest
from src.polygon_weather.core import constants
from src.polygon_weather.models import (
    ColorRule,
    DataSource,
    Polygon,
    PolygonValue,
    default_data_source,
)
from src.polygon_weather.services import AppState, DeferredTask
from src.polygon_weather.services import state as changes


TRIANGLE = ((52.5, 13.3), (52.6, 13.4), (52.4, 13.5))


@pytest.fixture
def app_state():
    return AppState(current_time=datetime(2024, 1, 15, 12, 0))


@pytest.fixture
def events(app_state):
    received = []
    app_state.subscribe(received.append)
    return received


class TestAppState:
    """Test cases for AppState."""

    def test_defaults(self, app_state):
        assert app_state.polygons == ()
        assert app_state.is_range_mode is False
        assert app_state.is_editing is False
        assert app_state.is_loading is False
        assert app_state.time_range.start == datetime(2024, 1, 15, 12, 0)
        assert app_state.time_range.end == datetime(2024, 1, 15, 13, 0)
        assert app_state.get_data_source(constants.DEFAULT_DATA_SOURCE_ID) is not None

    def test_create_polygon(self, app_state, events):
        polygon = app_state.create_polygon("  Berlin  ", TRIANGLE)

        assert polygon.name == "Berlin"
        assert polygon.data_source == constants.DEFAULT_DATA_SOURCE_ID
        # First rule color of the default source
        assert polygon.color == default_data_source().color_rules[0].color
        assert app_state.polygons == (polygon,)
        assert events == [changes.POLYGONS]

    def test_create_polygon_unknown_source_uses_fallback_color(self, app_state):
        polygon = app_state.create_polygon("x", TRIANGLE, data_source_id="missing")
        assert polygon.color == constants.NEW_POLYGON_COLOR

    def test_create_polygon_validation(self, app_state):
        with pytest.raises(ValueError):
            app_state.create_polygon("   ", TRIANGLE)
        with pytest.raises(ValueError):
            app_state.create_polygon("two points", TRIANGLE[:2])
        assert app_state.polygons == ()

    def test_rename_and_remove(self, app_state, events):
        polygon = app_state.create_polygon("a", TRIANGLE)

        app_state.rename_polygon(polygon.id, "b")
        assert app_state.get_polygon(polygon.id).name == "b"

        app_state.remove_polygon(polygon.id)
        assert app_state.polygons == ()
        assert events == [changes.POLYGONS] * 3

    def test_unknown_polygon_raises(self, app_state):
        with pytest.raises(KeyError):
            app_state.remove_polygon("nope")
        with pytest.raises(KeyError):
            app_state.rename_polygon("nope", "x")

    def test_color_write_for_unknown_polygon_is_ignored(self, app_state, events):
        assert app_state.update_polygon_color("nope", "#000000") is False
        assert events == []

    def test_clock_stamps_created_polygons(self):
        stamp = datetime(2024, 3, 1, 9, 15)
        state = AppState(clock=lambda: stamp)

        polygon = state.create_polygon("a", TRIANGLE)

        assert polygon.created_at == stamp
        assert state.current_time == stamp

    def test_update_coordinates(self, app_state):
        polygon = app_state.create_polygon("a", TRIANGLE)
        app_state.update_polygon_coordinates(polygon.id, [(0, 0), (0, 1), (1, 1), (1, 0)])
        assert len(app_state.get_polygon(polygon.id).coordinates) == 4

    def test_color_update_has_own_change_kind(self, app_state, events):
        polygon = app_state.create_polygon("a", TRIANGLE)
        app_state.update_polygon_color(polygon.id, "#123456")
        assert app_state.get_polygon(polygon.id).color == "#123456"
        assert events[-1] == changes.COLORS

    def test_polygons_is_snapshot(self, app_state):
        app_state.create_polygon("a", TRIANGLE)
        snapshot = app_state.polygons
        app_state.create_polygon("b", TRIANGLE)
        assert len(snapshot) == 1

    def test_data_source_update_and_remove(self, app_state, events):
        source = DataSource("s", "Source", color_rules=[ColorRule("1", ">", 0, "red", "")])
        app_state.add_data_source(source)
        app_state.update_data_source(DataSource("s", "Renamed"))
        assert app_state.get_data_source("s").name == "Renamed"

        app_state.remove_data_source("s")
        assert app_state.get_data_source("s") is None
        assert events == [changes.DATA_SOURCES] * 3

        with pytest.raises(KeyError):
            app_state.update_data_source(source)

    def test_flags_notify_only_on_change(self, app_state, events):
        app_state.set_range_mode(False)
        app_state.set_editing(False)
        assert events == []

        app_state.set_range_mode(True)
        app_state.set_editing(True)
        assert events == [changes.RANGE_MODE, changes.EDITING]

    def test_time_changes(self, app_state, events):
        app_state.set_current_time(datetime(2024, 2, 1, 8, 0))
        app_state.set_time_range(datetime(2024, 2, 1), datetime(2024, 2, 2))
        assert events == [changes.TIME, changes.TIME]
        assert app_state.current_time == datetime(2024, 2, 1, 8, 0)

    def test_polygon_values_replaced_whole(self, app_state):
        first = [PolygonValue("a", 1.0, datetime(2024, 1, 1))]
        second = [PolygonValue("b", 2.0, datetime(2024, 1, 1))]
        app_state.set_polygon_values(first)
        app_state.set_polygon_values(second)
        assert [v.polygon_id for v in app_state.polygon_values] == ["b"]

    def test_unsubscribe(self, app_state):
        listener = Mock()
        unsubscribe = app_state.subscribe(listener)
        unsubscribe()
        app_state.set_loading(True)
        listener.assert_not_called()


class TestModels:
    """Test cases for model serialization helpers."""

    def test_polygon_round_trip(self):
        polygon = Polygon("p1", "Lake", TRIANGLE, "src", color="#ffffff",
                          created_at=datetime(2024, 1, 1, 9, 30))
        assert Polygon.from_dict(polygon.to_dict()) == polygon

    def test_data_source_from_dict(self):
        source = DataSource.from_dict({
            "id": "hum",
            "name": "Humidity",
            "field": "relative_humidity_2m",
            "color_rules": [{"operator": ">", "value": "80", "color": "#0000ff", "label": "Wet"}],
        })
        assert source.field == "relative_humidity_2m"
        assert source.color_rules[0].value == 80.0
        assert source.color_rules[0].id

    def test_rules_are_immutable(self):
        rule = ColorRule("1", ">", 0, "red", "")
        with pytest.raises(AttributeError):
            rule.color = "blue"


class TestDeferredTask:
    """Test cases for the threading based deferred task."""

    def test_runs_after_delay(self):
        fired = threading.Event()
        task = DeferredTask()

        task.schedule(0.01, fired.set)

        assert fired.wait(2.0)
        assert not task.pending

    def test_reschedule_cancels_previous(self):
        calls = []
        done = threading.Event()
        task = DeferredTask()

        task.schedule(0.2, lambda: calls.append("first"))
        task.schedule(0.01, lambda: (calls.append("second"), done.set()))

        assert done.wait(2.0)
        threading.Event().wait(0.3)
        assert calls == ["second"]

    def test_cancel(self):
        fired = threading.Event()
        task = DeferredTask()

        task.schedule(0.05, fired.set)
        assert task.pending
        task.cancel()

        assert not task.pending
        assert not fired.wait(0.2)
