"""
Refresh orchestrator.

Keeps polygon colors in sync with the time cursor: watches the application
state, debounces changes, and recomputes every polygon's color and value in
one sequential pass.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from ..algorithms.classifier import RuleClassifier, format_value
from ..algorithms.geometry import sample_point
from ..api.exceptions import FetchError
from ..core import constants
from ..core.date_utils import DateUtils
from ..core.logger import LoggerContext
from ..models import Polygon, PolygonValue
from ..processing import TimeSeriesResolver
from . import state as changes
from .scheduler import DeferredTask

if TYPE_CHECKING:
    from ..api import WeatherAPI
    from .state import AppState


TRIGGERING_CHANGES = frozenset({
    changes.POLYGONS,
    changes.TIME,
    changes.RANGE_MODE,
    changes.DATA_SOURCES,
})


class RefreshOrchestrator:
    """Schedule and run refresh cycles over all polygons."""

    def __init__(
        self,
        state: "AppState",
        weather_api: "WeatherAPI",
        scheduler: Optional[DeferredTask] = None,
        clock: Optional[Callable[[], datetime]] = None,
        debounce_seconds: float = constants.DEFAULT_DEBOUNCE_SECONDS,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize orchestrator and subscribe to state changes.

        Args:
            state: Application state owner
            weather_api: Client providing fetch_series()
            scheduler: Deferred task used for debouncing
            clock: Returns the current wall-clock time (naive, defaults to state.clock)
            debounce_seconds: Quiescence delay before a triggered cycle runs
            date_utils: Date helper used to normalize aware datetimes
            logger: Logger instance
        """
        self.state = state
        self.weather_api = weather_api
        self.logger = logger or logging.getLogger(__name__)
        self.scheduler = scheduler or DeferredTask(self.logger)
        self.date_utils = date_utils or DateUtils(logger=self.logger)
        self.clock = clock or state.clock
        self.debounce_seconds = debounce_seconds
        self.classifier = RuleClassifier(logger=self.logger)
        self.resolver = TimeSeriesResolver(self.logger)

        self._cycle_lock = threading.Lock()
        self._unsubscribe = state.subscribe(self._on_state_change)

    # Scheduling

    def _on_state_change(self, kind: str) -> None:
        if kind == changes.EDITING:
            if self.state.is_editing:
                self.logger.debug("Polygon editing started, auto refresh paused")
                self.scheduler.cancel()
            return

        if kind not in TRIGGERING_CHANGES:
            return

        if self.state.is_editing:
            self.logger.debug(f"Ignoring '{kind}' change while editing")
            return

        if not self.state.polygons:
            self.scheduler.cancel()
            return

        self.logger.debug(f"'{kind}' changed, refresh in {self.debounce_seconds}s")
        self.scheduler.schedule(self.debounce_seconds, self._on_timer)

    def _on_timer(self) -> None:
        if self.state.is_editing:
            return
        self._run_and_report()

    def refresh_now(self) -> bool:
        """
        Recompute all polygons immediately.

        Does nothing while a polygon is being edited. Cancels any pending
        debounced refresh.

        Returns:
            True if the cycle completed, False if it was skipped or a fetch failed
        """
        if self.state.is_editing:
            self.logger.info("Refresh skipped: polygon editing in progress")
            return False

        self.scheduler.cancel()
        return self._run_and_report()

    def _run_and_report(self) -> bool:
        try:
            self.run_cycle()
        except FetchError as e:
            # Already logged with traceback by the cycle's LoggerContext
            self.state.set_last_error(str(e))
            return False

        self.state.set_last_error(None)
        return True

    def close(self) -> None:
        """Stop watching state and cancel any pending refresh."""
        self._unsubscribe()
        self.scheduler.cancel()

    # Refresh cycle

    def run_cycle(self) -> List[PolygonValue]:
        """
        Recompute color and value for every polygon, one after another.

        Returns:
            The new value list (also written to state)

        Raises:
            FetchError: If any fetch fails. Colors written before the failure
                        are kept and the value list is not replaced.
        """
        with self._cycle_lock:
            polygons = self.state.polygons
            if not polygons:
                return []

            self.state.set_loading(True)
            try:
                with LoggerContext(self.logger, f"refresh of {len(polygons)} polygons"):
                    values = self._refresh_polygons(polygons)
                self.state.set_polygon_values(values)
                return values
            finally:
                self.state.set_loading(False)

    def _query_window(self) -> Tuple[bool, datetime, datetime, datetime]:
        """Range mode flag, fetch window and the current instant, as wall-clock times."""
        current = self.date_utils.to_local(self.state.current_time)
        if self.state.is_range_mode:
            time_range = self.state.time_range
            start = self.date_utils.to_local(time_range.start)
            end = self.date_utils.to_local(time_range.end)
            return True, start, end, current
        return False, current, current, current

    def _refresh_polygons(self, polygons: Tuple[Polygon, ...]) -> List[PolygonValue]:
        range_mode, start, end, current = self._query_window()
        values: List[PolygonValue] = []

        for polygon in polygons:
            value = self._refresh_polygon(polygon, range_mode, start, end, current)
            if value is not None:
                values.append(value)

        return values

    def _refresh_polygon(
        self,
        polygon: Polygon,
        range_mode: bool,
        start: datetime,
        end: datetime,
        current: datetime
    ) -> Optional[PolygonValue]:
        lat, lon = sample_point(polygon.coordinates)

        reference = start if range_mode else current
        if reference > self.clock():
            self.logger.warning(
                f"Future date selected for '{polygon.name}' ({reference.isoformat()}), skipping"
            )
            self.state.update_polygon_color(polygon.id, constants.FUTURE_COLOR)
            return None

        source = self.state.get_data_source(polygon.data_source)
        if source is None:
            self.logger.warning(
                f"Polygon '{polygon.name}' references unknown data source "
                f"'{polygon.data_source}', skipping"
            )
            return None

        series = self.weather_api.fetch_series(lat, lon, start, end, field=source.field)

        if range_mode:
            value = self.resolver.average_over_range(series, start, end)
        else:
            value = self.resolver.value_at_hour(series, DateUtils.floor_to_hour(current))

        if value is None:
            self.logger.info(f"No data for '{polygon.name}'")
            self.state.update_polygon_color(polygon.id, constants.NO_DATA_COLOR)
            return None

        color = self.classifier.classify(value, source.color_rules)
        if not self.state.update_polygon_color(polygon.id, color):
            self.logger.debug(f"Polygon '{polygon.name}' removed during refresh, skipping")
            return None
        self.logger.info(f"'{polygon.name}': {format_value(value)} -> {color}")
        return PolygonValue(polygon_id=polygon.id, value=value, timestamp=current)
