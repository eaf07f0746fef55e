"""
Application state owner.

Holds polygons, data sources, the time cursor and refresh results, and
notifies subscribers about changes. All reads and writes are synchronous and
go through a lock so the refresh timer thread and callers can share it.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..algorithms.geometry import validate_vertices
from ..core import constants
from ..core.date_utils import DateUtils
from ..models import (
    DataSource,
    Polygon,
    PolygonValue,
    TimeRange,
    default_data_source,
    generate_unique_id,
    initial_color,
)

# Change kinds passed to subscribers
POLYGONS = "polygons"
COLORS = "colors"
DATA_SOURCES = "data_sources"
TIME = "time"
RANGE_MODE = "range_mode"
EDITING = "editing"
VALUES = "values"
LOADING = "loading"

Listener = Callable[[str], None]


class AppState:
    """Mutable store shared by the UI collaborators and the refresh orchestrator."""

    def __init__(
        self,
        current_time: Optional[datetime] = None,
        data_sources: Optional[Sequence[DataSource]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize state.

        Args:
            current_time: Initial time cursor (defaults to now)
            data_sources: Initial data sources (defaults to the built-in temperature source)
            clock: Returns the current wall-clock time (defaults to UTC wall time,
                   the same default as the refresh orchestrator)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        self.clock = clock or DateUtils(logger=self.logger).now

        now = current_time or self.clock()
        self._current_time = now
        self._time_range = TimeRange(now, now + timedelta(hours=constants.DEFAULT_RANGE_HOURS))
        self._range_mode = False
        self._editing = False

        self._polygons: List[Polygon] = []
        sources = data_sources if data_sources is not None else [default_data_source()]
        self._data_sources: Dict[str, DataSource] = {source.id: source for source in sources}

        self._polygon_values: Tuple[PolygonValue, ...] = ()
        self._loading = False
        self._last_error: Optional[str] = None

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        The listener is called with the change kind after each mutation.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(kind)

    # Polygons

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        """Snapshot of the polygon list."""
        with self._lock:
            return tuple(self._polygons)

    def get_polygon(self, polygon_id: str) -> Optional[Polygon]:
        with self._lock:
            return next((p for p in self._polygons if p.id == polygon_id), None)

    def _require_polygon(self, polygon_id: str) -> Polygon:
        polygon = self.get_polygon(polygon_id)
        if polygon is None:
            raise KeyError(f"Unknown polygon: {polygon_id}")
        return polygon

    def add_polygon(self, polygon: Polygon) -> Polygon:
        """
        Add a polygon.

        Raises:
            ValueError: If the vertex count is outside the drawing limits
        """
        validate_vertices(polygon.coordinates)
        with self._lock:
            self._polygons.append(polygon)
        self.logger.info(f"Added polygon '{polygon.name}' ({polygon.id})")
        self._notify(POLYGONS)
        return polygon

    def create_polygon(
        self,
        name: str,
        coordinates: Sequence[Tuple[float, float]],
        data_source_id: str = constants.DEFAULT_DATA_SOURCE_ID
    ) -> Polygon:
        """
        Create and add a polygon from drawn vertices.

        Raises:
            ValueError: If the name is blank or the vertex count is invalid
        """
        name = name.strip()
        if not name:
            raise ValueError("Polygon name must not be empty")

        polygon = Polygon(
            id=generate_unique_id(),
            name=name,
            coordinates=tuple(coordinates),
            data_source=data_source_id,
            color=initial_color(self.get_data_source(data_source_id)),
            created_at=self.clock(),
        )
        return self.add_polygon(polygon)

    def remove_polygon(self, polygon_id: str) -> None:
        with self._lock:
            polygon = self._require_polygon(polygon_id)
            self._polygons.remove(polygon)
        self.logger.info(f"Removed polygon '{polygon.name}' ({polygon_id})")
        self._notify(POLYGONS)

    def rename_polygon(self, polygon_id: str, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Polygon name must not be empty")
        with self._lock:
            self._require_polygon(polygon_id).name = name
        self._notify(POLYGONS)

    def update_polygon_coordinates(
        self,
        polygon_id: str,
        coordinates: Sequence[Tuple[float, float]]
    ) -> None:
        validate_vertices(coordinates)
        with self._lock:
            polygon = self._require_polygon(polygon_id)
            polygon.coordinates = tuple((float(lat), float(lon)) for lat, lon in coordinates)
        self._notify(POLYGONS)

    def update_polygon_color(self, polygon_id: str, color: str) -> bool:
        """
        Set a polygon's display color.

        A polygon removed in the meantime is ignored.

        Returns:
            False if no polygon has that id
        """
        with self._lock:
            polygon = self.get_polygon(polygon_id)
            if polygon is None:
                return False
            polygon.color = color
        self._notify(COLORS)
        return True

    # Data sources

    @property
    def data_sources(self) -> Tuple[DataSource, ...]:
        with self._lock:
            return tuple(self._data_sources.values())

    def get_data_source(self, source_id: str) -> Optional[DataSource]:
        with self._lock:
            return self._data_sources.get(source_id)

    def add_data_source(self, source: DataSource) -> None:
        with self._lock:
            self._data_sources[source.id] = source
        self._notify(DATA_SOURCES)

    def update_data_source(self, source: DataSource) -> None:
        """Replace an existing data source (e.g. after its rules were edited)."""
        with self._lock:
            if source.id not in self._data_sources:
                raise KeyError(f"Unknown data source: {source.id}")
            self._data_sources[source.id] = source
        self._notify(DATA_SOURCES)

    def remove_data_source(self, source_id: str) -> None:
        """Remove a data source. Polygons referencing it are left as they are."""
        with self._lock:
            if self._data_sources.pop(source_id, None) is None:
                raise KeyError(f"Unknown data source: {source_id}")
        self._notify(DATA_SOURCES)

    # Time cursor

    @property
    def current_time(self) -> datetime:
        with self._lock:
            return self._current_time

    def set_current_time(self, value: datetime) -> None:
        with self._lock:
            self._current_time = value
        self._notify(TIME)

    @property
    def time_range(self) -> TimeRange:
        with self._lock:
            return TimeRange(self._time_range.start, self._time_range.end)

    def set_time_range(self, start: datetime, end: datetime) -> None:
        with self._lock:
            self._time_range = TimeRange(start, end)
        self._notify(TIME)

    @property
    def is_range_mode(self) -> bool:
        with self._lock:
            return self._range_mode

    def set_range_mode(self, enabled: bool) -> None:
        with self._lock:
            if self._range_mode == enabled:
                return
            self._range_mode = enabled
        self._notify(RANGE_MODE)

    # Editing

    @property
    def is_editing(self) -> bool:
        with self._lock:
            return self._editing

    def set_editing(self, editing: bool) -> None:
        with self._lock:
            if self._editing == editing:
                return
            self._editing = editing
        self._notify(EDITING)

    # Refresh results

    @property
    def polygon_values(self) -> Tuple[PolygonValue, ...]:
        with self._lock:
            return self._polygon_values

    def set_polygon_values(self, values: Sequence[PolygonValue]) -> None:
        """Replace the whole value list."""
        with self._lock:
            self._polygon_values = tuple(values)
        self._notify(VALUES)

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._loading

    def set_loading(self, loading: bool) -> None:
        with self._lock:
            self._loading = loading
        self._notify(LOADING)

    @property
    def last_error(self) -> Optional[str]:
        with self._lock:
            return self._last_error

    def set_last_error(self, message: Optional[str]) -> None:
        with self._lock:
            self._last_error = message
