"""
Data models for polygon weather coloring.

Contains DTOs for polygons, data sources, color rules and weather series.
"""

from .polygon import (
    OPERATORS,
    ColorRule,
    DataSource,
    Polygon,
    TimeRange,
    default_data_source,
    generate_unique_id,
    initial_color,
)
from .weather import WeatherSeries, PolygonValue

__all__ = [
    "OPERATORS",
    "ColorRule",
    "DataSource",
    "Polygon",
    "TimeRange",
    "WeatherSeries",
    "PolygonValue",
    "default_data_source",
    "generate_unique_id",
    "initial_color",
]
