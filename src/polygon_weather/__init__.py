"""
Polygon Weather Coloring

This package colors user-drawn map polygons by hourly weather values
according to threshold rules, and keeps the colors in sync with a time cursor.
"""

__version__ = "0.1.0"
__description__ = "Color map polygons by hourly weather values"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "PolygonWeatherApp":
        from .main import PolygonWeatherApp
        return PolygonWeatherApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PolygonWeatherApp",
]
