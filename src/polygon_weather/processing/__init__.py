"""
Data processing module for polygon weather coloring.

Provides scalar resolution from hourly weather series.
"""

from .resolver import TimeSeriesResolver

__all__ = [
    "TimeSeriesResolver",
]
