"""
Time series resolution module.

Extracts a single scalar from an hourly weather series, either the sample at
an exact hour or the mean over a time range.
"""

import logging
import math
import statistics
from datetime import datetime
from typing import Optional

from ..core.date_utils import DateUtils
from ..models import WeatherSeries


def _is_sample(value: Optional[float]) -> bool:
    return value is not None and not (isinstance(value, float) and math.isnan(value))


class TimeSeriesResolver:
    """Resolve scalar values from hourly series."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize resolver.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def value_at_hour(self, series: WeatherSeries, target: datetime) -> Optional[float]:
        """
        Get the sample for the hour containing target.

        The target is floored to the hour and matched against the series'
        hour strings exactly. A missing hour or a null sample is not an error.

        Args:
            series: Weather series
            target: Target instant (naive wall-clock time)

        Returns:
            Sample value, or None if there is no data for that hour
        """
        key = DateUtils.format_hour(DateUtils.floor_to_hour(target))

        try:
            index = series.time.index(key)
        except ValueError:
            self.logger.debug(f"Time not found in weather data: {key}")
            return None

        value = series.values[index]
        if not _is_sample(value):
            self.logger.debug(f"Null sample at {key}")
            return None

        return value

    def average_over_range(
        self,
        series: WeatherSeries,
        start: datetime,
        end: datetime
    ) -> Optional[float]:
        """
        Mean of all samples with start <= timestamp <= end.

        Null samples are ignored.

        Args:
            series: Weather series
            start: Range start (inclusive)
            end: Range end (inclusive)

        Returns:
            Mean value, or None if no sample qualifies
        """
        values = []
        for time_string, value in zip(series.time, series.values):
            try:
                timestamp = DateUtils.parse_timestamp(time_string)
            except ValueError:
                self.logger.debug(f"Skipping unparseable timestamp: {time_string!r}")
                continue

            if start <= timestamp <= end and _is_sample(value):
                values.append(value)

        if not values:
            self.logger.debug(f"No samples between {start.isoformat()} and {end.isoformat()}")
            return None

        return statistics.fmean(values)
