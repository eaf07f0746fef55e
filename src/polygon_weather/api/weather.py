"""
Hourly weather operations for the Open-Meteo archive API.

Fetches a time series for a coordinate and date range. No caching: every
call hits the network.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import WeatherSeries
from .exceptions import FetchError


class WeatherAPI:
    """Weather-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger
    base_url: str

    def get(self, endpoint: str = "", params: Optional[Dict[str, Any]] = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def fetch_series(
        self,
        latitude: float,
        longitude: float,
        start: datetime,
        end: datetime,
        field: str = constants.DEFAULT_HOURLY_FIELD
    ) -> WeatherSeries:
        """
        Fetch an hourly series for a coordinate and date range.

        Args:
            latitude: Latitude in degrees (sent rounded to 2 decimals)
            longitude: Longitude in degrees (sent rounded to 2 decimals)
            start: First day of the window (only the date part is sent)
            end: Last day of the window (only the date part is sent)
            field: Hourly field name, e.g. 'temperature_2m'

        Returns:
            WeatherSeries with the provider's hour strings and samples

        Raises:
            FetchError: On network failure, non-2xx status or malformed body
        """
        params = {
            "latitude": f"{latitude:.{constants.COORDINATE_DECIMALS}f}",
            "longitude": f"{longitude:.{constants.COORDINATE_DECIMALS}f}",
            "start_date": DateUtils.format_date(start),
            "end_date": DateUtils.format_date(end),
            "hourly": field,
            "timezone": "auto",
        }
        self.logger.debug(
            f"Fetching {field} for ({params['latitude']}, {params['longitude']}) "
            f"{params['start_date']}..{params['end_date']}"
        )

        payload = self.get(params=params)
        if not isinstance(payload, dict):
            raise FetchError("Unexpected weather response shape", url=self.base_url)

        try:
            series = WeatherSeries.from_response(payload, field)
        except ValueError as e:
            self.logger.error(f"Malformed weather response: {e}")
            raise FetchError(f"Malformed weather response: {e}", url=self.base_url) from e

        self.logger.debug(f"Received {len(series)} hourly samples")
        return series
