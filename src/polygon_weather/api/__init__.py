"""
API layer for the weather provider.

Provides a low-level HTTP client and the hourly weather operations.
"""

import logging
from typing import Optional

from ..core import constants
from .client import APIClient
from .exceptions import FetchError, PolygonWeatherError
from .weather import WeatherAPI


class OpenMeteoAPI(APIClient, WeatherAPI):
    """
    Unified API client for the Open-Meteo archive.

    Combines the HTTP session handling with the weather operations.
    """

    def __init__(
        self,
        base_url: str = constants.DEFAULT_API_BASE_URL,
        timeout: float = constants.DEFAULT_API_TIMEOUT,
        max_retries: int = constants.DEFAULT_API_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "WeatherAPI",
    "OpenMeteoAPI",
    "FetchError",
    "PolygonWeatherError",
]
