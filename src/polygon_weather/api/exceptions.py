"""
Exceptions raised by the API layer.
"""

from typing import Optional


class PolygonWeatherError(Exception):
    """Base class for application errors."""


class FetchError(PolygonWeatherError):
    """Weather provider request failed (transport error, bad status or bad body)."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
