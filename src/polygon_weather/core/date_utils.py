"""
Date and timezone utilities.

The weather provider resolves the timezone of each coordinate itself and returns
hour strings without an offset, so the rest of the application works with naive
wall-clock datetimes. This module converts between those and aware datetimes.
"""

import logging
from datetime import datetime
from typing import Optional

import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, timezone_str: str = "UTC", logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            timezone_str: Timezone of the wall clock (e.g., 'Europe/Berlin')
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timezone = self.parse_timezone(timezone_str)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def now(self) -> datetime:
        """Current wall-clock time in the configured timezone (naive)."""
        return datetime.now(pytz.UTC).astimezone(self.timezone).replace(tzinfo=None)

    def to_local(self, dt: datetime) -> datetime:
        """
        Convert a datetime to naive wall-clock time.

        Aware datetimes are converted to the configured timezone first;
        naive datetimes are assumed to already be wall-clock times.
        """
        if dt.tzinfo is None:
            return dt
        return dt.astimezone(self.timezone).replace(tzinfo=None)

    @staticmethod
    def floor_to_hour(dt: datetime) -> datetime:
        """Truncate minutes, seconds and microseconds."""
        return dt.replace(minute=0, second=0, microsecond=0)

    @staticmethod
    def format_date(dt: datetime) -> str:
        """Format as 'YYYY-MM-DD'."""
        return dt.strftime(constants.DATE_FORMAT)

    @staticmethod
    def format_hour(dt: datetime) -> str:
        """Format as the provider's hourly key, e.g. '2024-01-15T13:00'."""
        return dt.strftime(constants.HOUR_FORMAT)

    @staticmethod
    def parse_timestamp(value: str) -> datetime:
        """
        Parse an ISO-like timestamp such as '2024-01-15T13:00'.

        Offsets, if present, are dropped so the result compares against
        naive wall-clock datetimes.

        Raises:
            ValueError: If the string is not an ISO timestamp
        """
        return datetime.fromisoformat(value).replace(tzinfo=None)
