"""
Application-wide constants for polygon weather coloring.

This module defines default values and reserved colors used throughout the application.
"""

# Weather provider
DEFAULT_API_BASE_URL = "https://archive-api.open-meteo.com/v1/archive"
DEFAULT_API_TIMEOUT = 30  # seconds
DEFAULT_API_MAX_RETRIES = 0  # one attempt per fetch
DEFAULT_HOURLY_FIELD = "temperature_2m"
COORDINATE_DECIMALS = 2

# Refresh scheduling
DEFAULT_DEBOUNCE_SECONDS = 2.0

# Date formats
DATE_FORMAT = "%Y-%m-%d"
HOUR_FORMAT = "%Y-%m-%dT%H:00"
CLI_TIME_FORMAT = "%Y-%m-%dT%H:%M"

# Reserved colors
NO_DATA_COLOR = "#d9d9d9"  # neutral gray
NO_MATCH_COLOR = "#d9d9d9"  # no rule matched
FUTURE_COLOR = "#592020"  # dark warning, low contrast
NEW_POLYGON_COLOR = "#1890ff"

# Drawing constraints
MIN_POLYGON_VERTICES = 3
MAX_POLYGON_VERTICES = 12

# Built-in data source
DEFAULT_DATA_SOURCE_ID = "open-meteo-temp"
DEFAULT_DATA_SOURCE_NAME = "Temperature (°C)"
DEFAULT_COLOR_RULES = [
    {"id": "4", "operator": ">=", "value": 30, "color": "#ff4d4f", "label": "Above 30°C"},
    {"id": "3", "operator": ">=", "value": 20, "color": "#faad14", "label": "20-30°C"},
    {"id": "2", "operator": ">=", "value": 0, "color": "#52c41a", "label": "0-20°C"},
    {"id": "1", "operator": "<", "value": 0, "color": "#1890ff", "label": "Below 0°C"},
]

# Default range mode window length
DEFAULT_RANGE_HOURS = 1

# Logging
DEFAULT_LOG_FILE = "logs/polygon_weather.log"
DEFAULT_LOG_LEVEL = "INFO"
