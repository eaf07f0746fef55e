"""
Tests for the weather API client.

The HTTP session is mocked; no network access.
"""

from datetime import datetime
from unittest.mock import Mock

import pytest
import requests  # type: ignore

from src.polygon_weather.api import FetchError, OpenMeteoAPI
from src.polygon_weather.core import constants
from src.polygon_weather.models import WeatherSeries


def make_response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    response.url = constants.DEFAULT_API_BASE_URL
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Server Error", response=response
        )
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestFetchSeries:
    """Test cases for WeatherAPI.fetch_series."""

    @pytest.fixture
    def api(self):
        client = OpenMeteoAPI(logger=Mock())
        client.session = Mock()
        return client

    def test_request_parameters(self, api, sample_response):
        api.session.request.return_value = make_response(sample_response)

        api.fetch_series(
            52.5167, 13.4049,
            datetime(2024, 1, 15, 13, 45),
            datetime(2024, 1, 16, 2, 0)
        )

        call = api.session.request.call_args
        assert call.kwargs["method"] == "GET"
        assert call.kwargs["url"] == constants.DEFAULT_API_BASE_URL
        assert call.kwargs["timeout"] == constants.DEFAULT_API_TIMEOUT
        assert call.kwargs["params"] == {
            "latitude": "52.52",
            "longitude": "13.40",
            "start_date": "2024-01-15",
            "end_date": "2024-01-16",
            "hourly": "temperature_2m",
            "timezone": "auto",
        }

    def test_custom_field(self, api):
        payload = {
            "latitude": 1.0,
            "longitude": 2.0,
            "hourly": {"time": ["2024-01-15T00:00"], "relative_humidity_2m": [80]},
        }
        api.session.request.return_value = make_response(payload)

        series = api.fetch_series(1, 2, datetime(2024, 1, 15), datetime(2024, 1, 15),
                                  field="relative_humidity_2m")

        assert api.session.request.call_args.kwargs["params"]["hourly"] == "relative_humidity_2m"
        assert series.values == [80]

    def test_parses_series(self, api, sample_response):
        api.session.request.return_value = make_response(sample_response)

        series = api.fetch_series(52.52, 13.41, datetime(2024, 1, 15), datetime(2024, 1, 15))

        assert isinstance(series, WeatherSeries)
        assert series.field == "temperature_2m"
        assert series.time[0] == "2024-01-15T00:00"
        assert series.values[3] is None
        assert len(series) == 6

    def test_http_error_raises_fetch_error(self, api):
        api.session.request.return_value = make_response(status_code=503)

        with pytest.raises(FetchError) as excinfo:
            api.fetch_series(0, 0, datetime(2024, 1, 15), datetime(2024, 1, 15))

        assert excinfo.value.status_code == 503

    def test_connection_error_raises_fetch_error(self, api):
        api.session.request.side_effect = requests.exceptions.ConnectionError("boom")

        with pytest.raises(FetchError):
            api.fetch_series(0, 0, datetime(2024, 1, 15), datetime(2024, 1, 15))

        assert api.session.request.call_count == 1

    def test_timeout_raises_fetch_error(self, api):
        api.session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(FetchError):
            api.fetch_series(0, 0, datetime(2024, 1, 15), datetime(2024, 1, 15))

    def test_invalid_json_raises_fetch_error(self, api):
        api.session.request.return_value = make_response(json_error=ValueError("not json"))

        with pytest.raises(FetchError):
            api.fetch_series(0, 0, datetime(2024, 1, 15), datetime(2024, 1, 15))

    def test_missing_hourly_block_raises_fetch_error(self, api):
        api.session.request.return_value = make_response({"error": True, "reason": "bad"})

        with pytest.raises(FetchError):
            api.fetch_series(0, 0, datetime(2024, 1, 15), datetime(2024, 1, 15))


class TestWeatherSeries:
    """Test cases for building series from provider responses."""

    def test_empty_hourly_block(self):
        series = WeatherSeries.from_response({"hourly": {"time": []}}, "temperature_2m")
        assert len(series) == 0

    def test_mismatched_arrays(self):
        payload = {"hourly": {"time": ["2024-01-15T00:00"], "temperature_2m": [1.0, 2.0]}}
        with pytest.raises(ValueError):
            WeatherSeries.from_response(payload, "temperature_2m")

    def test_missing_field(self):
        payload = {"hourly": {"time": ["2024-01-15T00:00"], "rain": [0.0]}}
        with pytest.raises(ValueError):
            WeatherSeries.from_response(payload, "temperature_2m")


class TestAPIClientSession:
    """Test cases for session setup."""

    def test_no_retries_by_default(self):
        client = OpenMeteoAPI()
        adapter = client.session.get_adapter("https://archive-api.open-meteo.com")
        assert adapter.max_retries.total == 0
        client.close()

    def test_context_manager_closes_session(self):
        with OpenMeteoAPI() as client:
            client.session = Mock()
        client.session.close.assert_called_once()
