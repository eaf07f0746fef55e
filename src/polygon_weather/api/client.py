"""
Base API client for the weather provider.

Handles HTTP requests, session management, and error handling.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants
from .exceptions import FetchError


class APIClient:
    """Base client for interacting with the weather provider over HTTP."""

    def __init__(
        self,
        base_url: str = constants.DEFAULT_API_BASE_URL,
        timeout: float = constants.DEFAULT_API_TIMEOUT,
        max_retries: int = constants.DEFAULT_API_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Endpoint URL
            timeout: Request timeout in seconds
            max_retries: Retry attempts on 429/5xx (0 means a single attempt)
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({"Accept": "application/json"})

    def _make_request(
        self,
        method: str,
        endpoint: str = "",
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to the provider.

        Args:
            method: HTTP method
            endpoint: Path appended to the base URL (empty for the base URL itself)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            FetchError: On transport failure or non-2xx status
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}" if endpoint else self.base_url
        kwargs.setdefault("verify", self.verify_ssl)

        self.logger.debug(f"{method} {url} params={kwargs.get('params')}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise FetchError(f"Failed to fetch weather data: {e}", url=url, status_code=status) from e

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise FetchError(f"Failed to fetch weather data: {e}", url=url) from e

    def get(self, endpoint: str = "", params: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters

        Returns:
            JSON response as dictionary

        Raises:
            FetchError: On request failure or a body that is not JSON
        """
        response = self._make_request("GET", endpoint, params=params)
        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {response.url}: {e}")
            raise FetchError(f"Invalid JSON response: {e}", url=response.url) from e

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
