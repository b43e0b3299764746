"""
HTTP client for the TMDB v3 API.

Wraps a requests.Session configured with the API key, a JSON accept
header and retry handling for rate limits and transient server errors.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cinelog.catalog.base import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


class TMDBClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        total_retries: int = 3,
        backoff_factor: float = 1.0,
        status_forcelist: tuple = (429, 500, 502, 503, 504),
        session: Optional[requests.Session] = None,
    ):
        """
        Initializes a requests.Session with:
            - api_key query parameter
            - JSON accept header
            - HTTPAdapter retrying connection errors and the given status codes

        Args:
            api_key: TMDB v3 API key
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            total_retries: Retries per request before giving up
            backoff_factor: Exponential backoff factor between retries
            status_forcelist: HTTP statuses that trigger a retry
            session: Pre-built session (tests inject a mock here)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

        retry_strategy = Retry(
            total=total_retries,
            connect=total_retries,
            read=total_retries,
            backoff_factor=backoff_factor,
            status_forcelist=status_forcelist,
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.params = {"api_key": api_key}
        self.session.headers.update({"Accept": "application/json"})

    def _handle_response(self, resp: requests.Response) -> Any:
        """
        Check the status code and decode the JSON body.

        Raises:
            CatalogError: For 4xx/5xx statuses or a non-JSON body
        """
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text[:200]}")
            raise CatalogError(
                f"TMDB returned HTTP {resp.status_code}", status_code=resp.status_code
            ) from e

        if not resp.content:
            logger.warning(f"Empty response received for {resp.url}")
            return {}

        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}")
            raise CatalogError(f"Invalid JSON response: {e}") from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform a GET request against the API, returning parsed JSON.

        Raises:
            CatalogError: On connection failures, timeouts, HTTP errors
                or undecodable payloads
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise CatalogError(f"TMDB request failed: {e}") from e
        return self._handle_response(resp)

    def close(self) -> None:
        self.session.close()
