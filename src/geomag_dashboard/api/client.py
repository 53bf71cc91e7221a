"""
Base API client for the USGS geomagnetism web service.

Owns the HTTP session. Failed GETs are retried for throttling and server
errors; client errors carry the service's own error message.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from .. import __version__

RETRY_STATUSES = (429, 500, 502, 503, 504)


class GeomagServiceError(requests.exceptions.HTTPError):
    """The web service rejected a request."""


class APIClient:
    """Base client for the geomagnetism web service."""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the web service (e.g. https://geomag.usgs.gov/ws)
            timeout: Request timeout in seconds
            max_retries: Retries for throttled or failed GET requests
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = self._create_session(max_retries)

    @staticmethod
    def _create_session(max_retries: int) -> requests.Session:
        """Create a session that retries idempotent requests."""
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=["GET"],
            respect_retry_after_header=True,
        ))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"geomag-dashboard/{__version__}",
        })
        return session

    def url_for(self, endpoint: str) -> str:
        """Absolute URL of an endpoint."""
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @staticmethod
    def _service_message(response: requests.Response) -> str:
        """Error text reported by the service, if any."""
        try:
            body = response.json()
        except ValueError:
            return (getattr(response, "text", "") or "").strip()[:200]
        if isinstance(body, dict):
            metadata = body.get("metadata") or {}
            error = body.get("error") or metadata.get("error") or body.get("message")
            if error:
                return str(error)
        return ""

    def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to the web service.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GeomagServiceError: If the service rejects the request (4xx)
            requests.exceptions.RequestException: On any other request failure
        """
        url = self.url_for(endpoint)
        kwargs.setdefault("verify", self.verify_ssl)
        self.logger.debug(f"{method} {url} {kwargs.get('params') or ''}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            if status is not None and 400 <= status < 500:
                message = self._service_message(e.response) or str(e)
                self.logger.error(f"Request rejected: {method} {url} - {status} {message}")
                raise GeomagServiceError(message, response=e.response) from e
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise
        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise

        return response

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make GET request and decode the JSON body.

        Raises:
            ValueError: If the response body is not JSON
        """
        response = self._make_request("GET", endpoint, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise ValueError(f"Invalid JSON from {self.url_for(endpoint)}: {e}") from e

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
