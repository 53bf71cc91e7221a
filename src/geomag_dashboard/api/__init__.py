"""
API layer for the USGS geomagnetism web service.

Provides low-level API client for observatory and time series operations.
"""

import logging
from typing import Optional

from .client import APIClient, GeomagServiceError
from .observatories import ObservatoriesAPI
from .timeseries import TimeSeriesAPI
from . import helpers


class GeomagAPI(APIClient, ObservatoriesAPI, TimeSeriesAPI):
    """
    Unified API client for the geomagnetism web service.

    Combines observatory and time series operations.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "GeomagServiceError",
    "ObservatoriesAPI",
    "TimeSeriesAPI",
    "GeomagAPI",
    "helpers",
]
