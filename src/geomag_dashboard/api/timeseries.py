"""
Time series operations for the geomagnetism web service.

Handles retrieval of observatory data.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional, Sequence

from ..core.date_utils import DateUtils


class TimeSeriesAPI:
    """Time series-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_geomag_data(
        self,
        observatory: str,
        elements: Sequence[str],
        starttime: datetime,
        endtime: datetime,
        sampling_period: int = 60,
        data_type: str = "variation"
    ) -> Dict[str, Any]:
        """
        Get data for one observatory.

        Args:
            observatory: Observatory code (e.g., 'BOU')
            elements: Channels to request (e.g., ['H', 'E', 'Z', 'F'])
            starttime: Start of the window (UTC)
            endtime: End of the window (UTC)
            sampling_period: Seconds between samples (1 or 60)
            data_type: Data type (variation, adjusted, quasi-definitive, definitive)

        Returns:
            JSON payload with 'times' and one 'values' entry per element
        """
        self.logger.debug(f"Fetching {','.join(elements)} for {observatory}")
        endpoint = "/data/"

        params: Dict[str, Any] = {
            "id": observatory,
            "elements": ",".join(elements),
            "starttime": DateUtils.to_iso(starttime),
            "endtime": DateUtils.to_iso(endtime),
            "sampling_period": sampling_period,
            "type": data_type,
            "format": "json",
        }

        result = self.get(endpoint, params=params)
        if not isinstance(result, dict):
            raise ValueError(f"Unexpected data response for {observatory}")
        return result
