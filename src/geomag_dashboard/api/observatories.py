"""
Observatory operations for the geomagnetism web service.

Handles retrieval of observatory reference data.
"""

import logging
from typing import List, Dict, Any


class ObservatoriesAPI:
    """Mixin for observatory-related API operations."""

    logger: logging.Logger

    def get(self, endpoint: str, params: Any = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_observatory_features(self) -> List[Dict[str, Any]]:
        """
        Get all observatories known to the service.

        Returns:
            List of GeoJSON feature objects
        """
        self.logger.info("Fetching observatories")
        endpoint = "/observatories/"
        result = self.get(endpoint)

        # API returns a GeoJSON FeatureCollection
        if isinstance(result, list):
            return result
        if isinstance(result, dict):
            return result.get("features", [])
        return []
