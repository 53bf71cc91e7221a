"""
Helper functions for API operations.

Provides utility functions for parsing web service payloads into models.
"""

from typing import Dict, Any, List, Optional

from ..core.date_utils import DateUtils
from ..models import Observatory, SeriesRecord


def _to_float(value: Any) -> Optional[float]:
    """Convert a JSON number to float, keeping gaps as None."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_observatory_feature(feature: Dict[str, Any]) -> Optional[Observatory]:
    """
    Parse one GeoJSON observatory feature.

    Expected format:
    {
        "id": "BOU",
        "properties": {"name": "Boulder", "agency": "USGS", ...},
        "geometry": {"type": "Point", "coordinates": [-105.237, 40.137, 1682]}
    }

    Args:
        feature: GeoJSON feature

    Returns:
        Observatory, or None if the feature has no code
    """
    code = feature.get("id") or feature.get("properties", {}).get("id")
    if not code:
        return None

    properties = feature.get("properties") or {}
    coordinates = (feature.get("geometry") or {}).get("coordinates") or []

    return Observatory(
        code=str(code),
        name=properties.get("name") or str(code),
        longitude=_to_float(coordinates[0]) if len(coordinates) > 0 else None,
        latitude=_to_float(coordinates[1]) if len(coordinates) > 1 else None,
        elevation=_to_float(coordinates[2]) if len(coordinates) > 2 else None,
        agency=properties.get("agency"),
    )


def parse_timeseries_payload(
    payload: Dict[str, Any],
    observatory: str
) -> List[SeriesRecord]:
    """
    Parse a data response into one record per element.

    Expected format:
    {
        "times": ["2021-01-01T00:00:00.000Z", ...],
        "values": [
            {
                "id": "H",
                "metadata": {"element": "H", "network": "NT", "station": "BOU", ...},
                "values": [20831.1, ...]
            }
        ]
    }

    Args:
        payload: JSON payload from the data endpoint
        observatory: Observatory code the payload was requested for

    Returns:
        List of series records

    Raises:
        ValueError: If the payload is malformed
    """
    if "times" not in payload or "values" not in payload:
        raise ValueError(f"Malformed data response for {observatory}")

    times = [DateUtils.parse_iso(t) for t in payload["times"]]

    records = []
    for entry in payload["values"]:
        element_metadata = dict(entry.get("metadata") or {})
        channel = element_metadata.get("element") or entry.get("id")
        if not channel:
            raise ValueError(f"Data response for {observatory} has an unnamed element")

        values = [_to_float(v) for v in entry.get("values", [])]
        if len(values) != len(times):
            raise ValueError(
                f"Element {channel} for {observatory} has {len(values)} values "
                f"for {len(times)} times"
            )

        metadata = {
            key: value
            for key, value in element_metadata.items()
            if key not in ("element",)
        }
        metadata["channel"] = channel
        metadata["observatory"] = observatory

        records.append(SeriesRecord(
            channel=channel,
            metadata=metadata,
            times=list(times),
            values=values,
        ))

    return records
