"""
Geomagnetic Timeseries Dashboard

This package resolves a channel/observatory and time window selection into
validated time ranges, fetches matching data from the USGS geomagnetism web
service and keeps the results up to date for live time windows.
"""

__version__ = "0.1.0"
__description__ = "Live-updating geomagnetic timeseries dashboard"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "TimeseriesDashboardApp":
        from .main import TimeseriesDashboardApp
        return TimeseriesDashboardApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "TimeseriesDashboardApp",
]
