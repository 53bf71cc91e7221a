"""
Data models for the geomagnetic timeseries dashboard.

Contains DTOs for selections, time windows, series records and observatories.
"""

from .observatory import Observatory
from .selection import Selection, TimeMode
from .timeseries import SeriesRecord
from .window import ResolvedWindow

__all__ = [
    "Observatory",
    "Selection",
    "TimeMode",
    "SeriesRecord",
    "ResolvedWindow",
]
