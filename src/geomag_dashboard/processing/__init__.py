"""
Data processing module for the geomagnetic timeseries dashboard.

Provides time range validation, metadata merging and sorting of series
records, and descriptions of the current selection.
"""

from .description import Description, DescriptionFormatter
from .merger import MetadataMerger, compare_records
from .validator import RangeValidator

__all__ = [
    "Description",
    "DescriptionFormatter",
    "MetadataMerger",
    "compare_records",
    "RangeValidator",
]
