"""
Metadata merge and sort module.

Copies observatory reference data onto series records and orders them.
"""

import logging
from functools import cmp_to_key
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..models import SeriesRecord

if TYPE_CHECKING:
    from ..services.observatories import ObservatoryCollection


def compare_records(a: SeriesRecord, b: SeriesRecord) -> int:
    """
    Compare two records for display order.

    Records are ordered by descending latitude when both have one,
    otherwise by ascending observatory code.
    """
    a_latitude = a.metadata.get("latitude")
    b_latitude = b.metadata.get("latitude")
    if a_latitude is not None and b_latitude is not None:
        if a_latitude > b_latitude:
            return -1
        if b_latitude > a_latitude:
            return 1
        return 0

    a_code = a.metadata.get("observatory") or ""
    b_code = b.metadata.get("observatory") or ""
    if a_code < b_code:
        return -1
    if b_code < a_code:
        return 1
    return 0


class MetadataMerger:
    """Enrich series records with observatory reference data."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize metadata merger.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def merge(
        self,
        records: Iterable[SeriesRecord],
        observatories: "ObservatoryCollection"
    ) -> List[SeriesRecord]:
        """
        Copy name, latitude and longitude from the matching observatory.

        Records are updated in place. Records whose observatory is unknown
        are left unchanged.

        Args:
            records: Series records from the fetch service
            observatories: Reference collection

        Returns:
            The same records, as a list
        """
        records = list(records)
        unknown = set()

        for record in records:
            code = record.metadata.get("observatory")
            observatory = observatories.get(code) if code else None
            if observatory is None:
                unknown.add(code)
                continue
            record.metadata.update({
                "name": observatory.name,
                "latitude": observatory.latitude,
                "longitude": observatory.longitude,
            })

        if unknown:
            self.logger.debug(f"No reference data for: {sorted(str(c) for c in unknown)}")

        return records

    @staticmethod
    def sort(records: Iterable[SeriesRecord]) -> List[SeriesRecord]:
        """
        Sort records by latitude (north first), falling back to observatory code.

        Args:
            records: Series records

        Returns:
            New sorted list (stable)
        """
        return sorted(records, key=cmp_to_key(compare_records))

    def merge_and_sort(
        self,
        records: Iterable[SeriesRecord],
        observatories: "ObservatoryCollection"
    ) -> List[SeriesRecord]:
        """Merge reference metadata, then sort."""
        return self.sort(self.merge(records, observatories))
