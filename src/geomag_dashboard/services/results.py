"""
Published result set.
"""

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from ..models import SeriesRecord

ResultListener = Callable[[Tuple[SeriesRecord, ...]], None]


class ResultSet:
    """
    Series records currently on display.

    reset() swaps the whole set at once; listeners only ever see complete
    result sets.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._records: Tuple[SeriesRecord, ...] = ()
        self._listeners: List[ResultListener] = []

    @property
    def records(self) -> Tuple[SeriesRecord, ...]:
        return self._records

    def reset(self, records: Iterable[SeriesRecord]) -> None:
        """Replace all records and notify listeners."""
        self._records = tuple(records)
        self.logger.debug(f"Published {len(self._records)} series")
        for listener in list(self._listeners):
            listener(self._records)

    def on_reset(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    def off_reset(self, listener: ResultListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __iter__(self) -> Iterator[SeriesRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
