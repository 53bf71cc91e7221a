"""
Observatory reference collection.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..models import Observatory


class ObservatoryCollection:
    """Lookup of observatory reference data by code."""

    def __init__(
        self,
        observatories: Optional[Iterable[Observatory]] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, Observatory] = {}
        self._listeners: List[Callable[[], None]] = []
        if observatories is not None:
            self._by_code = {o.code: o for o in observatories}

    def get(self, code: Optional[str]) -> Optional[Observatory]:
        """Get the observatory with this code, or None."""
        if code is None:
            return None
        return self._by_code.get(code)

    def reset(self, observatories: Iterable[Observatory]) -> None:
        """Replace all entries and notify reset listeners."""
        self._by_code = {o.code: o for o in observatories}
        self.logger.info(f"Loaded {len(self._by_code)} observatories")
        for listener in list(self._listeners):
            listener()

    def on_reset(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def off_reset(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
