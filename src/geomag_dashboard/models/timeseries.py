"""
Time series data models.

Contains DTOs for time series-related data structures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List


@dataclass
class SeriesRecord:
    """One channel of data from one observatory."""

    channel: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    times: List[datetime] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)

    @property
    def observatory(self) -> Optional[str]:
        """Observatory code of this record."""
        return self.metadata.get("observatory")

    def __len__(self) -> int:
        return len(self.times)
