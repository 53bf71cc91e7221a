"""
Resolved time window model.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ResolvedWindow:
    """Concrete time range computed for one sync cycle."""

    start: datetime
    end: datetime
    use_seconds_resolution: bool
    refresh_interval_ms: Optional[int] = None

    @property
    def is_live(self) -> bool:
        """True when the window auto-refreshes."""
        return self.refresh_interval_ms is not None
