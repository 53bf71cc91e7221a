"""
Selection data models.

Contains the user's channel/observatory and time window selection.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..core import constants


class TimeMode(Enum):
    """How the boundaries of the time window are derived."""

    REALTIME = "realtime"
    PASTDAY = "pastday"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value) -> "TimeMode":
        """
        Convert a mode name to a TimeMode.

        Args:
            value: TimeMode or its string value

        Returns:
            TimeMode member

        Raises:
            ValueError: If the value is not a known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown time mode: {value!r}")


@dataclass(frozen=True)
class Selection:
    """
    Current dashboard selection.

    Exactly one of channel and observatory is set. Custom start/end times are
    kept while another mode is active so they can be shown again when the
    user switches back to custom.
    """

    channel: Optional[str] = constants.DEFAULT_CHANNEL
    observatory: Optional[str] = None
    time_mode: TimeMode = TimeMode.REALTIME
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def __post_init__(self):
        if (self.channel is None) == (self.observatory is None):
            raise ValueError("Select either a channel or an observatory")
