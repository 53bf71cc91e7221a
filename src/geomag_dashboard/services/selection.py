"""
Selection event handling.

Maps discrete selection events from a user interface onto store updates.
Custom time ranges are validated before anything is committed.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import TimeMode
from ..processing import RangeValidator
from .config_store import ConfigurationStore


class SelectionHandler:
    """Apply channel, observatory and time selections to the store."""

    def __init__(
        self,
        store: ConfigurationStore,
        channels: Sequence[str] = tuple(constants.DEFAULT_CHANNELS),
        observatories: Sequence[str] = tuple(constants.DEFAULT_OBSERVATORIES),
        validator: Optional[RangeValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize selection handler.

        Args:
            store: Selection store to update
            channels: Selectable channel codes
            observatories: Selectable observatory codes
            validator: Custom range validator
            logger: Logger instance
        """
        self.store = store
        self.channels: List[str] = list(channels)
        self.observatories: List[str] = list(observatories)
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or RangeValidator(logger=self.logger)
        self.editing_custom = store.get("time_mode") is TimeMode.CUSTOM

    @property
    def error(self) -> Optional[str]:
        """Current validation error message, if any."""
        return self.validator.error

    def select_channel(self, channel: str) -> bool:
        """
        Show one channel from all observatories.

        Args:
            channel: Channel code

        Returns:
            True if the selection changed
        """
        if not channel:
            return False
        return self.store.set(channel=channel, observatory=None)

    def select_observatory(self, observatory: str) -> bool:
        """
        Show all channels of one observatory.

        Args:
            observatory: Observatory code

        Returns:
            True if the selection changed
        """
        if not observatory:
            return False
        return self.store.set(channel=None, observatory=observatory)

    def select_time_mode(self, time_mode: Any) -> bool:
        """
        Switch the time mode.

        Choosing custom only opens the start/end inputs; the store changes
        once a valid range is submitted.

        Args:
            time_mode: TimeMode or its name

        Returns:
            True if the selection changed
        """
        mode = TimeMode.parse(time_mode)
        if mode is TimeMode.CUSTOM:
            self.editing_custom = True
            return False

        self.editing_custom = False
        return self.store.set(time_mode=mode)

    def submit_custom_range(self, start_time: Any, end_time: Any) -> bool:
        """
        Validate and commit a custom time range.

        Args:
            start_time: Start time ("YYYY-MM-DD HH:MM:SS", UTC) or datetime
            end_time: End time ("YYYY-MM-DD HH:MM:SS", UTC) or datetime

        Returns:
            True if the range was valid and committed
        """
        self.editing_custom = True
        validated = self.validator.validate(start_time, end_time)
        if validated is None:
            self.logger.info(f"Custom range not applied: {self.validator.error}")
            return False

        start, end = validated
        self.store.set(start_time=start, end_time=end, time_mode=TimeMode.CUSTOM)
        return True

    def inputs(self) -> Dict[str, Any]:
        """
        State needed to render the selection controls.

        Returns:
            Dictionary with the selectable channels and observatories, the
            selected channel/observatory, time mode, the formatted custom
            start/end times and the validation error
        """
        selection = self.store.snapshot()
        return {
            "channels": list(self.channels),
            "observatories": list(self.observatories),
            "channel": selection.channel,
            "observatory": selection.observatory,
            "time_mode": TimeMode.CUSTOM if self.editing_custom else selection.time_mode,
            "start_time": DateUtils.format_date(selection.start_time),
            "end_time": DateUtils.format_date(selection.end_time),
            "error": self.error,
        }
