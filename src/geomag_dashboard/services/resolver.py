"""
Time window resolution service.

Turns a selection and the current time into a concrete time window.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import ResolvedWindow, Selection, TimeMode


class TimeWindowResolver:
    """Compute the time window for a selection."""

    def __init__(
        self,
        refresh_interval_ms: int = constants.DEFAULT_REFRESH_INTERVAL_MS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.

        Args:
            refresh_interval_ms: Auto-refresh period for live modes
            logger: Logger instance
        """
        self.refresh_interval_ms = refresh_interval_ms
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, selection: Selection, now: datetime) -> ResolvedWindow:
        """
        Resolve the time window for a selection.

        - realtime: 15 minutes ending at the next whole minute
        - pastday: 24 hours ending at the next 5 minute mark
        - custom: the selected start and end, no auto-refresh

        Args:
            selection: Current selection
            now: Current time (naive values are treated as UTC)

        Returns:
            Resolved window

        Raises:
            ValueError: If a custom selection has no start or end time
        """
        mode = selection.time_mode
        refresh_interval_ms: Optional[int] = None

        if mode is TimeMode.REALTIME:
            end = DateUtils.round_up_to_nearest_minutes(now, constants.REALTIME_ROUND_MINUTES)
            start = end - timedelta(milliseconds=constants.REALTIME_WINDOW_MS)
            refresh_interval_ms = self.refresh_interval_ms
        elif mode is TimeMode.PASTDAY:
            end = DateUtils.round_up_to_nearest_minutes(now, constants.PASTDAY_ROUND_MINUTES)
            start = end - timedelta(milliseconds=constants.PASTDAY_WINDOW_MS)
            refresh_interval_ms = self.refresh_interval_ms
        elif mode is TimeMode.CUSTOM:
            if selection.start_time is None or selection.end_time is None:
                raise ValueError("Custom time mode requires a start and end time")
            start = DateUtils.to_utc(selection.start_time)
            end = DateUtils.to_utc(selection.end_time)
        else:
            raise ValueError(f"Unknown time mode: {mode!r}")

        use_seconds = (
            DateUtils.milliseconds_between(start, end) <= constants.SECONDS_RESOLUTION_MAX_MS
        )

        window = ResolvedWindow(
            start=start,
            end=end,
            use_seconds_resolution=use_seconds,
            refresh_interval_ms=refresh_interval_ms,
        )
        self.logger.debug(
            f"Resolved {mode.value} window: {start.isoformat()} to {end.isoformat()} "
            f"(seconds={use_seconds}, refresh={refresh_interval_ms})"
        )
        return window
