"""
Time range validation module.

Validates custom start/end times entered by the user.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Tuple

from ..core import constants
from ..core.date_utils import DateUtils


class RangeValidator:
    """
    Validate a custom time range.

    Holds a single error message. Every check replaces it: a failing check
    sets its message, a passing check clears it.
    """

    def __init__(
        self,
        max_range_ms: int = constants.MAX_CUSTOM_RANGE_MS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize range validator.

        Args:
            max_range_ms: Largest allowed end - start, in milliseconds
            logger: Logger instance
        """
        self.max_range_ms = max_range_ms
        self.logger = logger or logging.getLogger(__name__)
        self.error: Optional[str] = None

    def _set_error(self, message: Optional[str]) -> None:
        """Show or clear the error message."""
        if message is not None:
            self.logger.debug(f"Time range rejected: {message}")
        self.error = message

    def validate_time(self, time: Optional[datetime]) -> bool:
        """
        Check that a parsed time exists.

        Args:
            time: Parsed datetime, or None if parsing failed

        Returns:
            True if time is a valid datetime
        """
        if not isinstance(time, datetime):
            self._set_error(constants.ERROR_INVALID_TIME)
            return False
        self._set_error(None)
        return True

    def validate_order(self, start: datetime, end: datetime) -> bool:
        """
        Check that start comes strictly before end.

        Times are never swapped.

        Args:
            start: Time entered in start field
            end: Time entered in end field

        Returns:
            True if start < end
        """
        if start >= end:
            self._set_error(constants.ERROR_TIME_ORDER)
            return False
        self._set_error(None)
        return True

    def validate_range(self, start: datetime, end: datetime) -> bool:
        """
        Check that the range is no longer than the maximum span.

        Args:
            start: Time entered in start field
            end: Time entered in end field

        Returns:
            True if the range is at most 31 days
        """
        if DateUtils.milliseconds_between(start, end) > self.max_range_ms:
            self._set_error(constants.ERROR_TIME_RANGE)
            return False
        self._set_error(None)
        return True

    def validate(
        self,
        start_value: Any,
        end_value: Any
    ) -> Optional[Tuple[datetime, datetime]]:
        """
        Parse and validate a custom range.

        Checks run in order (existence of start and end, ordering, span) and
        stop at the first failure.

        Args:
            start_value: Start time as text ("YYYY-MM-DD HH:MM:SS", UTC) or datetime
            end_value: End time as text or datetime

        Returns:
            Tuple of (start, end) in UTC if valid, otherwise None
        """
        start = DateUtils.parse_date(start_value)
        end = DateUtils.parse_date(end_value)

        if (self.validate_time(start) and
                self.validate_time(end) and
                self.validate_order(start, end) and
                self.validate_range(start, end)):
            return start, end
        return None
