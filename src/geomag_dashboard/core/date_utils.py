"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
All times in the dashboard are UTC.
"""

from datetime import datetime, timedelta
from typing import Any, Optional
import pytz

from .constants import DISPLAY_DATE_FORMAT


# Formats accepted for user-entered times, tried in order after
# normalizing the separator to "T" and dropping a trailing "Z"
_PARSE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
)


class DateUtils:
    """Utilities for date and timezone handling."""

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        """
        Convert datetime to UTC.

        Args:
            dt: Datetime object (can be naive or aware)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        if dt.tzinfo is None:
            # Assume UTC if no timezone
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    @staticmethod
    def now() -> datetime:
        """Current wall-clock time in UTC."""
        return datetime.now(pytz.UTC)

    @classmethod
    def round_up_to_nearest_minutes(cls, dt: datetime, n: int = 5) -> datetime:
        """
        Round a date up to the next N minute interval.

        Seconds and microseconds are discarded before rounding. A date that
        is already on an N minute boundary moves a full interval later.

        Args:
            dt: Date to round (naive values are treated as UTC)
            n: Number of minutes to round to, e.g. 1 for the next minute,
               5 for the next 5 minute mark

        Returns:
            Rounded UTC datetime

        Example:
            00:03:00 -> 00:05:00, 00:05:00 -> 00:10:00 (n=5)
        """
        if n <= 0:
            raise ValueError(f"Rounding interval must be positive: {n}")

        dt = cls.to_utc(dt)
        hour_start = dt.replace(minute=0, second=0, microsecond=0)
        minutes = n * ((dt.minute + n) // n)
        return hour_start + timedelta(minutes=minutes)

    @staticmethod
    def milliseconds_between(start: datetime, end: datetime) -> int:
        """
        Get the signed number of whole milliseconds from start to end.

        Args:
            start: Start datetime
            end: End datetime

        Returns:
            Milliseconds (negative when end is before start)
        """
        delta = end - start
        return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000

    @staticmethod
    def format_date(dt: Optional[datetime]) -> str:
        """
        Format a date for display.

        Args:
            dt: Date to format, or None

        Returns:
            "YYYY-MM-DD HH:MM:SS" in UTC, or an empty string for None
        """
        if not isinstance(dt, datetime):
            return ""
        return DateUtils.to_utc(dt).strftime(DISPLAY_DATE_FORMAT)

    @classmethod
    def parse_date(cls, value: Any) -> Optional[datetime]:
        """
        Parse a user-entered date as UTC.

        Accepts "YYYY-MM-DD HH:MM:SS" as well as the ISO 8601 variants with
        a "T" separator, trailing "Z" or fractional seconds. Datetime
        objects are passed through (converted to UTC).

        Args:
            value: String or datetime to parse

        Returns:
            UTC datetime, or None if the value is empty or unparsable
        """
        if isinstance(value, datetime):
            return cls.to_utc(value)
        if not value or not isinstance(value, str):
            return None

        text = value.strip().replace(" ", "T", 1)
        if text.endswith("Z"):
            text = text[:-1]

        for fmt in _PARSE_FORMATS:
            try:
                return pytz.UTC.localize(datetime.strptime(text, fmt))
            except ValueError:
                continue
        return None

    @classmethod
    def parse_iso(cls, value: str) -> datetime:
        """
        Parse an ISO 8601 timestamp returned by the web service.

        Args:
            value: Timestamp such as "2021-01-01T00:00:00.000Z"

        Returns:
            UTC datetime

        Raises:
            ValueError: If the timestamp cannot be parsed
        """
        parsed = cls.parse_date(value)
        if parsed is None:
            raise ValueError(f"Invalid timestamp: {value!r}")
        return parsed

    @classmethod
    def to_iso(cls, dt: datetime) -> str:
        """
        Convert datetime to the ISO format expected by the web service.

        Args:
            dt: Datetime object (naive values are treated as UTC)

        Returns:
            ISO string with "Z" suffix (e.g., '2024-01-15T00:00:00Z')
        """
        return cls.to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")
