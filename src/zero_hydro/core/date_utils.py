"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple
import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Paris', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    @staticmethod
    def to_local(dt: datetime, timezone_str: str) -> datetime:
        """
        Express a timestamp in the given local timezone.

        Naive datetimes are taken to already be local wall-clock time. Fetched
        weather series are aware UTC and only converted here for day of year,
        hour of day and month.

        Args:
            dt: Datetime (naive or aware)
            timezone_str: Target timezone string

        Returns:
            Timezone-aware datetime in the target timezone
        """
        tz = DateUtils.parse_timezone(timezone_str)
        if dt.tzinfo is None:
            return tz.localize(dt)
        return dt.astimezone(tz)

    @staticmethod
    def local_hour(dt: datetime, timezone_str: str) -> float:
        """
        Get fractional local hour of day (e.g. 14.5 for 14:30).

        Args:
            dt: Datetime (naive or aware)
            timezone_str: Timezone string

        Returns:
            Hour of day in [0, 24)
        """
        local = DateUtils.to_local(dt, timezone_str)
        return local.hour + local.minute / 60

    @staticmethod
    def day_of_year(dt: datetime, timezone_str: str) -> int:
        """
        Get 1-based local day of year.

        Args:
            dt: Datetime (naive or aware)
            timezone_str: Timezone string

        Returns:
            Day of year (1-365/366)
        """
        return DateUtils.to_local(dt, timezone_str).timetuple().tm_yday

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
    def hours_between(start: datetime, end: datetime) -> float:
        """
        Get elapsed hours from start to end.

        Both datetimes are normalized to UTC first, so naive and aware values
        can be mixed (naive values are taken as UTC).
        """
        delta = DateUtils.to_utc(end) - DateUtils.to_utc(start)
        return delta.total_seconds() / 3600

    @staticmethod
    def now_utc() -> datetime:
        """Get the current time as an aware UTC datetime."""
        return datetime.now(pytz.UTC)

    def get_window(
        self,
        reference_time: datetime,
        hours_before: int,
        hours_after: int
    ) -> Tuple[datetime, datetime]:
        """
        Get a [start, end] window around a reference time.

        Args:
            reference_time: Center of the window (naive taken as UTC)
            hours_before: Hours to include before the reference
            hours_after: Hours to include after the reference

        Returns:
            Tuple of (start_datetime, end_datetime) in UTC
        """
        reference = self.to_utc(reference_time)
        start = reference - timedelta(hours=hours_before)
        end = reference + timedelta(hours=hours_after)

        self.logger.debug(
            f"Window around {reference.isoformat()}: "
            f"{start.isoformat()} to {end.isoformat()}"
        )

        return start, end
