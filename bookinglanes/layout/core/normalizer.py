"""
Date normalization for calendar intervals.

Every date that enters the engine is pinned to the same hour of the day in the
calendar timezone, so two normalized values compare equal exactly when they
fall on the same calendar day, whatever timezone the source used.
"""

from datetime import date, datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser

from ... import config
from .exceptions import InvalidIntervalError

DateLike = Union[date, datetime, str]


def _timezone(tz_name: str):
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        raise InvalidIntervalError(f"Unknown calendar timezone: {tz_name}")


def calendar_day(value: DateLike, tz_name: str = None) -> date:
    """Return the calendar day a date-like value falls on in the calendar timezone."""
    tz = _timezone(tz_name or config.CALENDAR_TIMEZONE)

    if isinstance(value, str):
        try:
            value = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            raise InvalidIntervalError(f"Invalid date value: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # Aware values are moved into the calendar timezone first
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value

    raise InvalidIntervalError(f"Unsupported date value: {value!r}")


def normalize_date(value: DateLike, tz_name: str = None, hour: int = None) -> datetime:
    """
    Pin a date-like value to the canonical hour of its calendar day.
    Idempotent: normalizing a normalized value returns an equal value.
    """
    tz = _timezone(tz_name or config.CALENDAR_TIMEZONE)
    canonical_hour = config.CANONICAL_HOUR if hour is None else hour
    day = calendar_day(value, tz.zone)
    return tz.localize(datetime(day.year, day.month, day.day, canonical_hour))


def same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole calendar days from `earlier` to `later` (negative if `later` comes first)."""
    # Compare calendar days, not instants, so DST shifts never lose a day
    return (later.date() - earlier.date()).days


def add_days(value: datetime, days: int) -> datetime:
    """Move a normalized value by whole calendar days, keeping the canonical hour."""
    shifted = value.date() + timedelta(days=days)
    tz_name = getattr(value.tzinfo, "zone", None)
    return normalize_date(shifted, tz_name=tz_name, hour=value.hour)


def normalize_interval(interval, tz_name: str = None, hour: int = None):
    """
    Return a copy of `interval` with both ends normalized.
    Raises InvalidIntervalError when the interval ends before it starts.
    """
    start = normalize_date(interval.start, tz_name, hour)
    end = normalize_date(interval.end, tz_name, hour)
    if start > end:
        raise InvalidIntervalError(
            f"Interval {interval.id} ends ({end.date()}) before it starts ({start.date()})",
            interval_id=interval.id,
        )
    return interval.with_dates(start, end)
