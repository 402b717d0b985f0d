"""
Calendar grid construction: turns a reference date into week rows of day slots.
"""

import math
from datetime import date, datetime
from typing import Iterator, List, Optional

from dateutil import rrule
from dateutil.relativedelta import relativedelta

from ... import config
from ...models import GridMode
from .constants import SLOTS_PER_WEEK, WEEK_START_WEEKDAY
from .exceptions import InvalidIntervalError, InvalidReferenceDateError
from .normalizer import DateLike, normalize_date


class WeekRow:
    """
    One row of the calendar grid. Each slot holds a normalized date, or None
    for padding outside the visible month/range.
    """
    def __init__(self, index: int, slots: List[Optional[datetime]]):
        self.index = index
        self.slots = list(slots)

    @property
    def first_concrete(self) -> Optional[datetime]:
        return next((day for day in self.slots if day is not None), None)

    @property
    def last_concrete(self) -> Optional[datetime]:
        return next((day for day in reversed(self.slots) if day is not None), None)

    def concrete_days(self) -> List[datetime]:
        return [day for day in self.slots if day is not None]

    def slot_of(self, day: datetime) -> int:
        """Index of the slot holding `day`'s calendar date, or -1."""
        for i, slot in enumerate(self.slots):
            if slot is not None and slot.date() == day.date():
                return i
        return -1

    def __len__(self):
        return len(self.slots)

    def __getitem__(self, i):
        return self.slots[i]

    def __iter__(self) -> Iterator[Optional[datetime]]:
        return iter(self.slots)

    def __repr__(self):
        labels = [day.strftime("%m-%d") if day else "--" for day in self.slots]
        return f"WeekRow({self.index}, [{', '.join(labels)}])"


def _reference_day(reference: DateLike, tz_name: str = None) -> date:
    if reference is None:
        raise InvalidReferenceDateError("A reference date is required")
    try:
        return normalize_date(reference, tz_name).date()
    except InvalidIntervalError as e:
        raise InvalidReferenceDateError(str(e))


def _days(first: date, last: date) -> List[date]:
    """All calendar days from `first` to `last`, inclusive."""
    return [occurrence.date() for occurrence in rrule.rrule(
        rrule.DAILY,
        dtstart=datetime(first.year, first.month, first.day),
        until=datetime(last.year, last.month, last.day),
    )]


def _chunk(slots: List[Optional[datetime]], size: int) -> List[WeekRow]:
    return [WeekRow(i // size, slots[i:i + size]) for i in range(0, len(slots), size)]


def build_month_weeks(reference: DateLike, tz_name: str = None) -> List[WeekRow]:
    """
    Week rows for the month containing `reference`. The first row is padded
    so day 1 lands in its weekday column (Sunday first); the last row is
    padded so every row has seven slots.
    """
    day = _reference_day(reference, tz_name)
    month_start = day.replace(day=1)
    month_end = month_start + relativedelta(months=1, days=-1)

    # Column 0 is the week-start weekday (Sunday)
    leading = (month_start.weekday() - WEEK_START_WEEKDAY) % SLOTS_PER_WEEK
    slots: List[Optional[datetime]] = [None] * leading
    slots.extend(normalize_date(d, tz_name) for d in _days(month_start, month_end))

    total = math.ceil(len(slots) / SLOTS_PER_WEEK) * SLOTS_PER_WEEK
    slots.extend([None] * (total - len(slots)))
    return _chunk(slots, SLOTS_PER_WEEK)


def build_rolling_weeks(start: DateLike, days: int = None, tz_name: str = None) -> List[WeekRow]:
    """ceil(days / 7) rows of consecutive dates starting at `start`; slots past `days` are empty."""
    days = config.ROLLING_DAYS if days is None else days
    if days <= 0:
        raise InvalidReferenceDateError(f"Rolling window must cover at least one day, got {days}")
    first = _reference_day(start, tz_name)
    last = first + relativedelta(days=days - 1)

    slots: List[Optional[datetime]] = [normalize_date(d, tz_name) for d in _days(first, last)]
    total = math.ceil(days / SLOTS_PER_WEEK) * SLOTS_PER_WEEK
    slots.extend([None] * (total - len(slots)))
    return _chunk(slots, SLOTS_PER_WEEK)


def build_timeline_row(start: DateLike, days: int = None, tz_name: str = None) -> WeekRow:
    """A single row of `days` consecutive dates, used by the per-property timeline view."""
    days = config.ROLLING_DAYS if days is None else days
    if days <= 0:
        raise InvalidReferenceDateError(f"Timeline must cover at least one day, got {days}")
    first = _reference_day(start, tz_name)
    last = first + relativedelta(days=days - 1)
    return WeekRow(0, [normalize_date(d, tz_name) for d in _days(first, last)])


def build_weeks(reference: DateLike, mode=GridMode.MONTH, days: int = None, tz_name: str = None) -> List[WeekRow]:
    """Build the week rows for a month view or a rolling N-day view."""
    try:
        mode = GridMode(mode)
    except ValueError:
        raise InvalidReferenceDateError(f"Unknown grid mode: {mode!r}")

    if mode == GridMode.MONTH:
        return build_month_weeks(reference, tz_name)
    return build_rolling_weeks(reference, days, tz_name)


# ================================
# NAVIGATION
# ================================

def shift_month(reference: DateLike, delta: int, tz_name: str = None) -> datetime:
    """First day of the month `delta` months away from `reference`'s month."""
    day = _reference_day(reference, tz_name)
    return normalize_date(day.replace(day=1) + relativedelta(months=delta), tz_name)


def shift_window(start: DateLike, days: int = None, direction: int = 1, tz_name: str = None) -> datetime:
    """Start of the next (direction=1) or previous (direction=-1) rolling window."""
    days = config.ROLLING_DAYS if days is None else days
    if direction not in (1, -1):
        raise InvalidReferenceDateError(f"Direction must be 1 or -1, got {direction}")
    day = _reference_day(start, tz_name)
    return normalize_date(day + relativedelta(days=direction * days), tz_name)
