"""
Interval representation for the layout engine.
"""

from datetime import datetime
from typing import Optional

from ...models import IntervalCategory


class Interval:
    """
    A booked or blocked span of days on one scope (usually a property).
    Each category is its own subclass so that category-specific fields are
    explicit rather than implied by a combination of flags:
    - DirectBooking: a real reservation (carries its platform)
    - RelationshipBlock: an auto-block caused by a booking on a linked property
    - PropagatedBlock: an auto-block placed on this property by a linked booking
    Intervals are never mutated; use with_dates() to get a changed copy.
    """
    category: IntervalCategory = None

    def __init__(self, id, scope_key, start: datetime, end: datetime, source_id=None):
        self.id = id
        self.scope_key = scope_key
        self.start = start
        self.end = end
        self.source_id = source_id

    @property
    def is_single_day(self) -> bool:
        return self.start.date() == self.end.date()

    def sort_key(self):
        return (self.start, str(self.id))

    def with_dates(self, start: datetime, end: datetime) -> "Interval":
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.start = start
        clone.end = end
        return clone

    def with_scope(self, scope_key) -> "Interval":
        clone = self.with_dates(self.start, self.end)
        clone.scope_key = scope_key
        return clone

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def __repr__(self):
        return (
            f"{type(self).__name__}({self.id!r}, scope={self.scope_key!r}, "
            f"{self.start:%Y-%m-%d} -> {self.end:%Y-%m-%d})"
        )


class DirectBooking(Interval):
    category = IntervalCategory.DIRECT

    def __init__(self, id, scope_key, start: datetime, end: datetime, platform: Optional[str] = None):
        super().__init__(id, scope_key, start, end, source_id=None)
        self.platform = platform


class RelationshipBlock(Interval):
    category = IntervalCategory.RELATIONSHIP_BLOCK


class PropagatedBlock(Interval):
    category = IntervalCategory.PROPAGATED_BLOCK


INTERVAL_TYPES = {
    IntervalCategory.DIRECT: DirectBooking,
    IntervalCategory.RELATIONSHIP_BLOCK: RelationshipBlock,
    IntervalCategory.PROPAGATED_BLOCK: PropagatedBlock,
}


def make_interval(category, id, scope_key, start, end, source_id=None, platform=None) -> Interval:
    """Build the interval subclass matching `category`."""
    interval_cls = INTERVAL_TYPES[IntervalCategory(category)]
    if interval_cls is DirectBooking:
        return DirectBooking(id, scope_key, start, end, platform=platform)
    return interval_cls(id, scope_key, start, end, source_id=source_id)
