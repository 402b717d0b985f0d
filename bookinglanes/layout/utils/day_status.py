"""
Per-day occupancy for the multi-property timeline.
"""

from datetime import datetime
from typing import Iterable, List, NamedTuple

from ...models import IntervalCategory
from ..core.interval import Interval
from .relationships import PropertyRelationships


class DayStatus(NamedTuple):
    has_reservation: bool
    is_indirect: bool
    intervals: List[Interval]


EMPTY_DAY = DayStatus(False, False, [])


def _covers(interval: Interval, day: datetime) -> bool:
    return interval.start.date() <= day.date() <= interval.end.date()


def intervals_for_property(intervals: Iterable[Interval], property_id,
                           relationships: PropertyRelationships) -> List[Interval]:
    """A property's own intervals, minus blocks that a sibling unit's booking propagated."""
    intervals = list(intervals)
    by_id = {interval.id: interval for interval in intervals}

    own = []
    for interval in intervals:
        if interval.scope_key != property_id:
            continue
        if interval.category == IntervalCategory.PROPAGATED_BLOCK and interval.source_id is not None:
            source = by_id.get(interval.source_id)
            if source is not None and relationships.are_siblings(source.scope_key, property_id):
                continue
        own.append(interval)
    return own


def day_status(property_id, day: datetime, intervals: Iterable[Interval],
               relationships: PropertyRelationships) -> DayStatus:
    """
    Whether `property_id` is occupied on `day`. Direct coverage wins; otherwise a
    parent is indirectly occupied by its children's bookings and a child by its
    parent's. Blocks never count as indirect occupancy.
    """
    intervals = list(intervals)

    own = [i for i in intervals_for_property(intervals, property_id, relationships) if _covers(i, day)]
    if own:
        return DayStatus(True, False, own)

    if relationships.is_parent(property_id):
        related = relationships.children_of(property_id)
    else:
        parent_id = relationships.parent_of(property_id)
        related = [parent_id] if parent_id is not None else []

    for related_id in related:
        found = [
            i for i in intervals
            if i.scope_key == related_id and i.category == IntervalCategory.DIRECT and _covers(i, day)
        ]
        if found:
            return DayStatus(True, True, found)

    return EMPTY_DAY
