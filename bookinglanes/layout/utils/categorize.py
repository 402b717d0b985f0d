"""
Turn raw reservation records into typed, normalized intervals.

Records are whatever the reservation source returns (ORM rows, pydantic
models, plain objects); only attribute access is assumed.
"""

import logging
from typing import Iterable, List, NamedTuple

from ...models import BLOCKED_STATUS, IntervalCategory
from ..core.interval import Interval, RelationshipBlock, make_interval
from ..core.normalizer import normalize_interval

logger = logging.getLogger(__name__)


def is_blocked_record(record) -> bool:
    return getattr(record, "status", None) == BLOCKED_STATUS or getattr(record, "notes", None) == BLOCKED_STATUS


def category_for_record(record) -> IntervalCategory:
    """
    Derive the display tier of a record from its flags:
    - relationship blocks are flagged explicitly
    - anything caused by another reservation, or marked blocking, is a propagated block
    - everything else is a direct booking
    """
    if getattr(record, "is_relationship_block", False):
        return IntervalCategory.RELATIONSHIP_BLOCK
    if getattr(record, "source_reservation_id", None) or getattr(record, "is_blocking", False):
        return IntervalCategory.PROPAGATED_BLOCK
    return IntervalCategory.DIRECT


def is_visible_record(record) -> bool:
    """Manual 'Blocked' placeholders are hidden unless they are real blocks."""
    if getattr(record, "notes", None) != BLOCKED_STATUS:
        return True
    return bool(getattr(record, "source_reservation_id", None) or getattr(record, "is_blocking", False))


def interval_from_record(record, category: IntervalCategory = None, scope_key=None, tz_name: str = None) -> Interval:
    """Build and normalize the interval for one record. Raises InvalidIntervalError on bad dates."""
    category = category or category_for_record(record)
    interval = make_interval(
        category,
        id=record.id,
        scope_key=record.property_id if scope_key is None else scope_key,
        start=record.start_date,
        end=record.end_date,
        source_id=getattr(record, "source_reservation_id", None),
        platform=getattr(record, "platform", None),
    )
    return normalize_interval(interval, tz_name)


def intervals_from_records(records: Iterable, tz_name: str = None) -> List[Interval]:
    """Normalized intervals for every visible record, each scoped to its own property."""
    intervals = [
        interval_from_record(record, tz_name=tz_name)
        for record in records
        if is_visible_record(record)
    ]
    logger.debug(f"Built {len(intervals)} intervals from reservation records")
    return intervals


class CategorizedIntervals(NamedTuple):
    direct: List[Interval]
    propagated_blocks: List[Interval]
    relationship_blocks: List[Interval]

    def all(self) -> List[Interval]:
        return self.direct + self.relationship_blocks + self.propagated_blocks


def categorize_for_property(records: Iterable, property_id, related_property_ids: Iterable = (),
                            tz_name: str = None) -> CategorizedIntervals:
    """
    Split the records relevant to one property's month view into its direct
    bookings, the blocks propagated onto it, and the bookings of related
    properties shown on it as relationship blocks.
    """
    related = set(related_property_ids)
    direct, propagated, relationship = [], [], []

    for record in records:
        if record.property_id == property_id:
            if getattr(record, "source_reservation_id", None) and is_blocked_record(record):
                propagated.append(interval_from_record(
                    record, IntervalCategory.PROPAGATED_BLOCK, tz_name=tz_name))
            elif not is_blocked_record(record) and not getattr(record, "is_relationship_block", False):
                direct.append(interval_from_record(record, IntervalCategory.DIRECT, tz_name=tz_name))
        elif record.property_id in related and not getattr(record, "source_reservation_id", None):
            block = interval_from_record(
                record, IntervalCategory.RELATIONSHIP_BLOCK, scope_key=property_id, tz_name=tz_name)
            # The related booking is the cause of the block
            block = RelationshipBlock(block.id, property_id, block.start, block.end, source_id=record.id)
            relationship.append(block)

    return CategorizedIntervals(direct, propagated, relationship)
