"""
Row overlap classification: where an interval sits inside one week row.
"""

from typing import Iterable, List, NamedTuple, Tuple

from ..core.constants import NO_SLOT
from ..core.date_grid import WeekRow
from ..core.interval import Interval


class WeekPlacement(NamedTuple):
    start_slot: int
    end_slot: int
    continues_from_previous: bool
    continues_to_next: bool

    @property
    def overlaps(self) -> bool:
        return self.start_slot != NO_SLOT and self.end_slot != NO_SLOT

    @property
    def slot_span(self) -> int:
        return self.end_slot - self.start_slot + 1 if self.overlaps else 0


NO_OVERLAP = WeekPlacement(NO_SLOT, NO_SLOT, False, False)


def classify_overlap(row: WeekRow, interval: Interval) -> WeekPlacement:
    """
    Clip `interval` to `row`.

    Returns the first and last slot indices the interval covers in this row
    and whether it continues beyond the row on either side, or NO_OVERLAP
    when the interval does not touch any concrete day of the row.
    """
    first_day = row.first_concrete
    last_day = row.last_concrete
    if first_day is None:
        return NO_OVERLAP

    start = interval.start.date()
    end = interval.end.date()
    if end < first_day.date() or start > last_day.date():
        return NO_OVERLAP

    if start == end:
        slot = row.slot_of(interval.start)
        if slot == NO_SLOT:
            return NO_OVERLAP
        return WeekPlacement(slot, slot, False, False)

    continues_from_previous = start < first_day.date()
    continues_to_next = end > last_day.date()

    concrete = [(i, day.date()) for i, day in enumerate(row.slots) if day is not None]

    if continues_from_previous:
        start_slot = concrete[0][0]
    else:
        start_slot = next((i for i, day in concrete if day >= start), NO_SLOT)

    if continues_to_next:
        end_slot = concrete[-1][0]
    else:
        end_slot = next((i for i, day in reversed(concrete) if day <= end), NO_SLOT)

    # Inconsistent input never renders
    if start_slot == NO_SLOT or end_slot == NO_SLOT or start_slot > end_slot:
        return NO_OVERLAP

    return WeekPlacement(start_slot, end_slot, continues_from_previous, continues_to_next)


def intervals_in_row(row: WeekRow, intervals: Iterable[Interval]) -> List[Tuple[Interval, WeekPlacement]]:
    """The intervals touching `row`, each paired with its placement."""
    placed = []
    for interval in intervals:
        placement = classify_overlap(row, interval)
        if placement.overlaps:
            placed.append((interval, placement))
    return placed
