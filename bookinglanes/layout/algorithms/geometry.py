"""
Bar geometry: horizontal position, width and corner rounding of a clipped interval.
"""

from typing import NamedTuple

from ... import config
from ...models import IntervalCategory, RoundingStyle
from ..core.constants import CHECKIN_INSET, CHECKOUT_INSET, NO_SLOT, SLOTS_PER_WEEK
from ..core.date_grid import WeekRow
from ..core.interval import Interval
from .overlap import WeekPlacement

# Inset rules
INSET_ON_MATCH = "on_match"   # only when the interval's own check-in/checkout day is this slot
INSET_ALWAYS = "always"
INSET_NEVER = "never"

# Rounding rules
ROUND_UNLESS_CONTINUED = "unless_continued"
ROUND_ALWAYS = "always"


class GeometryPolicy(NamedTuple):
    left_inset: str
    right_inset: str
    round_left: str
    round_right: str


GEOMETRY_POLICIES = {
    IntervalCategory.DIRECT: GeometryPolicy(
        INSET_ON_MATCH, INSET_ON_MATCH, ROUND_UNLESS_CONTINUED, ROUND_UNLESS_CONTINUED),
    IntervalCategory.PROPAGATED_BLOCK: GeometryPolicy(
        INSET_NEVER, INSET_ALWAYS, ROUND_UNLESS_CONTINUED, ROUND_ALWAYS),
    IntervalCategory.RELATIONSHIP_BLOCK: GeometryPolicy(
        INSET_ALWAYS, INSET_NEVER, ROUND_ALWAYS, ROUND_UNLESS_CONTINUED),
}


class BarGeometry(NamedTuple):
    left_fraction: float
    width_fraction: float
    round_left: bool
    round_right: bool
    style: RoundingStyle

    @property
    def is_empty(self) -> bool:
        return self.width_fraction <= 0

    @property
    def left_percent(self) -> float:
        return self.left_fraction * 100

    @property
    def width_percent(self) -> float:
        return self.width_fraction * 100


ZERO_GEOMETRY = BarGeometry(0.0, 0.0, False, False, RoundingStyle.NONE)


def _applies(rule: str, matched: bool) -> bool:
    if rule == INSET_ALWAYS:
        return True
    if rule == INSET_ON_MATCH:
        return matched
    return False


def _corner_style(round_left: bool, round_right: bool) -> RoundingStyle:
    if round_left and round_right:
        return RoundingStyle.FULL
    if round_left:
        return RoundingStyle.LEFT
    if round_right:
        return RoundingStyle.RIGHT
    return RoundingStyle.NONE


def compute_geometry(start_slot: int, end_slot: int, continues_from_previous: bool, continues_to_next: bool,
                     category=IntervalCategory.DIRECT, checkin_on_start: bool = False,
                     checkout_on_end: bool = False, single_day: bool = False,
                     force_continuous: bool = False, slots_per_row: int = SLOTS_PER_WEEK) -> BarGeometry:
    """
    Convert a clipped slot range into fractions of the row width.

    The category's policy decides where the bar is inset inside its first and
    last day cell and which ends are rounded. force_continuous draws a flush,
    square bar across the whole range. An invalid range gives ZERO_GEOMETRY,
    which callers skip.
    """
    if start_slot == NO_SLOT or end_slot == NO_SLOT or start_slot > end_slot or slots_per_row <= 0:
        return ZERO_GEOMETRY

    policy = GEOMETRY_POLICIES[IntervalCategory(category)]

    if force_continuous:
        left, right = float(start_slot), float(end_slot + 1)
    else:
        left = start_slot + (CHECKIN_INSET if _applies(policy.left_inset, checkin_on_start) else 0.0)
        right = end_slot + (CHECKOUT_INSET if _applies(policy.right_inset, checkout_on_end) else 1.0)
        if right <= left:
            # Both insets on one cell would invert the bar; draw the full cell
            left, right = float(start_slot), float(end_slot + 1)

    left = max(0.0, left)
    right = min(float(slots_per_row), right)
    if right <= left:
        return ZERO_GEOMETRY

    if force_continuous:
        round_left = round_right = False
        style = RoundingStyle.NONE
    elif single_day:
        round_left = round_right = True
        style = RoundingStyle.FULL
    elif start_slot == end_slot and not continues_from_previous and not continues_to_next:
        round_left = round_right = True
        style = RoundingStyle.SOFT
    else:
        round_left = policy.round_left == ROUND_ALWAYS or not continues_from_previous
        round_right = policy.round_right == ROUND_ALWAYS or not continues_to_next
        style = _corner_style(round_left, round_right)

    return BarGeometry(
        left_fraction=left / slots_per_row,
        width_fraction=(right - left) / slots_per_row,
        round_left=round_left,
        round_right=round_right,
        style=style,
    )


def geometry_for(interval: Interval, row: WeekRow, placement: WeekPlacement,
                 force_continuous: bool = False) -> BarGeometry:
    """compute_geometry() with the check-in/checkout matches read off the row."""
    if not placement.overlaps:
        return ZERO_GEOMETRY
    first_day = row[placement.start_slot]
    last_day = row[placement.end_slot]
    return compute_geometry(
        placement.start_slot,
        placement.end_slot,
        placement.continues_from_previous,
        placement.continues_to_next,
        category=interval.category,
        checkin_on_start=first_day is not None and first_day.date() == interval.start.date(),
        checkout_on_end=last_day is not None and last_day.date() == interval.end.date(),
        single_day=interval.is_single_day,
        force_continuous=force_continuous,
        slots_per_row=len(row),
    )


# ================================
# VERTICAL GEOMETRY
# ================================

def lane_top(stacked_row: int, lane_height: int = None, lane_gap: int = None) -> int:
    """Pixel offset of a lane from the top of its week row."""
    lane_height = config.LANE_HEIGHT if lane_height is None else lane_height
    lane_gap = config.LANE_GAP if lane_gap is None else lane_gap
    return stacked_row * (lane_height + lane_gap)


def cell_height(max_lane: int, min_height: int = None, base_height: int = None, per_lane: int = None) -> int:
    """Height of a month-grid day cell tall enough for lanes 0..max_lane."""
    min_height = config.CELL_MIN_HEIGHT if min_height is None else min_height
    base_height = config.CELL_BASE_HEIGHT if base_height is None else base_height
    per_lane = config.CELL_LANE_HEIGHT if per_lane is None else per_lane
    return max(min_height, base_height + max(0, max_lane) * per_lane)
