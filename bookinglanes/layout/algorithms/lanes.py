"""
Lane assignment: stack intervals into non-overlapping horizontal lanes.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ...models import IntervalCategory, TIER_ORDER
from ..core.interval import Interval
from ..utils.tracing import noop_observer
from .adjacency import AdjacencyMap, build_adjacency
from .geometry import GEOMETRY_POLICIES, INSET_NEVER

Observer = Callable[[str, dict], None]


def _half_day_span(interval: Interval) -> Tuple[int, int]:
    """
    Half-open span of half-days the interval's bar covers, in units where day d
    is [2d, 2d + 2). An end that is inset in the geometry policy only takes the
    morning (checkout) or afternoon (check-in) half of its day. A single-day
    interval is drawn across its whole cell, so it takes the whole day.
    """
    start = interval.start.date().toordinal()
    end = interval.end.date().toordinal()
    if end <= start:
        return 2 * start, 2 * start + 2

    policy = GEOMETRY_POLICIES[interval.category]
    first = 2 * start + (0 if policy.left_inset == INSET_NEVER else 1)
    last = 2 * end + (2 if policy.right_inset == INSET_NEVER else 1)
    return first, last


def intervals_overlap(a: Interval, b: Interval) -> bool:
    """
    True when the bars of two intervals would cover a common stretch of a row.
    A checkout and a check-in on the same day only share it when both ends are
    inset, as for back-to-back direct bookings.
    """
    a_first, a_last = _half_day_span(a)
    b_first, b_last = _half_day_span(b)
    return a_first < b_last and b_first < a_last


def _lane_is_free(interval: Interval, occupants: List[Interval]) -> bool:
    return all(not intervals_overlap(interval, other) for other in occupants)


def assign_tier_lanes(intervals: Iterable[Interval], adjacency: AdjacencyMap,
                      observer: Optional[Observer] = None) -> Dict[object, int]:
    """
    Greedy lane packing for a single tier.

    Intervals are visited by start date (ties broken by id). An interval first
    tries the lane of its nearest earlier neighbour that is adjacent to it and
    does not overlap it; otherwise it takes the lowest lane with no overlapping
    occupant. The result is always a valid packing but not necessarily minimal.
    """
    notify = observer or noop_observer
    ordered = sorted(intervals, key=lambda interval: interval.sort_key())

    assignment: Dict[object, int] = {}
    occupants: Dict[int, List[Interval]] = defaultdict(list)

    for index, interval in enumerate(ordered):
        lane = None

        for previous in reversed(ordered[:index]):
            if not adjacency.is_adjacent(previous.id, interval.id):
                continue
            if intervals_overlap(previous, interval):
                continue
            candidate = assignment[previous.id]
            if _lane_is_free(interval, occupants[candidate]):
                lane = candidate
                notify("lane_reused", {"interval_id": interval.id, "after": previous.id, "lane": lane})
            break

        if lane is None:
            lane = 0
            while not _lane_is_free(interval, occupants[lane]):
                lane += 1
            notify("lane_assigned", {"interval_id": interval.id, "lane": lane})

        assignment[interval.id] = lane
        occupants[lane].append(interval)

    return assignment


def assign_lanes(scope_intervals: Iterable[Interval], adjacency: AdjacencyMap = None,
                 observer: Optional[Observer] = None) -> Dict[object, int]:
    """
    Assign lanes to the intervals of one scope (one property in one week, or one
    property across a timeline). Each category tier is packed on its own, so
    lane numbers of different tiers never compete with each other.
    """
    scope_intervals = list(scope_intervals)
    if adjacency is None:
        adjacency = build_adjacency(scope_intervals)

    by_tier: Dict[IntervalCategory, List[Interval]] = defaultdict(list)
    for interval in scope_intervals:
        by_tier[interval.category].append(interval)

    lanes: Dict[object, int] = {}
    for tier in TIER_ORDER:
        if by_tier[tier]:
            lanes.update(assign_tier_lanes(by_tier[tier], adjacency, observer))
    return lanes


class LaneAssignment:
    """
    Lanes for every (scope, week, interval) of a render pass, with the tier of
    each interval so tiers can be stacked into separate bands.
    """

    def __init__(self):
        self._lanes: Dict[Tuple[object, int], Dict[object, int]] = defaultdict(dict)
        self._tiers: Dict[Tuple[object, int], Dict[object, IntervalCategory]] = defaultdict(dict)

    def record(self, scope_key, week_index: int, interval: Interval, lane: int):
        self._lanes[(scope_key, week_index)][interval.id] = lane
        self._tiers[(scope_key, week_index)][interval.id] = interval.category

    def lane(self, scope_key, week_index: int, interval_id) -> Optional[int]:
        return self._lanes.get((scope_key, week_index), {}).get(interval_id)

    def lanes_in(self, scope_key, week_index: int) -> Dict[object, int]:
        return dict(self._lanes.get((scope_key, week_index), {}))

    def lane_count(self, scope_key, week_index: int, category: IntervalCategory = None) -> int:
        """Number of lanes used in a (scope, week), for one tier or all tiers stacked."""
        if category is None:
            return sum(self.lane_count(scope_key, week_index, tier) for tier in TIER_ORDER)
        tiers = self._tiers.get((scope_key, week_index), {})
        used = [lane for interval_id, lane in self._lanes.get((scope_key, week_index), {}).items()
                if tiers[interval_id] == category]
        return max(used) + 1 if used else 0

    def stacked_row(self, scope_key, week_index: int, interval_id) -> Optional[int]:
        """Lane offset by the lanes of every higher-priority tier in the same (scope, week)."""
        lane = self.lane(scope_key, week_index, interval_id)
        if lane is None:
            return None
        category = self._tiers[(scope_key, week_index)][interval_id]
        offset = sum(self.lane_count(scope_key, week_index, tier)
                     for tier in TIER_ORDER[:category.rank])
        return offset + lane

    def keys(self):
        return list(self._lanes.keys())

    def items(self):
        for (scope_key, week_index), lanes in self._lanes.items():
            for interval_id, lane in lanes.items():
                yield (scope_key, week_index, interval_id), lane

    def __len__(self):
        return sum(len(lanes) for lanes in self._lanes.values())

    def __repr__(self):
        return f"LaneAssignment({len(self)} intervals in {len(self._lanes)} scope-weeks)"
