"""
Adjacency detection between intervals.

Two intervals are adjacent when one starts on the day the other ends, or
within a few days after it. The relation only biases lane reuse so that
back-to-back stays stay on one lane; it never affects correctness.
"""

import bisect
import logging
from collections import defaultdict
from typing import Dict, Iterable, Set

from ... import config
from ..core.interval import Interval
from ..core.normalizer import days_between

logger = logging.getLogger(__name__)


def is_adjacent_pair(a: Interval, b: Interval, max_gap_days: int = None) -> bool:
    """Symmetric adjacency test for two intervals."""
    max_gap = config.ADJACENCY_MAX_GAP_DAYS if max_gap_days is None else max_gap_days
    gap = days_between(a.end, b.start)
    if 0 <= gap <= max_gap:
        return True
    gap = days_between(b.end, a.start)
    return 0 <= gap <= max_gap


class AdjacencyMap:
    """Symmetric adjacency relation keyed by interval id."""

    def __init__(self, pairs: Dict[object, Set[object]] = None):
        self._neighbours: Dict[object, Set[object]] = defaultdict(set)
        for a, others in (pairs or {}).items():
            for b in others:
                self.add(a, b)

    def add(self, a_id, b_id):
        if a_id == b_id:
            return
        self._neighbours[a_id].add(b_id)
        self._neighbours[b_id].add(a_id)

    def is_adjacent(self, a_id, b_id) -> bool:
        return b_id in self._neighbours.get(a_id, ())

    def neighbours(self, interval_id) -> Set[object]:
        return set(self._neighbours.get(interval_id, ()))

    def pair_count(self) -> int:
        return sum(len(others) for others in self._neighbours.values()) // 2

    def __contains__(self, pair) -> bool:
        a_id, b_id = pair
        return self.is_adjacent(a_id, b_id)

    def __repr__(self):
        return f"AdjacencyMap({self.pair_count()} pairs)"


def build_adjacency(intervals: Iterable[Interval], max_gap_days: int = None) -> AdjacencyMap:
    """
    Compute the adjacency relation over every interval in the visible range,
    across all categories and scopes.
    """
    max_gap = config.ADJACENCY_MAX_GAP_DAYS if max_gap_days is None else max_gap_days
    ordered = sorted(intervals, key=lambda interval: interval.start.date())
    starts = [interval.start.date() for interval in ordered]

    adjacency = AdjacencyMap()
    for interval in ordered:
        end_day = interval.end.date()
        # Every interval starting within [end, end + max_gap] follows this one
        lo = bisect.bisect_left(starts, end_day)
        for candidate in ordered[lo:]:
            if days_between(interval.end, candidate.start) > max_gap:
                break
            if candidate is not interval:
                adjacency.add(interval.id, candidate.id)

    logger.debug(f"Adjacency built: {len(ordered)} intervals, {adjacency.pair_count()} pairs")
    return adjacency
