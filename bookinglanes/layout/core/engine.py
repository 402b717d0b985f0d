"""
Layout engine that runs one render pass over a set of intervals.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from ..algorithms.adjacency import AdjacencyMap, build_adjacency
from ..algorithms.geometry import BarGeometry, cell_height, geometry_for
from ..algorithms.lanes import LaneAssignment, assign_lanes
from ..algorithms.overlap import WeekPlacement, intervals_in_row
from ..utils.tracing import noop_observer
from .date_grid import WeekRow, build_month_weeks, build_rolling_weeks, build_timeline_row
from .exceptions import InvalidIntervalError
from .interval import Interval
from .normalizer import DateLike, normalize_interval

logger = logging.getLogger(__name__)


class Bar:
    """One interval drawn in one week row."""

    def __init__(self, interval: Interval, week_index: int, placement: WeekPlacement,
                 lane: int, stacked_row: int, geometry: BarGeometry):
        self.interval = interval
        self.week_index = week_index
        self.placement = placement
        self.lane = lane
        self.stacked_row = stacked_row
        self.geometry = geometry

    @property
    def scope_key(self):
        return self.interval.scope_key

    def __repr__(self):
        return (f"Bar({self.interval.id!r}, week={self.week_index}, "
                f"slots={self.placement.start_slot}-{self.placement.end_slot}, lane={self.lane})")


class CalendarLayout:
    """Result of a render pass: the rows, the lanes and every bar to draw."""

    def __init__(self, rows: List[WeekRow], bars: List[Bar], lanes: LaneAssignment, adjacency: AdjacencyMap):
        self.rows = rows
        self.bars = bars
        self.lanes = lanes
        self.adjacency = adjacency

    def bars_for(self, scope_key=None, week_index: int = None) -> List[Bar]:
        return [
            bar for bar in self.bars
            if (scope_key is None or bar.scope_key == scope_key)
            and (week_index is None or bar.week_index == week_index)
        ]

    def max_stacked_row(self) -> int:
        return max((bar.stacked_row for bar in self.bars), default=0)

    def cell_height(self, **kwargs) -> int:
        return cell_height(self.max_stacked_row(), **kwargs)


class LayoutEngine:
    """
    Stateless orchestration of the layout pipeline:
    normalize -> rows -> adjacency -> per (scope, row) lanes -> geometry.
    Nothing is kept between passes; every call recomputes from its inputs.
    """

    def __init__(self, tz_name: str = None, max_gap_days: int = None, observer=None):
        self.tz_name = tz_name
        self.max_gap_days = max_gap_days
        self.observer = observer or noop_observer

# ================================
# INPUT
# ================================

    def normalize(self, intervals: Iterable[Interval]) -> List[Interval]:
        """Normalize every interval, rejecting reversed ranges and duplicate ids."""
        normalized = []
        seen = set()
        for interval in intervals:
            if interval.id in seen:
                raise InvalidIntervalError(f"Duplicate interval id {interval.id!r}", interval_id=interval.id)
            seen.add(interval.id)
            normalized.append(normalize_interval(interval, self.tz_name))
        return normalized

# ================================
# LAYOUT
# ================================

    def layout_rows(self, rows: List[WeekRow], intervals: Iterable[Interval],
                    force_continuous_ids: Iterable = ()) -> CalendarLayout:
        """Lay intervals out over prebuilt rows."""
        normalized = self.normalize(intervals)
        force_continuous = set(force_continuous_ids)
        adjacency = build_adjacency(normalized, self.max_gap_days)

        by_scope: Dict[object, List[Interval]] = OrderedDict()
        for interval in normalized:
            by_scope.setdefault(interval.scope_key, []).append(interval)

        lanes = LaneAssignment()
        bars: List[Bar] = []

        for row in rows:
            for scope_key, scope_intervals in by_scope.items():
                placed = intervals_in_row(row, scope_intervals)
                if not placed:
                    continue

                scope_lanes = assign_lanes([interval for interval, _ in placed], adjacency, self.observer)
                for interval, _ in placed:
                    lanes.record(scope_key, row.index, interval, scope_lanes[interval.id])

                for interval, placement in placed:
                    geometry = geometry_for(interval, row, placement,
                                            force_continuous=interval.id in force_continuous)
                    if geometry.is_empty:
                        continue
                    bars.append(Bar(
                        interval,
                        row.index,
                        placement,
                        lanes.lane(scope_key, row.index, interval.id),
                        lanes.stacked_row(scope_key, row.index, interval.id),
                        geometry,
                    ))

        bars.sort(key=lambda bar: (bar.week_index, str(bar.scope_key), bar.stacked_row, bar.interval.sort_key()))
        logger.debug(f"Layout pass: {len(rows)} rows, {len(normalized)} intervals, {len(bars)} bars")
        self.observer("layout_complete", {"rows": len(rows), "intervals": len(normalized), "bars": len(bars)})
        return CalendarLayout(rows, bars, lanes, adjacency)

    def layout_month(self, reference: DateLike, intervals: Iterable[Interval], **kwargs) -> CalendarLayout:
        return self.layout_rows(build_month_weeks(reference, self.tz_name), intervals, **kwargs)

    def layout_rolling(self, start: DateLike, days: Optional[int], intervals: Iterable[Interval],
                       **kwargs) -> CalendarLayout:
        return self.layout_rows(build_rolling_weeks(start, days, self.tz_name), intervals, **kwargs)

    def layout_timeline(self, start: DateLike, days: Optional[int], intervals: Iterable[Interval],
                        **kwargs) -> CalendarLayout:
        """One unbroken row for the whole window; each property (scope) gets its own lanes."""
        return self.layout_rows([build_timeline_row(start, days, self.tz_name)], intervals, **kwargs)
