"""
Reservation Bar Layout Engine

Packs reservations and blocks into non-overlapping lanes of a week-based
calendar grid and computes the geometry of each bar.
Pure computation: no I/O, no state kept between render passes.
"""

from .core.date_grid import WeekRow, build_weeks, build_month_weeks, build_rolling_weeks, build_timeline_row
from .core.normalizer import normalize_date, normalize_interval
from .core.interval import Interval, DirectBooking, RelationshipBlock, PropagatedBlock, make_interval
from .core.exceptions import LayoutError, InvalidIntervalError, InvalidReferenceDateError
from .core.engine import LayoutEngine, CalendarLayout, Bar
from .algorithms.overlap import classify_overlap, WeekPlacement, NO_OVERLAP
from .algorithms.adjacency import build_adjacency, AdjacencyMap
from .algorithms.lanes import assign_lanes, LaneAssignment
from .algorithms.geometry import compute_geometry, BarGeometry

__version__ = "1.0.0"
