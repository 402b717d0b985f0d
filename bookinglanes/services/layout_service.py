"""
Layout service: turns API payloads into engine calls and engine results into response schemas.
"""

import logging
from typing import Iterable, List, Optional

from ..models import IntervalCategory, TIER_ORDER
from ..schemas import (
    BarOut, DayStatusOut, GeometryOut, LaneCountOut, LayoutOut, WeekRowOut,
    DayStatusRequest, MonthLayoutRequest, PropertyMonthLayoutRequest,
    RollingLayoutRequest, TimelineLayoutRequest,
)
from ..layout.algorithms.geometry import lane_top
from ..layout.core.engine import CalendarLayout, LayoutEngine
from ..layout.core.interval import Interval, make_interval
from ..layout.core.normalizer import normalize_date
from ..layout.utils.categorize import categorize_for_property, intervals_from_records
from ..layout.utils.day_status import day_status, intervals_for_property
from ..layout.utils.relationships import PropertyRelationships, RelationshipCache, generate_related_blocks
from ..layout.utils.tracing import logging_observer

logger = logging.getLogger(__name__)


class LayoutService:
    """Stateless per request; the only thing carried across requests is an optional relationship cache."""

    def __init__(self, engine: LayoutEngine = None, relationship_cache: Optional[RelationshipCache] = None):
        self.engine = engine or LayoutEngine(observer=logging_observer)
        self.relationship_cache = relationship_cache

# ================================
# INPUT CONVERSION
# ================================

    def intervals_from_payload(self, items: Iterable) -> List[Interval]:
        return [
            make_interval(
                item.category,
                id=item.id,
                scope_key=item.scope_key,
                start=item.start,
                end=item.end,
                source_id=getattr(item, "source_id", None),
                platform=getattr(item, "platform", None),
            )
            for item in items
        ]

    def relationships_for(self, properties: Iterable) -> PropertyRelationships:
        """Relationships from the request's properties, else from the cache, else none."""
        properties = list(properties)
        if properties:
            return PropertyRelationships.from_properties(properties)
        if self.relationship_cache is not None:
            return self.relationship_cache.get()
        return PropertyRelationships()

# ================================
# LAYOUTS
# ================================

    def month_layout(self, request: MonthLayoutRequest) -> LayoutOut:
        intervals = self.intervals_from_payload(request.intervals)
        layout = self.engine.layout_month(request.reference_date, intervals,
                                          force_continuous_ids=request.force_continuous_ids)
        return self.to_layout_out(layout)

    def rolling_layout(self, request: RollingLayoutRequest) -> LayoutOut:
        intervals = self.intervals_from_payload(request.intervals)
        layout = self.engine.layout_rolling(request.start_date, request.days, intervals,
                                            force_continuous_ids=request.force_continuous_ids)
        return self.to_layout_out(layout)

    def property_month_layout(self, request: PropertyMonthLayoutRequest) -> LayoutOut:
        """Month view of one property, with its related properties' bookings shown as blocks."""
        relationships = self.relationships_for(request.properties)
        categorized = categorize_for_property(
            request.records,
            request.property_id,
            relationships.related_ids(request.property_id),
            tz_name=self.engine.tz_name,
        )
        logger.info(
            f"Property {request.property_id}: {len(categorized.direct)} direct, "
            f"{len(categorized.relationship_blocks)} relationship blocks, "
            f"{len(categorized.propagated_blocks)} propagated blocks"
        )
        layout = self.engine.layout_month(request.reference_date, categorized.all())
        return self.to_layout_out(layout)

    def timeline_layout(self, request: TimelineLayoutRequest) -> LayoutOut:
        """Multi-property timeline: one unbroken row per property over the window."""
        intervals = intervals_from_records(request.records, tz_name=self.engine.tz_name)
        relationships = self.relationships_for(request.properties)

        if request.propagate_blocks:
            existing = {interval.id for interval in intervals}
            for source in [i for i in intervals if i.category == IntervalCategory.DIRECT]:
                for block in generate_related_blocks(source, relationships):
                    if block.id not in existing:
                        intervals.append(block)
                        existing.add(block.id)

        if request.properties:
            # Only the listed properties get rows; sibling-propagated blocks are hidden
            intervals = [
                interval
                for property_id in dict.fromkeys(prop.id for prop in request.properties)
                for interval in intervals_for_property(intervals, property_id, relationships)
            ]

        layout = self.engine.layout_timeline(request.start_date, request.days, intervals)
        return self.to_layout_out(layout)

    def day_status(self, request: DayStatusRequest) -> DayStatusOut:
        relationships = self.relationships_for(request.properties)
        intervals = intervals_from_records(request.records, tz_name=self.engine.tz_name)
        day = normalize_date(request.day, self.engine.tz_name)
        status = day_status(request.property_id, day, intervals, relationships)
        return DayStatusOut(
            property_id=request.property_id,
            day=day.date(),
            has_reservation=status.has_reservation,
            is_indirect=status.is_indirect,
            interval_ids=[str(interval.id) for interval in status.intervals],
        )

# ================================
# OUTPUT CONVERSION
# ================================

    def to_layout_out(self, layout: CalendarLayout) -> LayoutOut:
        rows = [
            WeekRowOut(index=row.index, days=[day.date() if day else None for day in row.slots])
            for row in layout.rows
        ]

        bars = []
        for bar in layout.bars:
            geometry = bar.geometry
            bars.append(BarOut(
                interval_id=str(bar.interval.id),
                scope_key=str(bar.scope_key),
                category=bar.interval.category,
                source_id=None if bar.interval.source_id is None else str(bar.interval.source_id),
                week_index=bar.week_index,
                start_slot=bar.placement.start_slot,
                end_slot=bar.placement.end_slot,
                continues_from_previous=bar.placement.continues_from_previous,
                continues_to_next=bar.placement.continues_to_next,
                lane=bar.lane,
                stacked_row=bar.stacked_row,
                top=lane_top(bar.stacked_row),
                geometry=GeometryOut(
                    left_fraction=geometry.left_fraction,
                    width_fraction=geometry.width_fraction,
                    left_percent=geometry.left_percent,
                    width_percent=geometry.width_percent,
                    round_left=geometry.round_left,
                    round_right=geometry.round_right,
                    style=geometry.style,
                ),
            ))

        lane_counts = []
        for scope_key, week_index in layout.lanes.keys():
            counts = [layout.lanes.lane_count(scope_key, week_index, tier) for tier in TIER_ORDER]
            lane_counts.append(LaneCountOut(
                scope_key=str(scope_key),
                week_index=week_index,
                direct=counts[0],
                relationship_block=counts[1],
                propagated_block=counts[2],
            ))

        return LayoutOut(rows=rows, bars=bars, lane_counts=lane_counts, cell_height=layout.cell_height())


def get_layout_service() -> LayoutService:
    """FastAPI dependency; override it to inject a configured service."""
    return LayoutService()
