from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List, Union, Literal, Annotated
from .models import IntervalCategory, PropertyType, RoundingStyle

# Dates may arrive as date objects, datetimes (any timezone) or ISO strings;
# the normalizer pins all of them to the canonical hour of their calendar day.
DateInput = Union[datetime, date, str]

# ----------------- Interval Schemas ---------------------

class IntervalInBase(BaseModel):
    id: str
    scope_key: str
    start: DateInput
    end: DateInput

class DirectBookingIn(IntervalInBase):
    category: Literal["direct"]
    platform: Optional[str] = None

class RelationshipBlockIn(IntervalInBase):
    category: Literal["relationship_block"]
    source_id: Optional[str] = None

class PropagatedBlockIn(IntervalInBase):
    category: Literal["propagated_block"]
    source_id: Optional[str] = None

IntervalIn = Annotated[
    Union[DirectBookingIn, RelationshipBlockIn, PropagatedBlockIn],
    Field(discriminator="category"),
]

# ----------------- Reservation Source Schemas ---------------------

class ReservationRecordIn(BaseModel):
    """A reservation row as the reservation source returns it."""
    id: str
    property_id: str
    start_date: DateInput
    end_date: DateInput
    platform: Optional[str] = "Other"
    status: Optional[str] = None
    notes: Optional[str] = None
    source_reservation_id: Optional[str] = None
    is_blocking: bool = False
    is_relationship_block: bool = False

    class Config:
        from_attributes = True

class PropertyIn(BaseModel):
    id: str
    name: Optional[str] = ""
    type: PropertyType = PropertyType.STANDALONE
    parent_id: Optional[str] = None

    class Config:
        from_attributes = True

# ----------------- Layout Request Schemas ---------------------

class MonthLayoutRequest(BaseModel):
    reference_date: DateInput
    intervals: List[IntervalIn] = []
    force_continuous_ids: List[str] = []

class RollingLayoutRequest(BaseModel):
    start_date: DateInput
    days: Optional[int] = Field(default=None, ge=1)
    intervals: List[IntervalIn] = []
    force_continuous_ids: List[str] = []

class PropertyMonthLayoutRequest(BaseModel):
    reference_date: DateInput
    property_id: str
    properties: List[PropertyIn] = []
    records: List[ReservationRecordIn] = []

class TimelineLayoutRequest(BaseModel):
    start_date: DateInput
    days: Optional[int] = Field(default=None, ge=1)
    properties: List[PropertyIn] = []
    records: List[ReservationRecordIn] = []
    propagate_blocks: bool = False

class DayStatusRequest(BaseModel):
    property_id: str
    day: DateInput
    properties: List[PropertyIn] = []
    records: List[ReservationRecordIn] = []

# ----------------- Layout Response Schemas ---------------------

class GeometryOut(BaseModel):
    left_fraction: float
    width_fraction: float
    left_percent: float
    width_percent: float
    round_left: bool
    round_right: bool
    style: RoundingStyle

class BarOut(BaseModel):
    interval_id: str
    scope_key: str
    category: IntervalCategory
    source_id: Optional[str] = None
    week_index: int
    start_slot: int
    end_slot: int
    continues_from_previous: bool
    continues_to_next: bool
    lane: int
    stacked_row: int
    top: int
    geometry: GeometryOut

class WeekRowOut(BaseModel):
    index: int
    days: List[Optional[date]]

class LaneCountOut(BaseModel):
    scope_key: str
    week_index: int
    direct: int
    relationship_block: int
    propagated_block: int

class LayoutOut(BaseModel):
    rows: List[WeekRowOut]
    bars: List[BarOut]
    lane_counts: List[LaneCountOut]
    cell_height: int

class DayStatusOut(BaseModel):
    property_id: str
    day: date
    has_reservation: bool
    is_indirect: bool
    interval_ids: List[str]
