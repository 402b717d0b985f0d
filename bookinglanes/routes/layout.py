"""
Layout API endpoints for the calendar frontend
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from ..schemas import (
    DayStatusOut, DayStatusRequest, LayoutOut, MonthLayoutRequest,
    PropertyMonthLayoutRequest, RollingLayoutRequest, TimelineLayoutRequest,
)
from ..layout.core.exceptions import LayoutError
from ..services.layout_service import LayoutService, get_layout_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(e: LayoutError) -> HTTPException:
    logger.warning(f"Rejected layout request: {e}")
    return HTTPException(status_code=400, detail=str(e))


@router.post("/month", response_model=LayoutOut)
async def month_layout(
    request: MonthLayoutRequest,
    service: LayoutService = Depends(get_layout_service),
):
    """Lay out intervals over the month grid containing the reference date."""
    try:
        return service.month_layout(request)
    except LayoutError as e:
        raise _bad_request(e)

@router.post("/rolling", response_model=LayoutOut)
async def rolling_layout(
    request: RollingLayoutRequest,
    service: LayoutService = Depends(get_layout_service),
):
    """Lay out intervals over week rows of a rolling N-day window."""
    try:
        return service.rolling_layout(request)
    except LayoutError as e:
        raise _bad_request(e)

@router.post("/property-month", response_model=LayoutOut)
async def property_month_layout(
    request: PropertyMonthLayoutRequest,
    service: LayoutService = Depends(get_layout_service),
):
    """Month view of a single property built from raw reservation records."""
    try:
        return service.property_month_layout(request)
    except LayoutError as e:
        raise _bad_request(e)

@router.post("/timeline", response_model=LayoutOut)
async def timeline_layout(
    request: TimelineLayoutRequest,
    service: LayoutService = Depends(get_layout_service),
):
    """Multi-property timeline: one unbroken row per property."""
    try:
        return service.timeline_layout(request)
    except LayoutError as e:
        raise _bad_request(e)

@router.post("/day-status", response_model=DayStatusOut)
async def day_status(
    request: DayStatusRequest,
    service: LayoutService = Depends(get_layout_service),
):
    try:
        return service.day_status(request)
    except LayoutError as e:
        raise _bad_request(e)
