"""
Holiday API Routes

Read, replace and extend the public holiday calendar.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from backend.schemas.overtime import HolidayListResponse, HolidayUpdate
from backend.services.calendar import get_holiday_calendar
from engines.services.day_classifier import HolidayCalendar

router = APIRouter()


def _response(calendar: HolidayCalendar) -> HolidayListResponse:
    holidays = calendar.get()
    return HolidayListResponse(holidays=holidays, count=len(holidays))


@router.get(
    "/",
    response_model=HolidayListResponse,
    summary="List public holidays",
)
async def list_holidays(
    calendar: HolidayCalendar = Depends(get_holiday_calendar),
) -> HolidayListResponse:
    return _response(calendar)


@router.put(
    "/",
    response_model=HolidayListResponse,
    summary="Replace public holidays",
)
async def replace_holidays(
    request: HolidayUpdate,
    calendar: HolidayCalendar = Depends(get_holiday_calendar),
) -> HolidayListResponse:
    """Replace the whole calendar."""
    try:
        calendar.replace(request.holidays)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return _response(calendar)


@router.post(
    "/",
    response_model=HolidayListResponse,
    summary="Add public holidays",
)
async def add_holidays(
    request: HolidayUpdate,
    calendar: HolidayCalendar = Depends(get_holiday_calendar),
) -> HolidayListResponse:
    """Add dates to the calendar; duplicates are ignored."""
    try:
        calendar.extend(request.holidays)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return _response(calendar)
