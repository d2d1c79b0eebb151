"""
Overtime API Routes

Endpoints for pricing sessions, classifying days and monthly summaries.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.config import get_overtime_policy, get_settings
from backend.schemas.overtime import (
    CumulativeMinutesRequest,
    CumulativeMinutesResponse,
    DayTypeResponse,
    MonthlySummaryRequest,
)
from backend.services.calendar import get_holiday_calendar
from engines.schemas.overtime_engine import OvertimeBreakdown, OvertimeInput, OvertimePolicy
from engines.schemas.work_log import MonthlySummary
from engines.services.day_classifier import HolidayCalendar, classify_day, work_date_of
from engines.services.overtime_calculator import IncompleteSessionError, calculate_overtime
from engines.services.work_log import cumulative_minutes_before, summarize_month

router = APIRouter()


@router.post(
    "/calculate",
    response_model=OvertimeBreakdown,
    summary="Calculate session overtime",
    description="Partition a completed session into pay tiers and price it.",
)
async def calculate_session_overtime(
    request: OvertimeInput,
    policy: OvertimePolicy = Depends(get_overtime_policy),
    holidays: HolidayCalendar = Depends(get_holiday_calendar),
) -> OvertimeBreakdown:
    """Price one completed session."""
    try:
        return calculate_overtime(request, policy=policy, holidays=holidays)
    except IncompleteSessionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )


@router.get(
    "/day-type",
    response_model=DayTypeResponse,
    summary="Classify a work day",
)
async def get_day_type(
    work_date: date = Query(..., description="Calendar day (YYYY-MM-DD)"),
    is_public_holiday: bool | None = Query(None, description="Explicit public holiday override"),
    holidays: HolidayCalendar = Depends(get_holiday_calendar),
) -> DayTypeResponse:
    """Classify a day as weekday, weekend or public holiday."""
    return DayTypeResponse(
        work_date=work_date,
        day_type=classify_day(work_date, holidays, is_public_holiday),
        is_public_holiday_override=is_public_holiday,
    )


@router.get(
    "/policy",
    response_model=OvertimePolicy,
    summary="Get overtime policy",
    description="Rates, tier thresholds, block size and allowance in effect.",
)
async def get_policy(
    policy: OvertimePolicy = Depends(get_overtime_policy),
) -> OvertimePolicy:
    return policy


@router.post(
    "/cumulative-minutes",
    response_model=CumulativeMinutesResponse,
    summary="Minutes worked earlier the same day",
)
async def get_cumulative_minutes(
    request: CumulativeMinutesRequest,
    policy: OvertimePolicy = Depends(get_overtime_policy),
) -> CumulativeMinutesResponse:
    """Sum completed same-day logs that clocked in before the target."""
    return CumulativeMinutesResponse(
        log_id=request.target.id,
        work_date=work_date_of(request.target.clock_in, policy.timezone),
        cumulative_minutes_before=cumulative_minutes_before(
            request.target, request.logs, policy.timezone
        ),
    )


@router.post(
    "/monthly-summary",
    response_model=MonthlySummary,
    summary="Monthly pay summary",
    description="Recalculate every completed log in the month and total the pay.",
)
async def get_monthly_summary(
    request: MonthlySummaryRequest,
    policy: OvertimePolicy = Depends(get_overtime_policy),
    holidays: HolidayCalendar = Depends(get_holiday_calendar),
) -> MonthlySummary:
    """Build the monthly summary for the supplied logs."""
    return summarize_month(
        request.logs,
        request.year,
        request.month,
        policy=policy,
        holidays=holidays,
        payroll=get_settings().payroll_constants(),
        leaves=request.leaves,
        user_id=request.user_id,
    )
