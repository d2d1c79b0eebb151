"""Pydantic API Schemas for ShiftPay."""

from backend.schemas.overtime import (
    CumulativeMinutesRequest,
    CumulativeMinutesResponse,
    DayTypeResponse,
    HolidayListResponse,
    HolidayUpdate,
    MonthlySummaryRequest,
)

__all__ = [
    "CumulativeMinutesRequest",
    "CumulativeMinutesResponse",
    "DayTypeResponse",
    "HolidayListResponse",
    "HolidayUpdate",
    "MonthlySummaryRequest",
]
