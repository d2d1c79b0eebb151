"""
Overtime Pydantic Schemas

API request/response models for overtime and holiday endpoints.
"""

from datetime import date

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from engines.schemas.overtime_engine import DayType
from engines.schemas.work_log import LeaveRecord, WorkLog


class DayTypeResponse(BaseModel):
    """Schema for a day classification lookup."""

    work_date: date
    day_type: DayType
    is_public_holiday_override: bool | None = None


class HolidayUpdate(BaseModel):
    """Schema for replacing or extending the public holiday calendar."""

    holidays: list[str] = Field(
        ...,
        description="Dates in YYYY-MM-DD format",
        examples=[["2025-01-01", "2025-08-31"]],
    )


class HolidayListResponse(BaseModel):
    """Schema for the current public holiday calendar."""

    holidays: list[date]
    count: int


class MonthlySummaryRequest(BaseModel):
    """Schema for a monthly pay summary over already-fetched work logs."""

    user_id: str = Field(..., description="Worker the summary is for")
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)
    logs: list[WorkLog] = Field(default_factory=list)
    leaves: list[LeaveRecord] = Field(default_factory=list)

    @field_validator("logs")
    @classmethod
    def validate_single_worker(cls, v: list[WorkLog], info: ValidationInfo) -> list[WorkLog]:
        """One payroll, one worker."""
        user_id = info.data.get("user_id")
        others = sorted({log.user_id for log in v if log.user_id != user_id})
        if user_id is not None and others:
            raise ValueError(f"Logs belong to other workers: {', '.join(others)}")
        return v


class CumulativeMinutesRequest(BaseModel):
    """Schema for looking up minutes worked earlier the same day."""

    target: WorkLog
    logs: list[WorkLog] = Field(default_factory=list)


class CumulativeMinutesResponse(BaseModel):
    log_id: str
    work_date: date
    cumulative_minutes_before: int
