"""
Work Log Schemas

Stored session records and monthly payroll summary models.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from engines.schemas.overtime_engine import DayType


class WorkLog(BaseModel):
    """A clock-in/clock-out record as kept by the session store."""

    id: str = Field(..., description="Unique log identifier")
    user_id: str = Field(..., description="Worker identifier")
    clock_in: datetime
    clock_out: datetime | None = None
    duration_minutes: int = Field(default=0, ge=0, description="Stored elapsed minutes")
    is_outstation: bool = False
    is_public_holiday: bool = False
    check_in_location: str | None = None
    check_out_location: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.clock_out is not None


class LeaveRecord(BaseModel):
    """A leave day; medical, annual and emergency leave forfeit the attendance reward."""

    leave_date: date
    leave_type: str = Field(..., description="Leave category, e.g. 'medical' or 'annual_leave'")


class PayrollConstants(BaseModel):
    """Fixed monthly pay components."""

    basic_salary: Decimal = Field(default=Decimal("3200"), ge=0)
    fixed_ot_allowance: Decimal = Field(default=Decimal("440"), ge=0)
    food_allowance: Decimal = Field(default=Decimal("250"), ge=0)
    full_attendance_reward: Decimal = Field(default=Decimal("300"), ge=0)


class MonthlyLogRecord(BaseModel):
    """One completed session as it appears in a monthly summary."""

    log_id: str
    work_date: date
    day_type: DayType
    duration_minutes: int
    cumulative_minutes_before: int
    ot_amount: Decimal
    allowance_amount: Decimal
    is_public_holiday: bool
    is_outstation: bool
    check_in_location: str | None = None
    check_out_location: str | None = None


class MonthlySummary(BaseModel):
    """Monthly pay summary built from recalculated session breakdowns."""

    year: int
    month: int = Field(..., ge=1, le=12)
    user_id: str | None = None

    records: list[MonthlyLogRecord] = Field(default_factory=list)
    total_minutes: int = 0

    basic_salary: Decimal
    fixed_ot_allowance: Decimal
    total_ot_pay: Decimal
    food_allowance: Decimal
    full_attendance_reward: Decimal
    outstation_allowances: Decimal
    grand_total: Decimal

    calculation_notes: list[str] = Field(default_factory=list)
