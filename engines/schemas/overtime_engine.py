"""
Overtime Engine Schemas

Input/output models for tiered overtime classification and pricing.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class DayType(str, Enum):
    """Calendar classification governing which tier schedule applies."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    PUBLIC_HOLIDAY = "public_holiday"


class TierRule(BaseModel):
    """
    Two-tier schedule for one day type.

    Minutes worked in a day up to ``threshold_minutes`` fall in the first
    tier; anything beyond falls in the overflow tier. A first-tier
    multiplier of zero marks an unpaid base ("fixed OT") tier.
    """

    threshold_minutes: int = Field(..., gt=0, description="First tier length in minutes")
    first_tier_multiplier: Decimal = Field(..., ge=0, description="Rate multiplier for the first tier")
    overflow_multiplier: Decimal = Field(..., gt=0, description="Rate multiplier beyond the threshold")

    @property
    def first_tier_paid(self) -> bool:
        return self.first_tier_multiplier > 0


DEFAULT_TIER_SCHEDULES: dict[DayType, TierRule] = {
    DayType.WEEKDAY: TierRule(
        threshold_minutes=600,
        first_tier_multiplier=Decimal("0"),
        overflow_multiplier=Decimal("1.5"),
    ),
    DayType.WEEKEND: TierRule(
        threshold_minutes=360,
        first_tier_multiplier=Decimal("1.0"),
        overflow_multiplier=Decimal("1.5"),
    ),
    DayType.PUBLIC_HOLIDAY: TierRule(
        threshold_minutes=540,
        first_tier_multiplier=Decimal("2.0"),
        overflow_multiplier=Decimal("3.0"),
    ),
}


class OvertimePolicy(BaseModel):
    """
    Read-only compensation policy supplied to the engine at startup.

    The base hourly rate is derived once from the monthly salary and is
    never recomputed per call.
    """

    monthly_salary: Decimal = Field(default=Decimal("3200"), gt=0)
    work_days_per_month: int = Field(default=26, gt=0)
    hours_per_day: int = Field(default=8, gt=0)
    block_minutes: int = Field(default=30, gt=0, description="Billing block size in minutes")
    outstation_allowance: Decimal = Field(
        default=Decimal("30"),
        ge=0,
        description="Flat allowance per outstation session",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA zone used to find the calendar day of aware clock-in times",
    )
    schedules: dict[DayType, TierRule] = Field(
        default_factory=lambda: dict(DEFAULT_TIER_SCHEDULES),
    )

    @computed_field
    @property
    def base_hourly_rate(self) -> Decimal:
        """Monthly salary / work days / hours per day, unrounded."""
        return self.monthly_salary / Decimal(self.work_days_per_month) / Decimal(self.hours_per_day)

    def rule_for(self, day_type: DayType) -> TierRule:
        return self.schedules[day_type]


DEFAULT_POLICY = OvertimePolicy()


class OvertimeInput(BaseModel):
    """A single clock-in/clock-out interval to be priced."""

    clock_in: datetime = Field(..., description="Session start")
    clock_out: datetime | None = Field(
        default=None,
        description="Session end (absent while the session is in progress)",
    )
    is_outstation: bool = Field(
        default=False,
        description="Outstation overnight shift; triggers the flat allowance",
    )
    is_public_holiday: bool | None = Field(
        default=None,
        description="Explicit public holiday override, beats the calendar lookup",
    )
    cumulative_minutes_before: int = Field(
        default=0,
        ge=0,
        description="Minutes from completed sessions earlier the same day",
    )


class TierAllocation(BaseModel):
    """Minutes assigned to one tier and their priced amount."""

    label: str = Field(..., description="Tier label, e.g. 'base', 'tier1', 'tier2'")
    multiplier: Decimal
    minutes: int = Field(..., ge=0)
    rounded_minutes: int = Field(..., ge=0, description="Minutes after block rounding (0 when unpaid)")
    amount: Decimal = Field(..., description="Priced amount (0 when unpaid)")
    paid: bool

    @computed_field
    @property
    def hours(self) -> Decimal:
        return Decimal(self.minutes) / Decimal(60)


class OvertimeBreakdown(BaseModel):
    """
    Output from the overtime engine.

    Per-tier minutes always sum to ``max(0, duration_minutes)``. Money
    fields are quantized to cents per tier; totals are exact sums of the
    tier amounts.
    """

    duration_minutes: int = Field(..., description="Elapsed session minutes (may be <= 0)")
    work_date: date
    day_type: DayType
    cumulative_minutes_before: int

    # Minutes per tier
    base_minutes: int = Field(..., ge=0, description="Unpaid fixed OT minutes (weekday first tier)")
    tier1_minutes: int = Field(..., ge=0, description="Paid first-tier minutes")
    tier2_minutes: int = Field(..., ge=0, description="Overflow-tier minutes")

    # Rounded minutes and multipliers for paid tiers
    tier1_rounded_minutes: int = Field(..., ge=0)
    tier2_rounded_minutes: int = Field(..., ge=0)
    tier1_multiplier: Decimal
    tier2_multiplier: Decimal

    # Amounts
    tier1_amount: Decimal
    tier2_amount: Decimal
    allowance: Decimal = Field(..., description="Outstation allowance (0 if not outstation)")
    total_ot_amount: Decimal = Field(..., description="Sum of paid tier amounts, excludes allowance")
    total_amount: Decimal = Field(..., description="Total OT amount plus allowance")

    tiers: list[TierAllocation] = Field(
        default_factory=list,
        description="Ordered tier partition for audit",
    )
    calculation_notes: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def base_hours(self) -> Decimal:
        return Decimal(self.base_minutes) / Decimal(60)
