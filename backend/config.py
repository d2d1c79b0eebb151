"""
ShiftPay Configuration

Environment-based settings for the overtime pay engine.
"""

from datetime import date
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from engines.schemas.overtime_engine import DayType, OvertimePolicy, TierRule
from engines.schemas.work_log import PayrollConstants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "ShiftPay"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Base rate derivation
    basic_salary: Decimal = Field(default=Decimal("3200"), gt=0, description="Monthly basic salary")
    work_days_per_month: int = Field(default=26, gt=0)
    hours_per_day: int = Field(default=8, gt=0)

    # Billing
    block_minutes: int = Field(default=30, gt=0, description="OT billing block in minutes")
    outstation_allowance: Decimal = Field(
        default=Decimal("30"),
        ge=0,
        description="Meal allowance per outstation overnight session",
    )
    timezone: str = Field(
        default="Asia/Kuala_Lumpur",
        description="Zone used to find the calendar day of a clock-in",
    )

    # Tier schedules (minutes / multipliers)
    weekday_fixed_ot_minutes: int = 600  # unpaid
    weekday_overflow_rate: Decimal = Decimal("1.5")
    weekend_first_tier_minutes: int = 360
    weekend_first_tier_rate: Decimal = Decimal("1.0")
    weekend_overflow_rate: Decimal = Decimal("1.5")
    public_holiday_first_tier_minutes: int = 540
    public_holiday_first_tier_rate: Decimal = Decimal("2.0")
    public_holiday_overflow_rate: Decimal = Decimal("3.0")

    # Initial public holiday calendar (YYYY-MM-DD), JSON list in the env
    public_holidays: list[date] = Field(default_factory=list)

    # Monthly payroll
    fixed_ot_allowance: Decimal = Decimal("440")
    food_allowance: Decimal = Decimal("250")
    full_attendance_reward: Decimal = Decimal("300")

    # Error Monitoring
    sentry_dsn: str = Field(
        default="",
        description="Sentry DSN for error monitoring (leave empty to disable)",
    )

    @computed_field
    @property
    def base_hourly_rate(self) -> Decimal:
        """Basic salary / work days / hours per day."""
        return self.basic_salary / Decimal(self.work_days_per_month) / Decimal(self.hours_per_day)

    def overtime_policy(self) -> OvertimePolicy:
        """Engine policy built from these settings."""
        return OvertimePolicy(
            monthly_salary=self.basic_salary,
            work_days_per_month=self.work_days_per_month,
            hours_per_day=self.hours_per_day,
            block_minutes=self.block_minutes,
            outstation_allowance=self.outstation_allowance,
            timezone=self.timezone or None,
            schedules={
                DayType.WEEKDAY: TierRule(
                    threshold_minutes=self.weekday_fixed_ot_minutes,
                    first_tier_multiplier=Decimal("0"),
                    overflow_multiplier=self.weekday_overflow_rate,
                ),
                DayType.WEEKEND: TierRule(
                    threshold_minutes=self.weekend_first_tier_minutes,
                    first_tier_multiplier=self.weekend_first_tier_rate,
                    overflow_multiplier=self.weekend_overflow_rate,
                ),
                DayType.PUBLIC_HOLIDAY: TierRule(
                    threshold_minutes=self.public_holiday_first_tier_minutes,
                    first_tier_multiplier=self.public_holiday_first_tier_rate,
                    overflow_multiplier=self.public_holiday_overflow_rate,
                ),
            },
        )

    def payroll_constants(self) -> PayrollConstants:
        return PayrollConstants(
            basic_salary=self.basic_salary,
            fixed_ot_allowance=self.fixed_ot_allowance,
            food_allowance=self.food_allowance,
            full_attendance_reward=self.full_attendance_reward,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_overtime_policy() -> OvertimePolicy:
    """Policy is read-only after startup, so it is built once."""
    return get_settings().overtime_policy()
