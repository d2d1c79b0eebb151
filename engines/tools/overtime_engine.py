"""
Overtime Engine MCP Tool

Session overtime classification and pricing exposed as MCP tools.
"""

from datetime import date, datetime

from fastmcp import FastMCP

from backend.config import get_overtime_policy, get_settings
from engines.schemas.overtime_engine import OvertimeInput
from engines.services.day_classifier import HolidayCalendar, classify_day
from engines.services.overtime_calculator import calculate_overtime

# Initialize MCP server (will be started from server.py)
mcp = FastMCP(
    "ShiftPay Calculation Engines",
    instructions="""
ShiftPay overtime calculation for shift-based workers.

1. **Overtime Engine** (calculate_session_overtime, get_overtime_policy_constants)
   - Classifies the session day and splits minutes into two pay tiers
   - Shifts tier boundaries by minutes already worked earlier that day
   - Rounds each paid tier up to 30-minute blocks and prices it
   - Adds the outstation meal allowance

2. **Day Classifier** (classify_work_day)
   - Explicit override, then public holiday calendar, then weekend check

3. **Holiday Calendar** (list_public_holidays, set_public_holidays, add_public_holidays)
   - In-memory calendar owned by this server, seeded from PUBLIC_HOLIDAYS

All calculations are pure and reproducible from the same inputs.
""",
)

# The MCP host owns its own holiday calendar
holiday_calendar = HolidayCalendar(get_settings().public_holidays)


@mcp.tool()
async def calculate_session_overtime(
    clock_in: str,
    clock_out: str,
    is_outstation: bool = False,
    is_public_holiday: bool | None = None,
    cumulative_minutes_before: int = 0,
) -> dict:
    """
    Calculate the overtime pay breakdown for one completed work session.

    The session is classified as weekday, weekend or public holiday by its
    clock-in date, then split into two tiers against the day's threshold.
    Minutes already worked earlier the same day shift that threshold.

    Default schedules:
    - Weekday: first 10h fixed OT (unpaid), then 1.5x
    - Weekend: first 6h at 1.0x, then 1.5x
    - Public holiday: first 9h at 2.0x, then 3.0x

    Each paid tier is rounded up to 30-minute blocks before pricing.
    Outstation sessions add a flat meal allowance.

    Args:
        clock_in: Session start (ISO 8601)
        clock_out: Session end (ISO 8601)
        is_outstation: Outstation overnight shift
        is_public_holiday: Force public holiday classification
        cumulative_minutes_before: Minutes from completed sessions earlier that day

    Returns:
        Dictionary with tier minutes, tier amounts, allowance and totals

    Example:
        Weekday 09:00 to 20:00 (660 min), nothing earlier that day:
        - 600 min fixed OT (unpaid)
        - 60 min at 1.5x = 1.5 x 15.3846 x 1h = 23.08
    """
    input_data = OvertimeInput(
        clock_in=datetime.fromisoformat(clock_in),
        clock_out=datetime.fromisoformat(clock_out),
        is_outstation=is_outstation,
        is_public_holiday=is_public_holiday,
        cumulative_minutes_before=cumulative_minutes_before,
    )

    result = calculate_overtime(
        input_data,
        policy=get_overtime_policy(),
        holidays=holiday_calendar,
    )

    # Floats for JSON serialization
    return {
        "duration_minutes": result.duration_minutes,
        "work_date": result.work_date.isoformat(),
        "day_type": result.day_type.value,
        "cumulative_minutes_before": result.cumulative_minutes_before,
        "base_minutes": result.base_minutes,
        "tier1_minutes": result.tier1_minutes,
        "tier2_minutes": result.tier2_minutes,
        "tier1_rounded_minutes": result.tier1_rounded_minutes,
        "tier2_rounded_minutes": result.tier2_rounded_minutes,
        "tier1_multiplier": float(result.tier1_multiplier),
        "tier2_multiplier": float(result.tier2_multiplier),
        "tier1_amount": float(result.tier1_amount),
        "tier2_amount": float(result.tier2_amount),
        "allowance": float(result.allowance),
        "total_ot_amount": float(result.total_ot_amount),
        "total_amount": float(result.total_amount),
        "calculation_notes": result.calculation_notes,
    }


@mcp.tool()
async def classify_work_day(work_date: str, is_public_holiday: bool | None = None) -> dict:
    """
    Classify a calendar day as weekday, weekend or public holiday.

    Args:
        work_date: Date (YYYY-MM-DD)
        is_public_holiday: Explicit override, beats the holiday calendar

    Returns:
        Dictionary with the date and its day type
    """
    day = date.fromisoformat(work_date)
    return {
        "work_date": day.isoformat(),
        "day_type": classify_day(day, holiday_calendar, is_public_holiday).value,
    }


@mcp.tool()
async def get_overtime_policy_constants() -> dict:
    """
    Return the overtime policy in effect.

    Includes the base hourly rate and its derivation inputs, block size,
    outstation allowance and the tier schedule per day type.
    """
    policy = get_overtime_policy()
    return {
        "base_hourly_rate": float(policy.base_hourly_rate),
        "monthly_salary": float(policy.monthly_salary),
        "work_days_per_month": policy.work_days_per_month,
        "hours_per_day": policy.hours_per_day,
        "block_minutes": policy.block_minutes,
        "outstation_allowance": float(policy.outstation_allowance),
        "schedules": {
            day_type.value: {
                "threshold_minutes": rule.threshold_minutes,
                "first_tier_multiplier": float(rule.first_tier_multiplier),
                "overflow_multiplier": float(rule.overflow_multiplier),
            }
            for day_type, rule in policy.schedules.items()
        },
    }


@mcp.tool()
async def list_public_holidays() -> list[str]:
    """Return the public holiday calendar (YYYY-MM-DD, sorted)."""
    return [d.isoformat() for d in holiday_calendar.get()]


@mcp.tool()
async def set_public_holidays(holidays: list[str]) -> list[str]:
    """
    Replace the public holiday calendar.

    Args:
        holidays: Dates in YYYY-MM-DD format
    """
    return [d.isoformat() for d in holiday_calendar.replace(holidays)]


@mcp.tool()
async def add_public_holidays(holidays: list[str]) -> list[str]:
    """
    Add dates to the public holiday calendar. Duplicates are ignored.

    Args:
        holidays: Dates in YYYY-MM-DD format
    """
    return [d.isoformat() for d in holiday_calendar.extend(holidays)]
