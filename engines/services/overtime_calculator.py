"""
Overtime Calculator

Pure calculation logic for tiered, calendar-sensitive overtime pay.

Rules (default policy):
- Weekdays: first 10 hours are fixed OT (recorded, paid 0), beyond 10 hours 1.5x
- Weekends: first 6 hours 1.0x, beyond 6 hours 1.5x
- Public holidays: first 9 hours 2.0x, beyond 9 hours 3.0x
- Outstation overnight: flat allowance once per session
- Each paid tier is rounded up to 30-minute blocks before pricing
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from engines.schemas.overtime_engine import (
    DEFAULT_POLICY,
    OvertimeBreakdown,
    OvertimeInput,
    OvertimePolicy,
    TierAllocation,
    TierRule,
)
from engines.services.day_classifier import HolidayCalendar, classify_day, work_date_of

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MINUTES_PER_HOUR = Decimal(60)


class IncompleteSessionError(ValueError):
    """Raised when a session without a clock-out is priced."""


def elapsed_minutes(input_data: OvertimeInput) -> int:
    """Whole minutes between clock-in and clock-out, truncated toward zero."""
    if input_data.clock_out is None:
        raise IncompleteSessionError("Session has no clock-out; cannot compute a breakdown")
    seconds = (input_data.clock_out - input_data.clock_in).total_seconds()
    return int(seconds / 60)


def partition_minutes(
    rule: TierRule,
    cumulative_minutes_before: int,
    session_minutes: int,
) -> tuple[int, int]:
    """
    Split a session into (first tier, overflow) minutes.

    The threshold applies to minutes worked in the whole day, so earlier
    sessions push the boundary forward. Non-positive sessions get (0, 0).
    """
    if session_minutes <= 0:
        return 0, 0

    threshold = rule.threshold_minutes
    before = max(0, cumulative_minutes_before)

    if before >= threshold:
        return 0, session_minutes

    if before + session_minutes > threshold:
        first = threshold - before
        return first, session_minutes - first

    return session_minutes, 0


def round_to_block(minutes: int, block_minutes: int = 30) -> int:
    """Round up to the next whole block. Zero stays zero."""
    if minutes <= 0:
        return 0
    return -(-minutes // block_minutes) * block_minutes


def price_tier(
    minutes: int,
    multiplier: Decimal,
    base_hourly_rate: Decimal,
    block_minutes: int = 30,
) -> Decimal:
    """Block-rounded hours x base rate x multiplier, in cents."""
    rounded = round_to_block(minutes, block_minutes)
    if rounded == 0 or multiplier == 0:
        return Decimal("0.00")
    hours = Decimal(rounded) / MINUTES_PER_HOUR
    return (hours * base_hourly_rate * multiplier).quantize(CENTS, rounding=ROUND_HALF_UP)


def _allocate(
    label: str,
    minutes: int,
    multiplier: Decimal,
    policy: OvertimePolicy,
) -> TierAllocation:
    paid = multiplier > 0
    return TierAllocation(
        label=label,
        multiplier=multiplier,
        minutes=minutes,
        rounded_minutes=round_to_block(minutes, policy.block_minutes) if paid else 0,
        amount=price_tier(minutes, multiplier, policy.base_hourly_rate, policy.block_minutes)
        if paid
        else Decimal("0.00"),
        paid=paid,
    )


def calculate_overtime(
    input_data: OvertimeInput,
    policy: OvertimePolicy = DEFAULT_POLICY,
    holidays: HolidayCalendar | Iterable[date] | None = None,
) -> OvertimeBreakdown:
    """
    Calculate the overtime breakdown for one completed session.

    Algorithm:
    1. Classify the clock-in day (override, holiday calendar, weekend)
    2. Partition elapsed minutes against the day's threshold, shifted by
       the minutes already worked earlier that day
    3. Round each paid tier up to whole blocks and price it
    4. Add the outstation allowance
    5. Sum the priced tiers and the allowance
    """
    notes: list[str] = []

    duration = elapsed_minutes(input_data)
    work_date = work_date_of(input_data.clock_in, policy.timezone)
    day_type = classify_day(work_date, holidays, input_data.is_public_holiday)
    rule = policy.rule_for(day_type)
    allowance = (
        policy.outstation_allowance.quantize(CENTS, rounding=ROUND_HALF_UP)
        if input_data.is_outstation
        else Decimal("0.00")
    )

    if input_data.is_public_holiday is True:
        notes.append("Public holiday set by explicit override")

    # Step 2: partition
    first_minutes, overflow_minutes = partition_minutes(
        rule, input_data.cumulative_minutes_before, duration
    )
    if duration <= 0:
        notes.append("Clock-out not after clock-in; no overtime tiers")

    # Step 3: round and price
    first = _allocate(
        "tier1" if rule.first_tier_paid else "base",
        first_minutes,
        rule.first_tier_multiplier,
        policy,
    )
    overflow = _allocate("tier2", overflow_minutes, rule.overflow_multiplier, policy)

    for tier in (first, overflow):
        if tier.paid and tier.rounded_minutes != tier.minutes:
            notes.append(
                f"{tier.label}: {tier.minutes} min rounded up to {tier.rounded_minutes} min"
            )

    # Step 4/5: totals from the priced tiers only
    total_ot_amount = first.amount + overflow.amount
    total_amount = total_ot_amount + allowance

    logger.debug(
        f"Overtime calculated: day_type={day_type.value}, duration={duration}, "
        f"before={input_data.cumulative_minutes_before}, total={total_amount}"
    )

    return OvertimeBreakdown(
        duration_minutes=duration,
        work_date=work_date,
        day_type=day_type,
        cumulative_minutes_before=input_data.cumulative_minutes_before,
        base_minutes=0 if first.paid else first.minutes,
        tier1_minutes=first.minutes if first.paid else 0,
        tier2_minutes=overflow.minutes,
        tier1_rounded_minutes=first.rounded_minutes,
        tier2_rounded_minutes=overflow.rounded_minutes,
        tier1_multiplier=rule.first_tier_multiplier,
        tier2_multiplier=rule.overflow_multiplier,
        tier1_amount=first.amount,
        tier2_amount=overflow.amount,
        allowance=allowance,
        total_ot_amount=total_ot_amount,
        total_amount=total_amount,
        tiers=[first, overflow],
        calculation_notes=notes,
    )
