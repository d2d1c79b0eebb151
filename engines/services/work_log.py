"""
Work Log Service

Same-day accumulation and monthly payroll summaries over stored work
logs. Fetching the logs is the caller's job; everything here is pure.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from engines.schemas.overtime_engine import DEFAULT_POLICY, OvertimeInput, OvertimePolicy
from engines.schemas.work_log import (
    LeaveRecord,
    MonthlyLogRecord,
    MonthlySummary,
    PayrollConstants,
    WorkLog,
)
from engines.services.day_classifier import HolidayCalendar, session_instant, work_date_of
from engines.services.overtime_calculator import calculate_overtime

logger = logging.getLogger(__name__)

# Leave categories that forfeit the full attendance reward
FORFEITING_LEAVE_TYPES = frozenset(
    {
        "medical",
        "medical_leave",
        "annual",
        "annual_leave",
        "emergency",
        "emergency_leave",
    }
)


def log_minutes(log: WorkLog) -> int:
    """Stored duration, falling back to the clock timestamps."""
    if log.duration_minutes > 0:
        return log.duration_minutes
    if log.clock_out is None:
        return 0
    return max(0, int((log.clock_out - log.clock_in).total_seconds() / 60))


def cumulative_minutes_before(
    target: WorkLog,
    logs: Iterable[WorkLog],
    timezone: str | None = None,
) -> int:
    """
    Minutes the same worker already completed earlier on the target's day.

    Only completed logs that clocked in before the target count; the
    target itself is excluded.
    """
    target_day = work_date_of(target.clock_in, timezone)
    target_start = session_instant(target.clock_in, timezone)
    total = 0
    for log in logs:
        if log.id == target.id or log.user_id != target.user_id:
            continue
        if not log.is_completed:
            continue
        if work_date_of(log.clock_in, timezone) != target_day:
            continue
        if session_instant(log.clock_in, timezone) >= target_start:
            continue
        total += log_minutes(log)
    return total


def has_forfeiting_leave(leaves: Iterable[LeaveRecord], year: int, month: int) -> bool:
    return any(
        leave.leave_date.year == year
        and leave.leave_date.month == month
        and leave.leave_type.strip().lower() in FORFEITING_LEAVE_TYPES
        for leave in leaves
    )


def _in_month(day: date, year: int, month: int) -> bool:
    return day.year == year and day.month == month


def summarize_month(
    logs: Sequence[WorkLog],
    year: int,
    month: int,
    policy: OvertimePolicy = DEFAULT_POLICY,
    holidays: HolidayCalendar | Iterable[date] | None = None,
    payroll: PayrollConstants | None = None,
    leaves: Iterable[LeaveRecord] = (),
    user_id: str | None = None,
) -> MonthlySummary:
    """
    Build a monthly pay summary.

    Every completed log in the month is recalculated in clock-in order,
    each one positioned after the minutes of earlier same-day logs.
    Earlier minutes are the recalculated durations of the preceding
    records, so placement and pay always agree with what is reported.
    In-progress logs are skipped. When ``user_id`` is given, logs of
    other workers are left out.

    Grand total = basic salary + fixed OT allowance + OT pay + food
    allowance + attendance reward + outstation allowances.
    """
    payroll = payroll or PayrollConstants()
    notes: list[str] = []

    if user_id is not None:
        logs = [log for log in logs if log.user_id == user_id]

    month_logs = sorted(
        (
            log
            for log in logs
            if log.is_completed and _in_month(work_date_of(log.clock_in, policy.timezone), year, month)
        ),
        key=lambda log: session_instant(log.clock_in, policy.timezone),
    )

    skipped = sum(1 for log in logs if not log.is_completed)
    if skipped:
        notes.append(f"Skipped {skipped} in-progress session(s)")

    records: list[MonthlyLogRecord] = []
    total_ot_pay = Decimal("0.00")
    outstation_allowances = Decimal("0.00")
    total_minutes = 0
    # Minutes already recorded per worker and day
    worked: dict[tuple[str, date], int] = {}

    for log in month_logs:
        day_key = (log.user_id, work_date_of(log.clock_in, policy.timezone))
        before = worked.get(day_key, 0)
        breakdown = calculate_overtime(
            OvertimeInput(
                clock_in=log.clock_in,
                clock_out=log.clock_out,
                is_outstation=log.is_outstation,
                is_public_holiday=log.is_public_holiday,
                cumulative_minutes_before=before,
            ),
            policy=policy,
            holidays=holidays,
        )
        minutes = max(0, breakdown.duration_minutes)
        worked[day_key] = before + minutes

        records.append(
            MonthlyLogRecord(
                log_id=log.id,
                work_date=breakdown.work_date,
                day_type=breakdown.day_type,
                duration_minutes=minutes,
                cumulative_minutes_before=before,
                ot_amount=breakdown.total_ot_amount,
                allowance_amount=breakdown.allowance,
                is_public_holiday=log.is_public_holiday,
                is_outstation=log.is_outstation,
                check_in_location=log.check_in_location,
                check_out_location=log.check_out_location,
            )
        )
        total_ot_pay += breakdown.total_ot_amount
        outstation_allowances += breakdown.allowance
        total_minutes += minutes

    full_attendance_reward = payroll.full_attendance_reward
    if has_forfeiting_leave(leaves, year, month):
        full_attendance_reward = Decimal("0.00")
        notes.append("Full attendance reward forfeited: leave taken this month")

    grand_total = (
        payroll.basic_salary
        + payroll.fixed_ot_allowance
        + total_ot_pay
        + payroll.food_allowance
        + full_attendance_reward
        + outstation_allowances
    )

    logger.info(
        f"Monthly summary {year}-{month:02d}: {len(records)} sessions, "
        f"ot_pay={total_ot_pay}, grand_total={grand_total}"
    )

    return MonthlySummary(
        year=year,
        month=month,
        user_id=user_id,
        records=records,
        total_minutes=total_minutes,
        basic_salary=payroll.basic_salary,
        fixed_ot_allowance=payroll.fixed_ot_allowance,
        total_ot_pay=total_ot_pay,
        food_allowance=payroll.food_allowance,
        full_attendance_reward=full_attendance_reward,
        outstation_allowances=outstation_allowances,
        grand_total=grand_total,
        calculation_notes=notes,
    )
