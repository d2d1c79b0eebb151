"""
Day Classifier

Calendar classification of work days and the host-owned public holiday
calendar.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from engines.schemas.overtime_engine import DayType

logger = logging.getLogger(__name__)

# Saturday and Sunday per date.weekday()
WEEKEND_DAYS = frozenset({5, 6})


def parse_holiday(value: date | str) -> date:
    """Accept a date or a YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"Invalid holiday date {value!r}, expected YYYY-MM-DD") from e


class HolidayCalendar:
    """
    Mutable set of public holiday dates owned by the host application.

    The engine only reads it; the host decides when to replace or extend
    it. Nothing is persisted here.
    """

    def __init__(self, holidays: Iterable[date | str] = ()):
        self._dates: set[date] = {parse_holiday(h) for h in holidays}

    def __contains__(self, day: date) -> bool:
        return day in self._dates

    def __len__(self) -> int:
        return len(self._dates)

    def get(self) -> list[date]:
        """Sorted copy of the current holiday list."""
        return sorted(self._dates)

    def replace(self, holidays: Iterable[date | str]) -> list[date]:
        # Parse first; a bad entry leaves the calendar unchanged
        parsed = {parse_holiday(h) for h in holidays}
        self._dates = parsed
        logger.info(f"Public holiday calendar replaced: {len(parsed)} dates")
        return self.get()

    def extend(self, holidays: Iterable[date | str]) -> list[date]:
        parsed = {parse_holiday(h) for h in holidays}
        added = parsed - self._dates
        self._dates |= parsed
        logger.info(f"Public holiday calendar extended: {len(added)} new dates")
        return self.get()

    def is_holiday(self, day: date) -> bool:
        return day in self._dates


def work_date_of(clock_in: datetime, timezone: str | None = None) -> date:
    """
    Calendar day a session belongs to.

    Aware timestamps are converted into ``timezone`` first when one is
    configured; naive timestamps are taken as already local.
    """
    if timezone and clock_in.tzinfo is not None:
        clock_in = clock_in.astimezone(ZoneInfo(timezone))
    return clock_in.date()


def classify_day(
    work_date: date,
    holidays: HolidayCalendar | Iterable[date] | None = None,
    is_public_holiday: bool | None = None,
) -> DayType:
    """
    Classify a calendar day.

    Precedence: explicit override, then the holiday calendar, then the
    weekend check. Total over all dates, never raises.
    """
    if isinstance(work_date, datetime):
        work_date = work_date.date()

    if is_public_holiday is True:
        return DayType.PUBLIC_HOLIDAY

    if holidays is not None and work_date in holidays:
        return DayType.PUBLIC_HOLIDAY

    if work_date.weekday() in WEEKEND_DAYS:
        return DayType.WEEKEND

    return DayType.WEEKDAY


def session_instant(clock_in: datetime, timezone: str | None = None) -> datetime:
    """
    Aware timestamp used to order sessions.

    Naive timestamps are read as local time in ``timezone`` (UTC when none
    is configured), matching how ``work_date_of`` dates them.
    """
    if clock_in.tzinfo is not None:
        return clock_in
    return clock_in.replace(tzinfo=ZoneInfo(timezone or "UTC"))
