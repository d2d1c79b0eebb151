"""
Holiday Calendar Service

The HTTP host owns one public holiday calendar, kept on ``app.state``.
"""

import logging

from fastapi import Request

from backend.config import Settings
from engines.services.day_classifier import HolidayCalendar

logger = logging.getLogger(__name__)


def build_holiday_calendar(settings: Settings) -> HolidayCalendar:
    """Seed the calendar from configuration."""
    calendar = HolidayCalendar(settings.public_holidays)
    logger.info(f"Holiday calendar loaded with {len(calendar)} dates")
    return calendar


def get_holiday_calendar(request: Request) -> HolidayCalendar:
    """FastAPI dependency returning the host's calendar."""
    return request.app.state.holiday_calendar
