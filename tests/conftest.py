"""
Test Configuration and Fixtures

Provides the async test client, a flat-rate policy and a clean holiday
calendar for each test.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.config import get_overtime_policy
from backend.main import app
from engines.schemas.overtime_engine import OvertimePolicy
from engines.services.day_classifier import HolidayCalendar
from tests.factories import make_policy


@pytest.fixture
def policy() -> OvertimePolicy:
    """Policy with a 20.00 base hourly rate and no time zone conversion."""
    return make_policy()


@pytest.fixture
def holiday_calendar() -> HolidayCalendar:
    return HolidayCalendar()


@pytest_asyncio.fixture(scope="function")
async def client(
    policy: OvertimePolicy, holiday_calendar: HolidayCalendar
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client with policy and calendar overrides."""
    original_calendar = app.state.holiday_calendar
    app.state.holiday_calendar = holiday_calendar
    app.dependency_overrides[get_overtime_policy] = lambda: policy

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.holiday_calendar = original_calendar
