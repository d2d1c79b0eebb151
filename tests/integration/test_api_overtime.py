"""
Integration Tests for Overtime and Holiday Endpoints

Tests run against the FastAPI app through the async test client, with a
flat 20.00 base rate policy and an empty holiday calendar per test.
"""

import logging
from decimal import Decimal

import pytest
from httpx import AsyncClient

from engines.services.day_classifier import HolidayCalendar


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ---------------------------------------------------------------------------
# Overtime Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_calculate_weekday_session(client: AsyncClient) -> None:
    """POST /api/v1/overtime/calculate prices the overflow beyond 10 hours."""
    payload = {
        "clock_in": "2025-01-06T09:00:00",
        "clock_out": "2025-01-06T20:00:00",
    }

    response = await client.post("/api/v1/overtime/calculate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["duration_minutes"] == 660
    assert data["day_type"] == "weekday"
    assert data["base_minutes"] == 600
    assert data["tier2_minutes"] == 60
    assert Decimal(data["tier2_amount"]) == Decimal("30.00")
    assert Decimal(data["total_amount"]) == Decimal("30.00")
    assert [t["label"] for t in data["tiers"]] == ["base", "tier2"]


@pytest.mark.asyncio
async def test_calculate_with_prior_minutes_and_allowance(client: AsyncClient) -> None:
    payload = {
        "clock_in": "2025-01-04T15:00:00",
        "clock_out": "2025-01-04T18:00:00",
        "cumulative_minutes_before": 300,
        "is_outstation": True,
    }

    response = await client.post("/api/v1/overtime/calculate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["day_type"] == "weekend"
    assert data["tier1_minutes"] == 60
    assert data["tier2_minutes"] == 120
    assert Decimal(data["total_ot_amount"]) == Decimal("80.00")
    assert Decimal(data["total_amount"]) == Decimal("110.00")


@pytest.mark.asyncio
async def test_calculate_in_progress_session_conflict(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/overtime/calculate",
        json={"clock_in": "2025-01-06T09:00:00"},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_calculate_negative_cumulative_minutes_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/overtime/calculate",
        json={
            "clock_in": "2025-01-06T09:00:00",
            "clock_out": "2025-01-06T10:00:00",
            "cumulative_minutes_before": -10,
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_day_type_with_override(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/overtime/day-type",
        params={"work_date": "2025-01-06", "is_public_holiday": "true"},
    )

    assert response.status_code == 200
    assert response.json()["day_type"] == "public_holiday"


@pytest.mark.asyncio
async def test_day_type_weekend(client: AsyncClient) -> None:
    response = await client.get("/api/v1/overtime/day-type", params={"work_date": "2025-01-05"})

    assert response.status_code == 200
    assert response.json()["day_type"] == "weekend"


@pytest.mark.asyncio
async def test_get_policy(client: AsyncClient) -> None:
    response = await client.get("/api/v1/overtime/policy")

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["base_hourly_rate"]) == Decimal("20")
    assert data["block_minutes"] == 30
    assert data["schedules"]["weekday"]["threshold_minutes"] == 600
    assert data["schedules"]["public_holiday"]["threshold_minutes"] == 540


@pytest.mark.asyncio
async def test_cumulative_minutes(client: AsyncClient) -> None:
    earlier = {
        "id": "log-1",
        "user_id": "worker-001",
        "clock_in": "2025-01-06T06:00:00",
        "clock_out": "2025-01-06T09:00:00",
        "duration_minutes": 180,
    }
    target = {
        "id": "log-2",
        "user_id": "worker-001",
        "clock_in": "2025-01-06T10:00:00",
        "clock_out": "2025-01-06T12:00:00",
    }

    response = await client.post(
        "/api/v1/overtime/cumulative-minutes",
        json={"target": target, "logs": [earlier, target]},
    )

    assert response.status_code == 200
    assert response.json()["cumulative_minutes_before"] == 180


@pytest.mark.asyncio
async def test_monthly_summary(client: AsyncClient) -> None:
    payload = {
        "user_id": "worker-001",
        "year": 2025,
        "month": 1,
        "logs": [
            {
                "id": "sat-1",
                "user_id": "worker-001",
                "clock_in": "2025-01-11T09:00:00",
                "clock_out": "2025-01-11T16:00:00",
                "is_outstation": True,
            }
        ],
        "leaves": [{"leave_date": "2025-01-20", "leave_type": "annual"}],
    }

    response = await client.post("/api/v1/overtime/monthly-summary", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert len(data["records"]) == 1
    assert Decimal(data["total_ot_pay"]) == Decimal("150.00")
    assert Decimal(data["full_attendance_reward"]) == Decimal("0")
    # 3200 + 440 + 150 + 250 + 0 + 30
    assert Decimal(data["grand_total"]) == Decimal("4070.00")
    assert data["user_id"] == "worker-001"
    assert data["outstation_allowances"] == "30.00"


@pytest.mark.asyncio
async def test_monthly_summary_rejects_other_workers(client: AsyncClient) -> None:
    log = {
        "id": "sat-1",
        "user_id": "worker-002",
        "clock_in": "2025-01-11T09:00:00",
        "clock_out": "2025-01-11T16:00:00",
    }

    response = await client.post(
        "/api/v1/overtime/monthly-summary",
        json={"user_id": "worker-001", "year": 2025, "month": 1, "logs": [log]},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_monthly_summary_mixed_naive_and_aware_logs(client: AsyncClient) -> None:
    logs = [
        {
            "id": "local",
            "user_id": "worker-001",
            "clock_in": "2025-01-06T08:00:00",
            "clock_out": "2025-01-06T09:00:00",
        },
        {
            "id": "utc",
            "user_id": "worker-001",
            "clock_in": "2025-01-06T10:00:00Z",
            "clock_out": "2025-01-06T11:00:00Z",
        },
    ]

    response = await client.post(
        "/api/v1/overtime/monthly-summary",
        json={"user_id": "worker-001", "year": 2025, "month": 1, "logs": logs},
    )

    assert response.status_code == 200
    data = response.json()
    assert [r["log_id"] for r in data["records"]] == ["local", "utc"]
    assert data["total_minutes"] == 120


# ---------------------------------------------------------------------------
# Holiday Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_replace_and_list_holidays(client: AsyncClient) -> None:
    response = await client.put(
        "/api/v1/holidays/",
        json={"holidays": ["2025-08-31", "2025-01-01"]},
    )

    assert response.status_code == 200
    assert response.json() == {"holidays": ["2025-01-01", "2025-08-31"], "count": 2}

    response = await client.get("/api/v1/holidays/")
    assert response.json()["count"] == 2


@pytest.mark.asyncio
async def test_extend_holidays_affects_calculation(
    client: AsyncClient, holiday_calendar: HolidayCalendar
) -> None:
    response = await client.post("/api/v1/holidays/", json={"holidays": ["2025-01-06"]})

    assert response.status_code == 200
    assert "2025-01-06" in response.json()["holidays"]
    assert len(holiday_calendar) == 1

    response = await client.post(
        "/api/v1/overtime/calculate",
        json={"clock_in": "2025-01-06T09:00:00", "clock_out": "2025-01-06T11:00:00"},
    )
    data = response.json()
    assert data["day_type"] == "public_holiday"
    assert Decimal(data["tier1_amount"]) == Decimal("80.00")


@pytest.mark.asyncio
async def test_invalid_holiday_rejected(client: AsyncClient) -> None:
    await client.put("/api/v1/holidays/", json={"holidays": ["2025-01-01"]})

    response = await client.put("/api/v1/holidays/", json={"holidays": ["01/05/2025"]})

    assert response.status_code == 400
    listing = await client.get("/api/v1/holidays/")
    assert listing.json()["holidays"] == ["2025-01-01"]


# ---------------------------------------------------------------------------
# Audit Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_audit_record_carries_worker_context(
    client: AsyncClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="audit"):
        await client.post(
            "/api/v1/overtime/calculate",
            json={"clock_in": "2025-01-06T09:00:00", "clock_out": "2025-01-06T10:00:00"},
            headers={"x-worker-id": "worker-001", "x-request-id": "req-42"},
        )

    records = [r for r in caplog.records if r.name == "audit"]
    assert len(records) == 1
    assert records[0].action == "overtime.calculate"
    assert records[0].worker_id == "worker-001"
    assert records[0].request_id == "req-42"
    assert records[0].status == 200
