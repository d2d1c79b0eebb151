"""
ShiftPay - Main Application Entry Point

Overtime pay engine for shift-based workers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import get_overtime_policy, get_settings
from backend.middleware.audit_log import AuditLogMiddleware
from backend.routers.v1 import holidays, overtime
from backend.services.calendar import build_holiday_calendar

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Initialize Sentry for error monitoring
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"shiftpay@{settings.app_version}",
        traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
        integrations=[FastApiIntegration()],
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    policy = get_overtime_policy()
    logger.info(
        f"{settings.app_name} starting: base_hourly_rate={policy.base_hourly_rate:.4f}, "
        f"block={policy.block_minutes}min, holidays={len(app.state.holiday_calendar)}"
    )
    yield
    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    description=(
        "ShiftPay classifies each completed work session by day type, splits it into "
        "overtime tiers against the minutes already worked that day, rounds each tier "
        "to 30-minute blocks and prices it."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    openapi_url="/api/openapi.json" if settings.debug else None,
)

# Host-owned holiday calendar, read by the engine on every call
app.state.holiday_calendar = build_holiday_calendar(settings)

# Audit logging middleware
app.add_middleware(AuditLogMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "shiftpay-api"}


@app.get("/health/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check."""
    return {
        "status": "ready",
        "service": "shiftpay-api",
        "version": settings.app_version,
        "environment": settings.environment,
    }


# API v1 routes
app.include_router(
    overtime.router,
    prefix=f"{settings.api_v1_prefix}/overtime",
    tags=["Overtime"],
)
app.include_router(
    holidays.router,
    prefix=f"{settings.api_v1_prefix}/holidays",
    tags=["Holidays"],
)
