"""
Audit Logging Middleware

Logs every API request that can change pay figures or the holiday
calendar. Records: worker, action, request id, status, IP, latency.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("audit")

# Paths to skip (health checks, static assets)
SKIP_PATHS = {"/health", "/health/ready", "/favicon.ico"}

# Set by the calling app; identity itself is verified upstream
WORKER_HEADER = "x-worker-id"
REQUEST_ID_HEADER = "x-request-id"

# (method, path suffix) -> audit action
ACTIONS = {
    ("POST", "/overtime/calculate"): "overtime.calculate",
    ("POST", "/overtime/cumulative-minutes"): "overtime.cumulative_minutes",
    ("POST", "/overtime/monthly-summary"): "payroll.monthly_summary",
    ("GET", "/overtime/day-type"): "calendar.classify_day",
    ("GET", "/overtime/policy"): "policy.read",
    ("GET", "/holidays"): "calendar.read",
    ("PUT", "/holidays"): "calendar.replace",
    ("POST", "/holidays"): "calendar.extend",
}


def audit_action(method: str, path: str) -> str:
    """Map a request to its audit action, ``other`` when unknown."""
    trimmed = path.rstrip("/")
    for (action_method, suffix), action in ACTIONS.items():
        if method == action_method and trimmed.endswith(suffix):
            return action
    return "other"


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class AuditLogMiddleware(BaseHTTPMiddleware):
    """
    One structured ``audit`` record per request.

    Calendar changes are logged at WARNING so they stand out from reads.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        action = audit_action(request.method, path)
        start = time.monotonic()
        status_code = 500
        error: str | None = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            error = str(exc)
            raise
        finally:
            log_data = {
                "action": action,
                "method": request.method,
                "path": path,
                "query": request.url.query or None,
                "status": status_code,
                "latency_ms": round((time.monotonic() - start) * 1000, 2),
                "client_ip": client_ip(request),
                "worker_id": request.headers.get(WORKER_HEADER),
                "request_id": request.headers.get(REQUEST_ID_HEADER),
            }
            if error:
                log_data["error"] = error

            if status_code >= 500:
                logger.error("pay_request", extra=log_data)
            elif status_code >= 400 or action in ("calendar.replace", "calendar.extend"):
                logger.warning("pay_request", extra=log_data)
            else:
                logger.info("pay_request", extra=log_data)
