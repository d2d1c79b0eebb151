"""API v1 Route modules."""

from backend.routers.v1 import holidays, overtime

__all__ = ["holidays", "overtime"]
