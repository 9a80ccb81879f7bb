"""API endpoints for the station search service."""

from .sessions import router as sessions_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "sessions_router",
    "health_router",
    "metrics_router",
]
