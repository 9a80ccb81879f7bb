"""Data models for the station search service."""

from .response import (
    SessionStateResponse,
    StationListResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import KeyPressRequest, SearchTextRequest

__all__ = [
    "SessionStateResponse",
    "StationListResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "KeyPressRequest",
    "SearchTextRequest",
]
