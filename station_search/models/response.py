"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SessionStateResponse(BaseModel):
    """State of a keypad session after a change."""
    
    session_id: str = Field(..., description="Session identifier")
    search_text: str = Field(..., description="Text searched so far")
    locations: List[str] = Field(..., description="Destinations starting with the search text")
    next_chars: List[str] = Field(..., description="Characters that may be typed next, sorted")
    total_results: int = Field(..., description="Number of matching destinations")
    can_undo: bool = Field(..., description="Whether backspace can undo a step")
    can_redo: bool = Field(..., description="Whether redo can re-apply a step")
    changed: bool = Field(default=True, description="Whether the request changed the state")
    execution_time_ms: float = Field(..., description="Processing time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class StationListResponse(BaseModel):
    """Full list of searchable destinations."""
    
    stations: List[str] = Field(..., description="Destinations in data source order")
    total_stations: int = Field(..., description="Number of destinations")


class ErrorResponse(BaseModel):
    """Error response model."""
    
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""
    
    active_sessions: int = Field(..., description="Sessions currently held")
    sessions_created: int = Field(..., description="Sessions created since start")
    sessions_evicted: int = Field(..., description="Sessions evicted to respect the limit")
    total_stations: int = Field(..., description="Destinations in the station list")
    total_advances: int = Field(..., description="Searches run by active sessions")
    incremental_rate: float = Field(..., description="Share of searches that narrowed previous results")
    memory_usage_mb: float = Field(..., description="Memory usage in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
