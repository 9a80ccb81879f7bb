"""Metrics and monitoring API endpoints."""

import psutil

from fastapi import APIRouter, HTTPException

from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])

# Import the global session manager instance
from ..engine_instance import session_manager


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get session and search statistics for the service"
)
async def get_metrics() -> MetricsResponse:
    """
    Get session and search statistics.
    
    Engine counters are summed over the sessions currently held, so they
    drop when sessions are deleted or evicted.
    """
    try:
        stats = session_manager.get_stats()
        engine_stats = stats.get("engine_stats", {})
        
        memory_info = psutil.virtual_memory()
        memory_usage_mb = memory_info.used / (1024 * 1024)  # Convert to MB
        
        total_advances = engine_stats.get("total_advances", 0)
        if total_advances > 0:
            incremental_rate = engine_stats.get("incremental_advances", 0) / total_advances
        else:
            incremental_rate = 0.0
        
        return MetricsResponse(
            active_sessions=stats["active_sessions"],
            sessions_created=stats["sessions_created"],
            sessions_evicted=stats["sessions_evicted"],
            total_stations=stats["total_stations"],
            total_advances=total_advances,
            incremental_rate=incremental_rate,
            memory_usage_mb=memory_usage_mb
        )
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )
