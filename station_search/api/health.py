"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..core.engine import SearchEngine
from ..models.response import HealthResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global session manager instance
from ..engine_instance import session_manager

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the station search service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the station search service.
    
    Runs a throwaway search over the loaded stations, including a snapshot
    round trip, to confirm the engine behaves.
    """
    try:
        uptime = time.time() - app_start_time
        
        dependencies = {
            "search_engine": "healthy",
            "session_manager": "healthy",
        }
        
        try:
            stations = session_manager.stations()
            engine = SearchEngine(stations)
            before = engine.snapshot()
            if stations:
                engine.advance(stations[0][:1])
            engine.restore(before)
            if engine.location_results() != stations:
                dependencies["search_engine"] = "degraded"
        except Exception:
            dependencies["search_engine"] = "unhealthy"
        
        try:
            session_manager.count()
        except Exception:
            dependencies["session_manager"] = "unhealthy"
        
        # Determine overall status
        if all(status == "healthy" for status in dependencies.values()):
            status = "healthy"
        elif any(status == "unhealthy" for status in dependencies.values()):
            status = "unhealthy"
        else:
            status = "degraded"
        
        return HealthResponse(
            status=status,
            version=settings.app_version,
            uptime=uptime,
            dependencies=dependencies
        )
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Health check failed: {str(e)}"
        )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check() -> JSONResponse:
    """Report ready once a station list is loaded."""
    total_stations = len(session_manager.stations())
    if total_stations == 0:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "No stations loaded",
                "timestamp": datetime.utcnow().isoformat()
            }
        )
    
    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": datetime.utcnow().isoformat(),
            "total_stations": total_stations,
            "active_sessions": session_manager.count()
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness check - just return current time."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )
