"""Main FastAPI application for the Station Search service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    sessions_router,
    health_router,
    metrics_router,
)
from .config import get_settings
from .core.exceptions import InvalidArgument
from .core.loader import DEFAULT_STATIONS, load_stations
from .engine_instance import session_manager
from .models.response import ErrorResponse

settings = get_settings()

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Station Search service", version=settings.app_version)

    if settings.stations_file:
        try:
            session_manager.set_stations(load_stations(settings.stations_file))
        except FileNotFoundError:
            logger.warning(
                "Stations file not found, using built-in stations",
                path=settings.stations_file,
                total_stations=len(DEFAULT_STATIONS)
            )
        except InvalidArgument as e:
            logger.error("Failed to load stations", path=settings.stations_file, error=str(e))
            raise
    else:
        logger.info("Using built-in stations", total_stations=len(DEFAULT_STATIONS))

    yield

    # Shutdown
    session_manager.clear()
    logger.info("Shutting down Station Search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Incremental destination search for ticket machine keypads",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    """Map invalid arguments to a 400 response."""
    logger.warning(
        "Invalid argument",
        method=request.method,
        url=str(request.url),
        error=str(exc)
    )

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Bad Request",
            message=str(exc)
        ).model_dump(mode="json")
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(sessions_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Incremental destination search for ticket machine keypads",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Incremental destination search for ticket machine keypads",
        "endpoints": {
            "create_session": "POST /api/v1/sessions",
            "session_state": "GET /api/v1/sessions/{session_id}",
            "type": "POST /api/v1/sessions/{session_id}/keys",
            "search": "POST /api/v1/sessions/{session_id}/search",
            "backspace": "POST /api/v1/sessions/{session_id}/backspace",
            "redo": "POST /api/v1/sessions/{session_id}/redo",
            "reset": "POST /api/v1/sessions/{session_id}/reset",
            "stations": "GET /api/v1/stations",
            "health": "GET /api/v1/health",
            "metrics": "GET /api/v1/metrics"
        },
        "features": [
            "Exact prefix matching",
            "Next valid keypad characters",
            "Undo and redo of keystrokes",
            "Per-user keypad sessions"
        ],
        "limits": {
            "max_query_length": settings.max_query_length,
            "history_limit": settings.history_limit,
            "max_sessions": settings.max_sessions
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "station_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
