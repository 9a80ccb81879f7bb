"""Global session manager instance to avoid circular imports."""

from .core.loader import DEFAULT_STATIONS
from .core.session import SessionManager
from .config import get_settings

# Global session manager; the lifespan replaces the stations from settings.stations_file
settings = get_settings()
session_manager = SessionManager(
    DEFAULT_STATIONS,
    history_limit=settings.history_limit,
    max_sessions=settings.max_sessions,
)
