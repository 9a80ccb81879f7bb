"""Core search engine functionality."""

from .engine import SearchEngine
from .exceptions import InvalidArgument, SessionNotFoundError
from .history import SnapshotHistory
from .loader import DEFAULT_STATIONS, load_stations
from .session import SearchSession, SessionManager
from .snapshot import Snapshot

__all__ = [
    "SearchEngine",
    "Snapshot",
    "SnapshotHistory",
    "SearchSession",
    "SessionManager",
    "InvalidArgument",
    "SessionNotFoundError",
    "DEFAULT_STATIONS",
    "load_stations",
]
