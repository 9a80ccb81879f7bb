"""Keypad sessions: an engine plus the history the keypad needs for backspace."""

import threading
import time
import uuid
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

import structlog

from .engine import SearchEngine
from .exceptions import InvalidArgument, SessionNotFoundError
from .history import SnapshotHistory

logger = structlog.get_logger(__name__)


class SearchSession:
    """One user's interaction with the ticket machine keypad."""

    def __init__(
        self,
        stations: Iterable[str],
        history_limit: int = 100,
        session_id: Optional[str] = None,
    ) -> None:
        """
        Initialize a session with a fresh engine and empty history.

        Args:
            stations: Destinations to search
            history_limit: Maximum number of undo steps kept
            session_id: Identifier to use; generated when omitted
        """
        self.session_id = session_id or uuid.uuid4().hex
        self.engine = SearchEngine(stations)
        self.history = SnapshotHistory(max_depth=history_limit)
        self.created_at = time.time()
        self.last_active = self.created_at
        self.lock = threading.Lock()

    def type_text(self, text: str) -> None:
        """
        Append text to the current search, as when a key is pressed.

        Args:
            text: Characters to append
        """
        if text is None:
            raise InvalidArgument("Typed text was None")
        self.search(self.engine.current_search_text() + text)

    def search(self, text: str) -> None:
        """
        Replace the search text, keeping the previous state for undo.

        Args:
            text: The full text to search for
        """
        if text is None:
            raise InvalidArgument("Search text was None")
        self.history.push(self.engine.snapshot())
        self.engine.advance(text)
        self._touch()

    def backspace(self) -> bool:
        """
        Roll the search back to the state before the last edit.

        Returns:
            True if a step was undone, False if the history was empty
        """
        previous = self.history.undo(self.engine.snapshot())
        if previous is None:
            return False
        self.engine.restore(previous)
        self._touch()
        return True

    def redo(self) -> bool:
        """
        Re-apply the last edit undone by backspace().

        Returns:
            True if a step was redone, False if there was nothing to redo
        """
        following = self.history.redo(self.engine.snapshot())
        if following is None:
            return False
        self.engine.restore(following)
        self._touch()
        return True

    def clear(self) -> None:
        """Start over with an empty search and no history."""
        self.engine.reset()
        self.history.clear()
        self._touch()

    def state(self) -> Dict[str, Any]:
        """Get the values the keypad display renders."""
        locations = self.engine.location_results()
        return {
            "session_id": self.session_id,
            "search_text": self.engine.current_search_text(),
            "locations": locations,
            "next_chars": self.engine.char_options_results(),
            "total_results": len(locations),
            "can_undo": self.history.can_undo,
            "can_redo": self.history.can_redo,
        }

    def _touch(self) -> None:
        self.last_active = time.time()


class SessionManager:
    """Holds the active keypad sessions, evicting the least recently used."""

    def __init__(
        self,
        stations: Iterable[str] = (),
        history_limit: int = 100,
        max_sessions: int = 1000,
    ) -> None:
        """
        Initialize the manager.

        Args:
            stations: Destinations given to each new session
            history_limit: Undo depth for each new session
            max_sessions: Number of sessions kept before eviction starts
        """
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._stations: List[str] = SearchEngine(stations).data_source()
        self.history_limit = history_limit
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SearchSession]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {"sessions_created": 0, "sessions_evicted": 0, "sessions_deleted": 0}

    def set_stations(self, stations: Iterable[str]) -> None:
        """Replace the destinations used by sessions created from now on."""
        validated = SearchEngine(stations).data_source()
        with self._lock:
            self._stations = validated
        logger.info("Station list replaced", total_stations=len(validated))

    def stations(self) -> List[str]:
        with self._lock:
            return list(self._stations)

    def create(self) -> SearchSession:
        """Create and register a new session."""
        with self._lock:
            session = SearchSession(self._stations, history_limit=self.history_limit)
            self._sessions[session.session_id] = session
            self._stats["sessions_created"] += 1

            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                self._stats["sessions_evicted"] += 1
                logger.info("Session evicted", session_id=evicted_id)

        logger.info("Session created", session_id=session.session_id)
        return session

    def get(self, session_id: str) -> SearchSession:
        """
        Look up a session and mark it as recently used.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> None:
        """
        Remove a session.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
            self._stats["sessions_deleted"] += 1
        logger.info("Session deleted", session_id=session_id)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get session statistics aggregated with the engines' counters."""
        with self._lock:
            stats: Dict[str, Any] = self._stats.copy()
            stats["active_sessions"] = len(self._sessions)
            stats["total_stations"] = len(self._stations)
            engine_totals: Dict[str, int] = {}
            for session in self._sessions.values():
                for key, value in session.engine.get_stats().items():
                    if isinstance(value, int):
                        engine_totals[key] = engine_totals.get(key, 0) + value
        engine_totals.pop("total_destinations", None)
        engine_totals.pop("current_results", None)
        stats["engine_stats"] = engine_totals
        return stats
