"""Unit tests for keypad sessions and the session manager."""

import pytest
from station_search.core.exceptions import InvalidArgument, SessionNotFoundError
from station_search.core.session import SearchSession, SessionManager


STATIONS = ["DARTFORD", "DARTMOUTH", "TOWER HILL", "DERBY"]


class TestSearchSession:
    """Test cases for the SearchSession class."""

    @pytest.fixture
    def session(self):
        """Create a session for testing."""
        return SearchSession(STATIONS, history_limit=10)

    def test_initial_state(self, session):
        """Test a new session shows every station."""
        state = session.state()

        assert state["session_id"] == session.session_id
        assert state["search_text"] == ""
        assert state["locations"] == STATIONS
        assert state["next_chars"] == ["D", "T"]
        assert state["total_results"] == 4
        assert state["can_undo"] is False
        assert state["can_redo"] is False

    def test_session_ids_are_unique(self):
        """Test generated ids differ between sessions."""
        assert SearchSession(STATIONS).session_id != SearchSession(STATIONS).session_id

    def test_type_text(self, session):
        """Test typing appends to the search text."""
        session.type_text("D")
        session.type_text("A")

        state = session.state()
        assert state["search_text"] == "DA"
        assert state["locations"] == ["DARTFORD", "DARTMOUTH"]
        assert state["next_chars"] == ["R"]
        assert state["can_undo"] is True

    def test_type_none(self, session):
        """Test typing None is rejected."""
        with pytest.raises(InvalidArgument):
            session.type_text(None)

    def test_backspace(self, session):
        """Test backspace restores the previous keystroke's state."""
        session.type_text("D")
        session.type_text("E")

        assert session.backspace() is True
        state = session.state()
        assert state["search_text"] == "D"
        assert state["locations"] == ["DARTFORD", "DARTMOUTH", "DERBY"]
        assert state["next_chars"] == ["A", "E"]
        assert state["can_redo"] is True

    def test_backspace_on_empty(self, session):
        """Test backspace with no history leaves the session unchanged."""
        assert session.backspace() is False
        assert session.state()["search_text"] == ""
        assert session.state()["locations"] == STATIONS

    def test_backspace_over_unrelated_search(self, session):
        """Test backspace undoes a search that restarted the results."""
        session.search("DA")
        session.search("T")

        assert session.backspace() is True
        assert session.state()["search_text"] == "DA"
        assert session.state()["locations"] == ["DARTFORD", "DARTMOUTH"]

    def test_redo(self, session):
        """Test redo re-applies the undone keystroke."""
        session.type_text("T")
        session.backspace()

        assert session.redo() is True
        assert session.state()["search_text"] == "T"
        assert session.state()["locations"] == ["TOWER HILL"]
        assert session.redo() is False

    def test_clear(self, session):
        """Test clear resets the search and the history."""
        session.type_text("DE")
        session.clear()

        state = session.state()
        assert state["search_text"] == ""
        assert state["locations"] == STATIONS
        assert state["can_undo"] is False
        assert session.backspace() is False

    def test_last_active_updated(self, session):
        """Test edits refresh the activity timestamp."""
        before = session.last_active
        session.type_text("D")

        assert session.last_active >= before


class TestSessionManager:
    """Test cases for the SessionManager class."""

    @pytest.fixture
    def manager(self):
        """Create a session manager for testing."""
        return SessionManager(STATIONS, history_limit=5, max_sessions=3)

    def test_create_and_get(self, manager):
        """Test created sessions can be looked up."""
        session = manager.create()

        assert manager.get(session.session_id) is session
        assert manager.count() == 1
        assert session.history.max_depth == 5

    def test_get_unknown(self, manager):
        """Test looking up an unknown id fails."""
        with pytest.raises(SessionNotFoundError) as exc_info:
            manager.get("missing")

        assert isinstance(exc_info.value, KeyError)
        assert "missing" in str(exc_info.value)

    def test_delete(self, manager):
        """Test deleting a session."""
        session = manager.create()
        manager.delete(session.session_id)

        assert manager.count() == 0
        with pytest.raises(SessionNotFoundError):
            manager.delete(session.session_id)

    def test_eviction(self, manager):
        """Test the least recently used session is evicted."""
        first = manager.create()
        second = manager.create()
        third = manager.create()

        manager.get(first.session_id)
        manager.create()

        assert manager.count() == 3
        assert manager.get(first.session_id) is first
        assert manager.get(third.session_id) is third
        with pytest.raises(SessionNotFoundError):
            manager.get(second.session_id)
        assert manager.get_stats()["sessions_evicted"] == 1

    def test_sessions_are_independent(self, manager):
        """Test edits in one session do not reach another."""
        first = manager.create()
        second = manager.create()
        first.type_text("T")

        assert second.state()["search_text"] == ""
        assert second.state()["locations"] == STATIONS

    def test_set_stations(self, manager):
        """Test new stations apply to sessions created afterwards."""
        existing = manager.create()
        manager.set_stations(["LIVERPOOL"])
        created = manager.create()

        assert manager.stations() == ["LIVERPOOL"]
        assert created.state()["locations"] == ["LIVERPOOL"]
        assert existing.state()["locations"] == STATIONS

    def test_set_stations_none(self, manager):
        """Test replacing the stations with None fails."""
        with pytest.raises(InvalidArgument):
            manager.set_stations(None)

    def test_stations_none(self):
        """Test a manager cannot start from an absent station list."""
        with pytest.raises(InvalidArgument):
            SessionManager(None)

    def test_invalid_max_sessions(self):
        """Test a session limit below one is rejected."""
        with pytest.raises(ValueError):
            SessionManager(STATIONS, max_sessions=0)

    def test_stats(self, manager):
        """Test statistics aggregate engine counters."""
        first = manager.create()
        second = manager.create()
        first.type_text("D")
        first.type_text("A")
        second.search("T")

        stats = manager.get_stats()

        assert stats["sessions_created"] == 2
        assert stats["active_sessions"] == 2
        assert stats["total_stations"] == 4
        assert stats["engine_stats"]["total_advances"] == 3
        assert stats["engine_stats"]["incremental_advances"] == 3
        assert "total_destinations" not in stats["engine_stats"]

    def test_clear(self, manager):
        """Test clearing removes every session."""
        manager.create()
        manager.create()
        manager.clear()

        assert manager.count() == 0
