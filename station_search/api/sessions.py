"""Keypad session API endpoints."""

import time
from typing import Callable

from fastapi import APIRouter, HTTPException, Path, Response

from ..config import get_settings
from ..core.exceptions import SessionNotFoundError
from ..core.session import SearchSession
from ..models.request import KeyPressRequest, SearchTextRequest
from ..models.response import SessionStateResponse, StationListResponse

router = APIRouter(prefix="/api/v1", tags=["sessions"])
settings = get_settings()

# Import the global session manager instance
from ..engine_instance import session_manager


def _get_session(session_id: str) -> SearchSession:
    try:
        return session_manager.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _apply(
    session_id: str, action: Callable[[SearchSession], object]
) -> SessionStateResponse:
    """Run an action on a session under its lock and render the new state."""
    start_time = time.time()
    session = _get_session(session_id)
    with session.lock:
        outcome = action(session)
        state = session.state()
    execution_time = (time.time() - start_time) * 1000

    return SessionStateResponse(
        **state,
        changed=outcome is not False,
        execution_time_ms=execution_time,
    )


@router.post(
    "/sessions",
    response_model=SessionStateResponse,
    status_code=201,
    summary="Start a keypad session",
    description="Create a session searching the full station list"
)
def create_session() -> SessionStateResponse:
    """Create a new session with an empty search."""
    start_time = time.time()
    session = session_manager.create()
    with session.lock:
        state = session.state()
    return SessionStateResponse(
        **state,
        execution_time_ms=(time.time() - start_time) * 1000,
    )


@router.get(
    "/sessions/{session_id}",
    response_model=SessionStateResponse,
    summary="Get session state",
    description="Get the search text, matching stations and next characters of a session"
)
def get_session(
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Render the current state of a session without changing it."""
    return _apply(session_id, lambda session: False)


@router.delete(
    "/sessions/{session_id}",
    status_code=204,
    summary="End a keypad session"
)
def delete_session(
    session_id: str = Path(..., description="Session identifier")
) -> Response:
    """Discard a session and its history."""
    try:
        session_manager.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.post(
    "/sessions/{session_id}/keys",
    response_model=SessionStateResponse,
    summary="Type characters",
    description="Append characters to the search text and narrow the results"
)
def press_keys(
    request: KeyPressRequest,
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Append the typed characters to the current search."""
    def type_text(session: SearchSession) -> None:
        resulting_length = len(session.engine.current_search_text()) + len(request.text)
        if resulting_length > settings.max_query_length:
            raise HTTPException(
                status_code=422,
                detail=f"Text too long. Maximum length is {settings.max_query_length} characters"
            )
        session.type_text(request.text)

    return _apply(session_id, type_text)


@router.post(
    "/sessions/{session_id}/search",
    response_model=SessionStateResponse,
    summary="Replace the search text",
    description="Search for a new text; unrelated text restarts from the full station list"
)
def search_text(
    request: SearchTextRequest,
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Replace the search text of a session."""
    return _apply(session_id, lambda session: session.search(request.text))


@router.post(
    "/sessions/{session_id}/backspace",
    response_model=SessionStateResponse,
    summary="Undo the last edit"
)
def backspace(
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Restore the state before the last edit; a no-op on an empty history."""
    return _apply(session_id, lambda session: session.backspace())


@router.post(
    "/sessions/{session_id}/redo",
    response_model=SessionStateResponse,
    summary="Redo the last undone edit"
)
def redo(
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Re-apply the edit undone by the last backspace."""
    return _apply(session_id, lambda session: session.redo())


@router.post(
    "/sessions/{session_id}/reset",
    response_model=SessionStateResponse,
    summary="Clear the search"
)
def reset_session(
    session_id: str = Path(..., description="Session identifier")
) -> SessionStateResponse:
    """Reset the search text and discard the session history."""
    return _apply(session_id, lambda session: session.clear())


@router.get(
    "/stations",
    response_model=StationListResponse,
    summary="Get all stations",
    description="Get the full list of searchable destinations"
)
def get_stations() -> StationListResponse:
    """Return the station list used by new sessions."""
    stations = session_manager.stations()
    return StationListResponse(stations=stations, total_stations=len(stations))
