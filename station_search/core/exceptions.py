"""Exceptions raised by the station search core."""


class InvalidArgument(ValueError):
    """Raised when a caller supplies an absent or malformed argument."""


class SessionNotFoundError(KeyError):
    """Raised when a session id is not known to the session manager."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session '{self.session_id}' not found"
