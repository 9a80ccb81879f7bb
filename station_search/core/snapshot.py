"""Immutable captures of search engine state used for undo/redo."""

from typing import Iterable, Tuple

# Only SearchEngine.snapshot() holds a reference to this through _from_state.
_CAPTURE_TOKEN = object()


class Snapshot:
    """Point-in-time capture of (search text, candidates, next characters).

    Contents are stored as tuples, so a snapshot never shares a mutable
    container with the engine it was taken from.
    """

    __slots__ = ("_search_text", "_candidates", "_next_chars")

    def __init__(
        self,
        token: object,
        search_text: str,
        candidates: Tuple[str, ...],
        next_chars: Tuple[str, ...],
    ) -> None:
        if token is not _CAPTURE_TOKEN:
            raise TypeError("Snapshot objects are created by SearchEngine.snapshot()")
        object.__setattr__(self, "_search_text", search_text)
        object.__setattr__(self, "_candidates", candidates)
        object.__setattr__(self, "_next_chars", next_chars)

    @classmethod
    def _from_state(
        cls,
        search_text: str,
        candidates: Iterable[str],
        next_chars: Iterable[str],
    ) -> "Snapshot":
        return cls(_CAPTURE_TOKEN, search_text, tuple(candidates), tuple(next_chars))

    @property
    def search_text(self) -> str:
        """Search text at capture time."""
        return self._search_text

    @property
    def candidates(self) -> Tuple[str, ...]:
        """Matching destinations at capture time."""
        return self._candidates

    @property
    def next_chars(self) -> Tuple[str, ...]:
        """Sorted next input characters at capture time."""
        return self._next_chars

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Snapshot is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Snapshot is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return (
            self._search_text == other._search_text
            and self._candidates == other._candidates
            and self._next_chars == other._next_chars
        )

    def __hash__(self) -> int:
        return hash((self._search_text, self._candidates, self._next_chars))

    def __repr__(self) -> str:
        return (
            f"Snapshot(search_text={self._search_text!r}, "
            f"candidates={list(self._candidates)!r}, "
            f"next_chars={list(self._next_chars)!r})"
        )
