"""Incremental prefix search over a fixed list of destinations."""

from typing import Any, Dict, Iterable, List, Optional

import structlog

from .exceptions import InvalidArgument
from .snapshot import Snapshot

logger = structlog.get_logger(__name__)


def _validate_data_source(data_source: Optional[Iterable[str]]) -> List[str]:
    """
    Copy a data source into an owned list, rejecting absent or malformed input.

    Args:
        data_source: Sequence of destination names

    Returns:
        Independent list with the same members in the same order
    """
    if data_source is None:
        raise InvalidArgument("Data source was None")
    if isinstance(data_source, (str, bytes)):
        raise InvalidArgument("Data source must be a sequence of strings, not a single string")

    try:
        items = list(data_source)
    except TypeError as exc:
        raise InvalidArgument(f"Data source is not iterable: {exc}") from exc

    for item in items:
        if not isinstance(item, str):
            raise InvalidArgument(
                f"Data source entries must be strings, got {type(item).__name__}"
            )
    return items


class SearchEngine:
    """
    Assisted search over a list of destinations.

    Keeps the text searched so far, the destinations that start with it and
    the characters that may be typed next in sync after every change. Only
    searches that extend the previous text narrow the current results; any
    other text is searched from the full data source again.

    The engine keeps no history. Callers that need undo take a snapshot()
    before each advance() and restore() it on backspace.
    """

    def __init__(self, data_source: Iterable[str]) -> None:
        """
        Initialize an empty search ready to use.

        Args:
            data_source: Destinations searched by every call; may be empty

        Raises:
            InvalidArgument: If data_source is None or holds non-string items
        """
        self._data_source: List[str] = _validate_data_source(data_source)
        self._search_text: str = ""
        self._candidates: Optional[List[str]] = list(self._data_source)
        self._next_chars: Optional[List[str]] = []
        self._stats = self._empty_stats()

        self._search_next_chars()

    # ------------- data source -------------

    def set_data_source(self, data_source: Iterable[str]) -> None:
        """
        Replace the data source and reset the current search.

        Args:
            data_source: The new destinations

        Raises:
            InvalidArgument: If data_source is None or holds non-string items
        """
        self._data_source = _validate_data_source(data_source)
        self.reset()
        logger.debug("Data source replaced", total_destinations=len(self._data_source))

    def data_source(self) -> List[str]:
        """Get a copy of the destinations being searched."""
        return list(self._data_source)

    # ------------- searching -------------

    def current_search_text(self) -> str:
        """Get the text of the current search."""
        return self._search_text

    def advance(self, text: str) -> None:
        """
        Search for text and bring results and next characters in line with it.

        When text extends the current search text the current results are
        narrowed; otherwise the search restarts from the full data source.

        Args:
            text: The full text to search for

        Raises:
            InvalidArgument: If text is None
        """
        if text is None:
            raise InvalidArgument("Search text was None")

        self._stats["total_advances"] += 1

        incremental = (
            self._candidates is not None
            and len(text) > len(self._search_text)
            and text.startswith(self._search_text)
        )
        if incremental:
            self._stats["incremental_advances"] += 1
        else:
            logger.debug(
                "Non-incremental search, refiltering data source",
                previous=self._search_text,
                text=text,
            )
            self._stats["full_refilters"] += 1
            self.reset()

        self._search_text = text
        self._search_locations()
        self._search_next_chars()

    def reset(self) -> None:
        """Reset the search to the empty text and the full data source."""
        self._candidates = list(self._data_source)
        self._search_text = ""
        self._search_next_chars()
        self._stats["resets"] += 1

    def _search_locations(self) -> None:
        """Discard every current candidate that does not start with the search text."""
        text = self._search_text
        self._candidates = [name for name in self._candidates if name.startswith(text)]

    def _search_next_chars(self) -> None:
        """Collect the characters that follow the search text in each candidate."""
        position = len(self._search_text)
        options = {name[position] for name in self._candidates if len(name) > position}
        self._next_chars = sorted(options)

    # ------------- results -------------

    def location_results(self) -> List[str]:
        """
        Get the destinations matching the current search.

        Returns:
            Copy of the current results; the full data source if the engine
            had to recover from an inconsistent state
        """
        if self._candidates is None or self._next_chars is None:
            self._heal()
        return list(self._candidates)

    def char_options_results(self) -> List[str]:
        """
        Get the characters that may be typed next.

        Returns:
            Sorted copy of the next possible characters
        """
        if self._candidates is None or self._next_chars is None:
            self._heal()
        return list(self._next_chars)

    def _heal(self) -> None:
        logger.warning(
            "Inconsistent search state, resetting",
            search_text=self._search_text,
            candidates_missing=self._candidates is None,
            next_chars_missing=self._next_chars is None,
        )
        self._stats["self_heals"] += 1
        self.reset()

    # ------------- snapshots -------------

    def snapshot(self) -> Snapshot:
        """
        Save the current search state.

        Returns:
            Snapshot holding copies of the search text, results and options
        """
        return Snapshot._from_state(
            self._search_text,
            self.location_results(),
            self.char_options_results(),
        )

    def restore(self, snapshot: Snapshot) -> None:
        """
        Replace the current search state with the contents of a snapshot.

        The snapshot is not checked against the current data source.

        Args:
            snapshot: A snapshot previously returned by snapshot()

        Raises:
            InvalidArgument: If snapshot is not a Snapshot
        """
        if not isinstance(snapshot, Snapshot):
            raise InvalidArgument(
                f"Expected a Snapshot, got {type(snapshot).__name__}"
            )

        self._search_text = snapshot.search_text
        self._candidates = list(snapshot.candidates)
        self._next_chars = list(snapshot.next_chars)
        self._stats["restores"] += 1

    # ------------- statistics -------------

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            "total_advances": 0,
            "incremental_advances": 0,
            "full_refilters": 0,
            "resets": 0,
            "restores": 0,
            "self_heals": 0,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats: Dict[str, Any] = self._stats.copy()
        stats["total_destinations"] = len(self._data_source)
        stats["current_results"] = len(self._candidates or [])
        if stats["total_advances"] > 0:
            stats["incremental_rate"] = (
                stats["incremental_advances"] / stats["total_advances"]
            )
        else:
            stats["incremental_rate"] = 0.0
        return stats

    def __str__(self) -> str:
        return (
            f"Search text:     {self._search_text}\n"
            f"Current results: {self._candidates}\n"
            f"Current options: {self._next_chars}\n"
        )
