"""
Station Search - Incremental destination search for ticket machine keypads.

This package narrows a fixed list of destinations as the user types, reports
which characters may be typed next, and captures snapshots of the search
state so that callers can undo and redo keystrokes.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.exceptions import InvalidArgument
from .core.snapshot import Snapshot

__all__ = [
    "SearchEngine",
    "Snapshot",
    "InvalidArgument",
]
