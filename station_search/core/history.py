"""Undo/redo stacks of search snapshots, kept by the caller of the engine."""

from collections import deque
from typing import Deque, Optional

from .snapshot import Snapshot


class SnapshotHistory:
    """Maintains bounded undo and redo stacks of engine snapshots."""

    def __init__(self, max_depth: int = 100) -> None:
        """
        Initialize empty stacks.

        Args:
            max_depth: Maximum number of snapshots kept on each stack; the
                oldest entry is dropped once the limit is reached
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._undo: Deque[Snapshot] = deque(maxlen=max_depth)
        self._redo: Deque[Snapshot] = deque(maxlen=max_depth)

    def push(self, snapshot: Snapshot) -> None:
        """Record the state before a new edit. Invalidates redo."""
        self._undo.append(snapshot)
        self._redo.clear()

    def undo(self, current: Snapshot) -> Optional[Snapshot]:
        """
        Step back one edit.

        Args:
            current: State being left, kept for redo

        Returns:
            The snapshot to restore, or None if there is nothing to undo
        """
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: Snapshot) -> Optional[Snapshot]:
        """
        Re-apply the last undone edit.

        Args:
            current: State being left, kept for undo

        Returns:
            The snapshot to restore, or None if there is nothing to redo
        """
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def peek(self) -> Optional[Snapshot]:
        if self._undo:
            return self._undo[-1]
        return None

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def depth(self) -> int:
        return len(self._undo)
