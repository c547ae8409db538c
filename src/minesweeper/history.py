"""
Undo/redo history for games that opt into it.

A game supports undo by implementing Undoable and handing its
restore_game_state method to the lifecycle as the restore hook. Games that
do not (Minesweeper among them) still own a history, but moving through it
raises UndoNotSupportedError.
"""
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

SnapshotT = TypeVar("SnapshotT")

MAX_HISTORY_SIZE = 100


class UndoNotSupportedError(NotImplementedError):
    """Raised when undo/redo is used on a game without a restore hook."""


# ============================================================================
# Capability Interface
# ============================================================================

class Undoable(ABC, Generic[SnapshotT]):
    """Capability implemented by games that can restore saved snapshots."""

    @abstractmethod
    def restore_game_state(self, snapshot: SnapshotT) -> None:
        """Restore the game to a previously saved snapshot."""


# ============================================================================
# History Buffer
# ============================================================================

class GameHistory(Generic[SnapshotT]):
    """
    Bounded linear history of game snapshots.

    Saving after an undo discards the undone snapshots. Once more than
    max_size snapshots are held, the oldest one is evicted.
    """

    def __init__(
        self,
        restore: Optional[Callable[[SnapshotT], None]] = None,
        max_size: int = MAX_HISTORY_SIZE,
    ) -> None:
        """
        Initialize the history.

        Args:
            restore: Hook that applies a snapshot to the game. None means
                the game does not support undo.
            max_size: Maximum number of snapshots retained.
        """
        self._restore = restore
        self.max_size = max_size
        self._snapshots: List[SnapshotT] = []
        self._index = -1

    @property
    def index(self) -> int:
        """Position of the current snapshot, -1 when empty."""
        return self._index

    def __len__(self) -> int:
        return len(self._snapshots)

    def save(self, snapshot: SnapshotT) -> None:
        """Append a snapshot after the current position."""
        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)
        self._index += 1

        if len(self._snapshots) > self.max_size:
            self._snapshots.pop(0)
            self._index -= 1

    def can_undo(self) -> bool:
        """Check if there is an earlier snapshot to return to."""
        return self._index > 0

    def can_redo(self) -> bool:
        """Check if there is a later snapshot to return to."""
        return self._index < len(self._snapshots) - 1

    def undo(self) -> bool:
        """
        Step back one snapshot and restore it.

        Returns:
            True if a snapshot was restored, False if at the oldest one.

        Raises:
            UndoNotSupportedError: If no restore hook was provided.
        """
        if not self.can_undo():
            return False
        self._apply(self._index - 1)
        return True

    def redo(self) -> bool:
        """
        Step forward one snapshot and restore it.

        Returns:
            True if a snapshot was restored, False if at the newest one.

        Raises:
            UndoNotSupportedError: If no restore hook was provided.
        """
        if not self.can_redo():
            return False
        self._apply(self._index + 1)
        return True

    def clear(self) -> None:
        """Drop all snapshots."""
        self._snapshots.clear()
        self._index = -1

    def _apply(self, index: int) -> None:
        if self._restore is None:
            raise UndoNotSupportedError(
                "restore_game_state must be implemented to use undo/redo"
            )
        self._index = index
        self._restore(self._snapshots[index])
