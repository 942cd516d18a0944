"""
Snapshot history for undoing cart changes.

The history manager is the caretaker: it stores snapshots of cart contents
without ever looking inside them, and hands copies back on request.

Design decisions:
- Append-only: saving adds a snapshot at the next index, restoring never
  removes or reorders anything
- Snapshots own value copies of the entries, so later cart changes can't
  leak into them
- Restoring an index that doesn't exist returns an empty list instead of
  raising. The miss is logged so it doesn't go completely unnoticed.
- No eviction: history grows for as long as the process lives
"""

import logging
import threading
from datetime import datetime
from typing import Iterable, Optional
from pydantic import BaseModel, Field, ConfigDict

from shared.models import CartEntry

logger = logging.getLogger("history")


class Snapshot(BaseModel):
    """
    Cart contents at one point in time.

    Frozen, and the entries are a tuple of frozen values, so a snapshot
    can't change after it is taken.
    """
    index: int = Field(..., ge=0, description="Position in the history")
    entries: tuple[CartEntry, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(frozen=True)

    def get_entries(self) -> list[CartEntry]:
        """Get a fresh copy of the saved entries."""
        return [entry.clone() for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


class HistoryManager:
    """
    Saves and restores cart snapshots by index.

    Example:
        history = HistoryManager()
        history.save_state(store.get_entries())
        ...
        store.replace_entries(history.restore_state(history.latest_index()))
    """

    def __init__(self):
        self._snapshots: list[Snapshot] = []
        self._lock = threading.Lock()

    def save_state(self, entries: Iterable[CartEntry]) -> Snapshot:
        """
        Take a snapshot of the given entries.

        Args:
            entries: Cart contents to save

        Returns:
            The new snapshot
        """
        copies = tuple(entry.clone() for entry in entries)
        # Index and append together, so concurrent saves never share an index
        with self._lock:
            snapshot = Snapshot(index=len(self._snapshots), entries=copies)
            self._snapshots.append(snapshot)
        logger.info(f"Saved snapshot {snapshot.index} ({len(snapshot)} entries)")
        return snapshot

    def restore_state(self, index: int) -> list[CartEntry]:
        """
        Get a copy of the entries saved at an index.

        Args:
            index: Snapshot position, 0-based

        Returns:
            The saved entries, or an empty list if there is no snapshot at
            that index (negative, past the end, or empty history)
        """
        snapshot = self.get_snapshot(index)
        if snapshot is None:
            logger.warning(
                f"No snapshot at index {index} (history has {len(self._snapshots)}), "
                "restoring empty cart"
            )
            return []
        logger.info(f"Restored snapshot {index} ({len(snapshot)} entries)")
        return snapshot.get_entries()

    def get_snapshot(self, index: int) -> Optional[Snapshot]:
        """Get a snapshot by index, or None if out of range."""
        if 0 <= index < len(self._snapshots):
            return self._snapshots[index]
        return None

    def get_snapshots(self) -> list[Snapshot]:
        """Get all snapshots, oldest first."""
        return list(self._snapshots)

    def latest_index(self) -> int:
        """Index of the most recent snapshot, -1 when nothing was saved."""
        return len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)


_default_history: Optional[HistoryManager] = None


def get_history_manager() -> HistoryManager:
    """Get the default history manager singleton."""
    global _default_history
    if _default_history is None:
        _default_history = HistoryManager()
    return _default_history


def reset_history_manager() -> HistoryManager:
    """Reset the default history manager (useful for testing)."""
    global _default_history
    _default_history = HistoryManager()
    return _default_history
