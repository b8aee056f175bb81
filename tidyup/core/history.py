from __future__ import annotations
"""
History ledger for TidyUp.

The ledger is the ordered record of executed batches that makes undo
possible. It is owned by the running process and passed explicitly to the
executor and to undo; it is never reached through module globals.

Persistence points:
- `append()` saves after adding an entry.
- `pop()` saves after removing the newest entry.

Both write the whole "history" list into the settings document via
SettingsStore.update(), leaving unrelated settings untouched.
"""

import logging
from typing import Iterator, List, Optional

from .models import HistoryEntry
from .settings import SettingsStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"

class HistoryLedger:
    """Append-only list of HistoryEntry, except for popping the newest."""

    def __init__(self, store: SettingsStore, entries: Optional[List[HistoryEntry]] = None):
        self.store = store
        self._entries: List[HistoryEntry] = list(entries or [])

    @classmethod
    def load(cls, store: SettingsStore) -> "HistoryLedger":
        """Build a ledger from the "history" list in the settings document."""
        raw = store.load().get(HISTORY_KEY) or []
        entries: List[HistoryEntry] = []
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed history in %s", store.path)
            raw = []
        for item in raw:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, AttributeError) as exc:
                logger.warning("Skipping unreadable history entry: %s", exc)
        return cls(store, entries)

    def save(self) -> None:
        self.store.update(**{HISTORY_KEY: [e.to_dict() for e in self._entries]})

    def append(self, entry: HistoryEntry) -> None:
        """Add `entry` as the newest batch and persist. Empty entries are refused."""
        if not entry.moves:
            raise ValueError("Refusing to record a history entry with no moves")
        self._entries.append(entry)
        self.save()

    def pop(self) -> Optional[HistoryEntry]:
        """Remove and return the newest entry (None if empty), then persist."""
        if not self._entries:
            return None
        entry = self._entries.pop()
        self.save()
        return entry

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
