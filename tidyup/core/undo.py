from __future__ import annotations
"""
Single-level undo for TidyUp.

`undo_last()` reverses the most recent batch recorded in the ledger.

The newest entry is popped (and the ledger persisted) BEFORE any file is
touched, so every entry is undone at most once: files that fail to restore
are dropped from the ledger and will not be retried by a later undo. Those
files are listed in the result and in the log.
"""

import logging
from typing import List

from .history import HistoryLedger
from .models import UndoFileResult, UndoResult

logger = logging.getLogger(__name__)

NOTHING_TO_UNDO = "Nothing to undo"
FILE_NOT_FOUND = "File not found"
SOURCE_EXISTS = "File already exists at original location"

def undo_last(ledger: HistoryLedger) -> UndoResult:
    """
    Undo the newest batch in `ledger`.

    Moves are restored in reverse order of execution. A destination that no
    longer exists, or whose original location is occupied again, is reported
    as a per-file failure and left alone; nothing here raises for filesystem
    problems.
    """
    entry = ledger.pop()
    if entry is None:
        return UndoResult(success=False, error=NOTHING_TO_UNDO)

    results: List[UndoFileResult] = []

    for move in reversed(entry.moves):
        if not move.destination.exists():
            logger.warning("Cannot undo %s: %s at %s", move.name, FILE_NOT_FOUND, move.destination)
            results.append(UndoFileResult(name=move.name, success=False, error=FILE_NOT_FOUND))
            continue

        if move.source.exists():
            logger.warning("Cannot undo %s: %s at %s", move.name, SOURCE_EXISTS, move.source)
            results.append(UndoFileResult(name=move.name, success=False, error=SOURCE_EXISTS))
            continue

        try:
            move.destination.rename(move.source)
        except OSError as exc:
            logger.warning("Failed to restore %s -> %s: %s", move.destination, move.source, exc)
            results.append(
                UndoFileResult(name=move.name, success=False, error=exc.strerror or str(exc))
            )
            continue

        results.append(UndoFileResult(name=move.name, success=True))

    count = sum(1 for r in results if r.success)
    if count < len(results):
        logger.warning(
            "Undo restored %d of %d files; the rest are no longer tracked",
            count,
            len(results),
        )

    # Persisted regardless of per-file outcomes.
    ledger.save()

    return UndoResult(success=True, results=results, count=count)
