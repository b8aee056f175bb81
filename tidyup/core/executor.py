from __future__ import annotations

"""
Move executor for TidyUp.

Responsibilities:
- Take the accepted MoveDirectives + base folder + history ledger.
- For each directive, in order:
    - Compute dest_dir = base / folder and dest = dest_dir / name
    - Create dest_dir if needed
    - Refuse to overwrite an existing destination
    - Atomically rename source -> dest
    - Record outcome (success / error message)
- Append one HistoryEntry holding every successful move to the ledger (only
  when at least one move succeeded).

Failures are isolated per file: suggestions and filesystem state are both
untrusted, so one bad directive never stops the rest of the batch.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence

from .errors import PathNotFoundError
from .history import HistoryLedger
from .models import HistoryEntry, HistoryMove, MoveDirective, MoveResult

logger = logging.getLogger(__name__)

DESTINATION_EXISTS = "File already exists at destination"

def execute_moves(
    directives: Sequence[MoveDirective],
    base_path: Path | str,
    ledger: HistoryLedger,
) -> List[MoveResult]:
    """
    Move every directive's source into base_path / directive.folder.

    Parameters
    ----------
    directives : Sequence[MoveDirective]
        Accepted moves, processed in the given order.
    base_path : Path | str
        Folder the destination subfolders are relative to. Must exist. A
        relative path is taken against the current working directory.
    ledger : HistoryLedger
        Receives one entry for the batch if anything was moved.

    Returns
    -------
    List[MoveResult]
        Exactly one result per directive, in input order.

    Raises
    ------
    PathNotFoundError
        If base_path does not exist. Nothing is moved in that case.
    """
    base = Path(base_path).expanduser().absolute()
    if not base.exists():
        raise PathNotFoundError(f"Path not found: {base}")

    results: List[MoveResult] = []
    entry = HistoryEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        base_folder=base,
    )

    for directive in directives:
        results.append(_move_one(directive, base, entry))

    if entry.moves:
        ledger.append(entry)
        logger.info("Recorded batch of %d moves under %s", len(entry.moves), base)
    else:
        logger.info("No files moved; history unchanged")

    return results


def _move_one(directive: MoveDirective, base: Path, entry: HistoryEntry) -> MoveResult:
    source = Path(directive.source).absolute()
    dest_dir = base / directive.folder
    dest = dest_dir / directive.name

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)

        if dest.exists():
            logger.warning("Not moving %s: %s", source, DESTINATION_EXISTS)
            return MoveResult(name=directive.name, success=False, error=DESTINATION_EXISTS)

        source.rename(dest)
    except OSError as exc:
        logger.warning("Failed to move %s -> %s: %s", source, dest, exc)
        return MoveResult(name=directive.name, success=False, error=_describe(exc))

    entry.moves.append(HistoryMove(name=directive.name, source=source, destination=dest))
    return MoveResult(name=directive.name, success=True, new_path=dest)


def _describe(exc: OSError) -> str:
    """Prefer the OS message ("No such file or directory") over repr noise."""
    return exc.strerror or str(exc)
