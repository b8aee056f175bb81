from __future__ import annotations
"""
Folder scanner for TidyUp.

Responsibilities:

- List the direct children of a folder (no recursion).
- Keep regular files whose name does not start with '.'.
- For each file, collect name, absolute path, size, lowercase extension and
  modification time as a FileRecord.
- Never raise for enumeration problems: return a ScanResult carrying the error
  and log a diagnostic, so callers can tell "empty" from "unreadable".
"""

import logging
import os
from pathlib import Path
from typing import List

import pandas as pd

from .models import FileRecord, ScanResult

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."

def scan_folder(folder: Path | str) -> ScanResult:
    """
    Scan the top level of `folder` and return a ScanResult.

    Subdirectories are silently skipped. A file that disappears or becomes
    unreadable between listing and stat is skipped on its own; only a failure
    to list the folder itself marks the result as failed.
    """
    root = Path(folder).expanduser().absolute()
    records: List[FileRecord] = []

    try:
        with os.scandir(root) as entries:
            for entry in entries:
                if entry.name.startswith(HIDDEN_PREFIX):
                    continue

                try:
                    if not entry.is_file():
                        continue
                    stat = entry.stat()
                except OSError as exc:
                    logger.debug("Skipping %s: %s", entry.path, exc)
                    continue

                path = root / entry.name
                records.append(
                    FileRecord(
                        name=entry.name,
                        path=path,
                        size=stat.st_size,
                        extension=path.suffix.lower(),
                        modified=stat.st_mtime,
                    )
                )
    except OSError as exc:
        logger.error("Failed to scan folder %s: %s", root, exc)
        return ScanResult(folder=root, records=[], error=str(exc))

    records.sort(key=lambda r: r.name)
    logger.debug("Scanned %d files under %s", len(records), root)
    return ScanResult(folder=root, records=records)


def records_to_frame(records: List[FileRecord]) -> pd.DataFrame:
    """Convert FileRecords into a DataFrame keyed by file name."""
    data = [
        {
            "name": r.name,
            "extension": r.extension,
            "source": str(r.path),
            "size_bytes": r.size,
            "modified": r.modified,
        }
        for r in records
    ]
    return pd.DataFrame(
        data,
        columns=["name", "extension", "source", "size_bytes", "modified"],
    )
