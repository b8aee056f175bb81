from __future__ import annotations
"""
Core domain models for TidyUp.

These dataclasses define the structured data passed between:
- scanner -> classifier -> planner -> executor / undo -> CLI
and allow the console layer (Rich output) to render summaries without
knowing internal implementation details.

History models know how to convert themselves to and from the JSON shape
stored in settings.json ({"timestamp", "baseFolder", "moves": [{"name",
"from", "to"}]}).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

# ---------------------------------------------------------------------------
# Scanning / classification
# ---------------------------------------------------------------------------

CONFIDENCE_LEVELS = ("high", "medium", "low")

@dataclass(frozen=True)
class FileRecord:
    """
    Metadata for a single top-level file discovered during scanning.

    Immutable once created; consumed by the classifier (as a prompt summary)
    and by the planner (to resolve source paths).
    """
    name: str
    path: Path          # absolute source path
    size: int           # bytes
    extension: str      # lowercase, leading dot, "" if none
    modified: float     # POSIX timestamp (stat.st_mtime)

@dataclass
class ScanResult:
    """
    Outcome of scanning a folder.

    `error` is set only when the folder could not be enumerated; an empty
    `records` list with no error means the folder really is empty.
    """
    folder: Path
    records: List[FileRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def empty(self) -> bool:
        return not self.records

@dataclass(frozen=True)
class Suggestion:
    """
    One entry of the classifier output.

    `confidence` is opaque display data; values outside CONFIDENCE_LEVELS are
    kept as-is and never used for anything but filtering by exact level.
    """
    name: str
    folder: str
    confidence: str = "low"
    reason: str = ""

# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoveDirective:
    """An accepted (source, destination subfolder) pairing awaiting execution."""
    name: str
    folder: str         # relative to the base folder
    source: Path

@dataclass
class MoveResult:
    name: str
    success: bool
    new_path: Optional[Path] = None
    error: Optional[str] = None

# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HistoryMove:
    name: str
    source: Path
    destination: Path

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "from": str(self.source), "to": str(self.destination)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryMove":
        return cls(
            name=str(data["name"]),
            source=Path(data["from"]),
            destination=Path(data["to"]),
        )

@dataclass
class HistoryEntry:
    """
    One executed batch. Only successful moves are recorded, in execution order.
    """
    timestamp: str      # ISO-8601, UTC
    base_folder: Path
    moves: List[HistoryMove] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "baseFolder": str(self.base_folder),
            "moves": [m.to_dict() for m in self.moves],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            timestamp=str(data.get("timestamp", "")),
            base_folder=Path(data.get("baseFolder", "")),
            moves=[HistoryMove.from_dict(m) for m in data.get("moves", [])],
        )

@dataclass
class UndoFileResult:
    name: str
    success: bool
    error: Optional[str] = None

@dataclass
class UndoResult:
    """
    Result of `undo_last()`.

    success is False only when there was nothing to undo; per-file failures
    live in `results`.
    """
    success: bool
    results: List[UndoFileResult] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None

# ---------------------------------------------------------------------------
# Planning / summary models
# ---------------------------------------------------------------------------

@dataclass
class PlanFolderSummary:
    """
    Aggregated view of one destination folder in the proposed plan.
    """
    folder: str
    file_count: int
    total_size_mb: float
    confidence_counts: Dict[str, int]
    sample_files: List[str]

@dataclass
class PlanSummary:
    """
    Full proposed plan for a single run.

    Produced by the planner after classification and consumed by the console
    helpers to render Rich tables.
    """
    root_path: Path
    # One row per directive with columns:
    # name, folder, confidence, reason, size_bytes, source
    df: pd.DataFrame
    folders: List[PlanFolderSummary]
    total_files: int
    total_size_mb: float
    num_dropped: int    # suggestions that matched no scanned file
