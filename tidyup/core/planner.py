from __future__ import annotations
"""
Planner for TidyUp.

Responsibilities:

- Merge classifier suggestions with the scanned FileRecords by file name,
  producing MoveDirectives. Suggestions naming a file that was never scanned
  (model hallucinations) are dropped, as are folders that would land outside
  the base folder.
- Narrow suggestions to the subset the user accepted (exclusions and a
  confidence floor).
- Build a PlanSummary with per-folder aggregates for display:
  * file_count
  * total_size_mb
  * count per confidence tag
  * 2–3 sample filenames
"""

import logging
from dataclasses import asdict
from pathlib import Path, PurePath
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .models import (
    CONFIDENCE_LEVELS,
    FileRecord,
    MoveDirective,
    PlanFolderSummary,
    PlanSummary,
    Suggestion,
)
from .scanner import records_to_frame

logger = logging.getLogger(__name__)

# high > medium > low; anything else ranks below "low".
_CONFIDENCE_RANK: Dict[str, int] = {
    level: len(CONFIDENCE_LEVELS) - i for i, level in enumerate(CONFIDENCE_LEVELS)
}

def is_safe_folder(folder: str) -> bool:
    """True if `folder` is a relative path that stays inside the base folder."""
    if not folder or not folder.strip():
        return False
    path = PurePath(folder.replace("\\", "/"))
    if path.is_absolute() or path.drive or path.root:
        return False
    return ".." not in path.parts


def build_directives(
    suggestions: Sequence[Suggestion],
    records: Sequence[FileRecord],
) -> List[MoveDirective]:
    """
    Turn suggestions into MoveDirectives, keeping suggestion order.

    A suggestion is kept only if its name matches a scanned record and its
    folder is safe; the directive's source is the record's absolute path.
    """
    by_name = {r.name: r for r in records}
    directives: List[MoveDirective] = []

    for s in suggestions:
        record = by_name.get(s.name)
        if record is None:
            logger.warning("Dropping suggestion for unknown file %r", s.name)
            continue
        if not is_safe_folder(s.folder):
            logger.warning("Dropping suggestion for %r: unsafe folder %r", s.name, s.folder)
            continue
        directives.append(MoveDirective(name=record.name, folder=s.folder, source=record.path))

    return directives


def confidence_rank(confidence: str) -> int:
    return _CONFIDENCE_RANK.get(str(confidence).lower(), 0)


def select_suggestions(
    suggestions: Sequence[Suggestion],
    exclude: Iterable[str] = (),
    min_confidence: Optional[str] = None,
) -> List[Suggestion]:
    """
    Return the accepted subset of `suggestions`.

    - Names in `exclude` are left out.
    - With `min_confidence`, suggestions ranked below it are left out;
      unrecognised confidence tags rank below "low".
    """
    excluded = set(exclude)
    floor = confidence_rank(min_confidence) if min_confidence else 0

    return [
        s
        for s in suggestions
        if s.name not in excluded and confidence_rank(s.confidence) >= floor
    ]


def build_plan(
    suggestions: Sequence[Suggestion],
    records: Sequence[FileRecord],
    root_path: Path,
) -> PlanSummary:
    """
    Build a PlanSummary from suggestions and the records they refer to.

    Only suggestions that build_directives() would keep are counted.
    """
    columns = ["name", "folder", "confidence", "reason"]
    suggestions_df = pd.DataFrame([asdict(s) for s in suggestions], columns=columns)
    records_df = records_to_frame(list(records))[["name", "source", "size_bytes"]]

    safe_mask = suggestions_df["folder"].map(is_safe_folder).astype(bool)
    df = suggestions_df[safe_mask].merge(records_df, on="name", how="inner")

    num_dropped = int(len(suggestions_df) - len(df))
    total_files = int(len(df))
    total_size_mb = float(df["size_bytes"].sum() / (1024 * 1024)) if total_files else 0.0

    folders: List[PlanFolderSummary] = []
    for folder, group in df.groupby("folder", sort=True):
        confidence_counts = {
            str(k): int(v) for k, v in group["confidence"].value_counts().items()
        }
        # Stable order by file name for determinism.
        sample_files = group.sort_values("name")["name"].head(3).astype(str).tolist()

        folders.append(
            PlanFolderSummary(
                folder=str(folder),
                file_count=int(len(group)),
                total_size_mb=float(group["size_bytes"].sum() / (1024 * 1024)),
                confidence_counts=confidence_counts,
                sample_files=sample_files,
            )
        )

    return PlanSummary(
        root_path=root_path,
        df=df.reset_index(drop=True),
        folders=folders,
        total_files=total_files,
        total_size_mb=total_size_mb,
        num_dropped=num_dropped,
    )
