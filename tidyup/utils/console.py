from __future__ import annotations

"""
Console utilities for the `tidyup` CLI.

This module centralizes **all** user-facing terminal output and uses Rich
for styling and tables. Typer command handlers should call these helpers
instead of printing directly. Log records from the core modules are routed
to the same console through a RichHandler.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..core.classifier import format_size
from ..core.models import (
    CONFIDENCE_LEVELS,
    HistoryEntry,
    MoveResult,
    PlanSummary,
    UndoResult,
)

# Single shared console instance
console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def setup_logging(verbose: bool = False) -> None:
    """Route the `tidyup` loggers to the shared console."""
    handler = RichHandler(console=console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("tidyup")
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _path_str(path: Path | str | None) -> str:
    """Normalize a Path/str into a string for printing."""
    return "" if path is None else str(path)

def _confidence_style(confidence: str) -> str:
    return {"high": "green", "medium": "yellow", "low": "red"}.get(confidence, "dim")

def _format_confidence_counts(counts: dict) -> str:
    parts = [f"{level}: {counts[level]}" for level in CONFIDENCE_LEVELS if counts.get(level)]
    other = sum(v for k, v in counts.items() if k not in CONFIDENCE_LEVELS)
    if other:
        parts.append(f"other: {other}")
    return ", ".join(parts) or "-"

# ---------------------------------------------------------------------------
# Generic helpers (errors, warnings, success)
# ---------------------------------------------------------------------------

def print_error(message: str) -> None:
    """Print a generic error message in bold red."""
    console.print(f"[bold red]{message}[/bold red]")

def print_warning(message: str) -> None:
    """Print a generic warning message in yellow."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")

def print_success(message: str) -> None:
    """Print a generic success/completion message in green."""
    console.print(f"[green]{message}[/green]")

def print_info(message: str) -> None:
    """Print a generic informational message (unstyled)."""
    console.print(message)

def print_no_files_were_moved() -> None:
    console.print("No files were moved.")

# ---------------------------------------------------------------------------
# Scan / plan
# ---------------------------------------------------------------------------

def print_scan_start(path: Path | str) -> None:
    console.print(f"[bold]Scanning files in '{_path_str(path)}'...[/bold]")

def print_classifying(file_count: int) -> None:
    console.print(f"Asking the AI where {file_count} files should go...")

def print_plan_summary(plan: PlanSummary) -> None:
    """
    Print the proposed plan: an overview line, a per-folder table and a
    per-file table with confidence and reason.
    """
    console.print(f"[bold]Proposed organization for: {_path_str(plan.root_path)}[/bold]")
    console.print(
        f"Files: {plan.total_files} | Total size: {plan.total_size_mb:.2f} MB"
    )
    if plan.num_dropped:
        print_warning(
            f"{plan.num_dropped} suggestions did not match a scanned file "
            "(or pointed outside the folder) and were ignored."
        )

    table = Table("Folder", "Files", "Size (MB)", "Confidence")
    for f in plan.folders:
        table.add_row(
            f.folder,
            str(f.file_count),
            f"{f.total_size_mb:.2f}",
            _format_confidence_counts(f.confidence_counts),
        )
    console.print(table)

    if plan.df.empty:
        return

    files = Table("File", "Destination", "Size", "Confidence", "Reason")
    for _, row in plan.df.iterrows():
        confidence = str(row["confidence"])
        style = _confidence_style(confidence)
        files.add_row(
            str(row["name"]),
            str(row["folder"]),
            format_size(int(row["size_bytes"])),
            f"[{style}]{confidence}[/{style}]",
            str(row["reason"]),
        )
    console.print(files)

def print_scan_complete() -> None:
    console.print(
        "[green]Scan complete. This was a read-only run. No files were moved.[/green]"
    )

# ---------------------------------------------------------------------------
# Organize
# ---------------------------------------------------------------------------

def print_applying(count: int) -> None:
    console.print(f"Moving {count} files...")

def print_move_warning(name: str, error_reason: str) -> None:
    print_warning(f"failed to move '{name}': {error_reason}")

def print_move_results(results: Sequence[MoveResult]) -> None:
    """Per-file warnings for failures, then the summary lines."""
    for r in results:
        if not r.success:
            print_move_warning(r.name, r.error or "unknown error")

    moved = sum(1 for r in results if r.success)
    failed = len(results) - moved
    if moved:
        print_success(f"Moved {moved} files successfully!")
    else:
        print_no_files_were_moved()
    if failed:
        console.print(f"Failed to move {failed} files (see warnings above).")
    if moved:
        console.print("Run `tidyup undo` to put them back.")

# ---------------------------------------------------------------------------
# Undo / history
# ---------------------------------------------------------------------------

def print_undo_result(result: UndoResult) -> None:
    if not result.success:
        console.print(result.error or "Nothing to undo")
        return

    for r in result.results:
        if r.success:
            console.print(f" [green]restored[/green] {r.name}")
        else:
            print_warning(f"could not restore '{r.name}': {r.error}")

    print_success(f"Undid {result.count} file moves")

def print_history(entries: Sequence[HistoryEntry]) -> None:
    """Newest batch first."""
    console.print(f"Batches that can be undone: {len(entries)}")
    if not entries:
        return

    table = Table("#", "When", "Folder", "Files")
    for i, entry in enumerate(reversed(entries), start=1):
        try:
            when = datetime.fromisoformat(entry.timestamp).astimezone().strftime("%Y-%m-%d %H:%M:%S")
        except ValueError:
            when = entry.timestamp
        table.add_row(str(i), when, _path_str(entry.base_folder), str(len(entry.moves)))
    console.print(table)

# ---------------------------------------------------------------------------
# Settings / version
# ---------------------------------------------------------------------------

def print_key_saved(settings_path: Path | str) -> None:
    print_success(f"API key saved to '{_path_str(settings_path)}'.")

def print_missing_api_key() -> None:
    print_error(
        "Error: API key not configured. Run `tidyup set-key sk-...` or set "
        "OPENAI_API_KEY in your environment or .env file."
    )

def print_llm_unavailable(detail: str) -> None:
    print_error("Error: The AI classification service is currently unavailable.")
    console.print(detail)

def print_version(version: str, python_version: str, api_key_set: bool, settings_path: Path | str) -> None:
    console.print(f"[bold]tidyup {version}[/bold]")
    console.print(f"Python {python_version}")
    console.print(f"API key: {'set' if api_key_set else 'not set'}")
    console.print(f"Settings: {_path_str(settings_path)}")
