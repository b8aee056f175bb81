from __future__ import annotations

import platform
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn

from .. import __version__
from ..core import planner
from ..core.errors import (
    InvalidApiKeyError,
    LlmResponseParseError,
    LlmUnavailableError,
    MissingApiKeyError,
    NoFilesFoundError,
    NothingSelectedError,
    PathError,
    ScanError,
    SettingsError,
)
from ..core.models import FileRecord, Suggestion
from ..core.service import OrganizerService
from ..utils.env import is_llm_key_present
from ..utils.paths import resolve_root
from ..utils.console import (
    print_applying,
    print_classifying,
    print_error,
    print_history,
    print_info,
    print_key_saved,
    print_llm_unavailable,
    print_missing_api_key,
    print_move_results,
    print_no_files_were_moved,
    print_plan_summary,
    print_scan_complete,
    print_scan_start,
    print_undo_result,
    print_version,
    setup_logging,
)

app = typer.Typer(no_args_is_help=True, help="TidyUp – let AI sort a messy folder, with undo.")

class ConfidenceLevel(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"

@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Set up logging and the shared service (settings + history ledger)."""
    setup_logging(verbose)
    if ctx.obj is None:
        ctx.obj = OrganizerService()

def _service(ctx: typer.Context) -> OrganizerService:
    return ctx.obj

# ---------------------------------------------------------------------------
# Shared pipeline steps
# ---------------------------------------------------------------------------

def _choose_folder(service: OrganizerService, path: Optional[str]) -> Path:
    """Resolve PATH, or prompt for a folder when it was omitted."""
    if path is None:
        root = service.select_folder()
        if root is None:
            print_error("No folder selected.")
            raise typer.Exit(code=1)
        return root

    try:
        return resolve_root(path)
    except PathError as exc:
        print_error(f"Error: {exc}")
        raise typer.Exit(code=1)

def _scan(service: OrganizerService, root: Path) -> List[FileRecord]:
    print_scan_start(root)
    try:
        return service.scan_folder(root)
    except NoFilesFoundError:
        print_error(f"No files found in '{root}'.")
        raise typer.Exit(code=1)
    except ScanError as exc:
        print_error(f"Error: {exc}")
        raise typer.Exit(code=1)

def _analyze(service: OrganizerService, records: List[FileRecord]) -> List[Suggestion]:
    print_classifying(len(records))
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Classifying with LLM...", total=None)
            return service.analyze_files(records)
    except MissingApiKeyError:
        print_missing_api_key()
        raise typer.Exit(code=1)
    except LlmUnavailableError as exc:
        print_llm_unavailable(str(exc))
        print_no_files_were_moved()
        raise typer.Exit(code=1)
    except LlmResponseParseError as exc:
        print_error(f"Error: Failed to parse the AI response: {exc}")
        print_no_files_were_moved()
        raise typer.Exit(code=1)

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def version(ctx: typer.Context) -> None:
    """Display version information."""
    service = _service(ctx)
    print_version(
        __version__,
        platform.python_version(),
        is_llm_key_present(service.get_settings()),
        service.store.path,
    )

@app.command("set-key")
def set_key(
    ctx: typer.Context,
    api_key: str = typer.Argument(..., metavar="KEY", help="OpenAI API key (sk-...)."),
) -> None:
    """Store the OpenAI API key in the settings file."""
    service = _service(ctx)
    try:
        service.save_api_key(api_key)
    except (InvalidApiKeyError, SettingsError) as exc:
        print_error(f"Error: {exc}")
        raise typer.Exit(code=1)
    print_key_saved(service.store.path)

@app.command()
def scan(
    ctx: typer.Context,
    path: Optional[str] = typer.Argument(
        None,
        metavar="PATH",
        help="Folder to analyze (e.g. ~/Downloads). Prompted for when omitted.",
    ),
) -> None:
    """
    Read-only scan + AI classification of the files directly inside PATH.
    """
    service = _service(ctx)
    root = _choose_folder(service, path)
    records = _scan(service, root)
    suggestions = _analyze(service, records)

    plan = planner.build_plan(suggestions, records, root)
    print_plan_summary(plan)
    print_scan_complete()

@app.command()
def organize(
    ctx: typer.Context,
    path: Optional[str] = typer.Argument(
        None,
        metavar="PATH",
        help="Folder to organize (e.g. ~/Downloads). Prompted for when omitted.",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Apply without asking."),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="File name to leave where it is. Repeatable.",
    ),
    min_confidence: Optional[ConfidenceLevel] = typer.Option(
        None,
        "--min-confidence",
        case_sensitive=False,
        help="Only move files the AI is at least this confident about.",
    ),
) -> None:
    """
    Organize the files directly inside PATH.

    Pipeline:
      - resolve PATH
      - scan folder
      - classify with the AI
      - keep the accepted subset + print the plan
      - confirm
      - move files + record the batch for undo
    """
    service = _service(ctx)
    root = _choose_folder(service, path)
    records = _scan(service, root)
    suggestions = _analyze(service, records)

    accepted = planner.select_suggestions(
        suggestions,
        exclude=exclude or [],
        min_confidence=min_confidence.value if min_confidence else None,
    )
    plan = planner.build_plan(accepted, records, root)
    print_plan_summary(plan)

    try:
        directives = service.plan_moves(accepted, records)
    except NothingSelectedError as exc:
        print_error(str(exc))
        print_no_files_were_moved()
        raise typer.Exit(code=1)

    if not yes and not typer.confirm(f"Move {len(directives)} files?", default=False):
        print_info("No changes applied.")
        print_no_files_were_moved()
        raise typer.Exit(code=0)

    print_applying(len(directives))
    try:
        results = service.execute_moves(directives, root)
    except PathError as exc:
        print_error(f"Error: {exc}")
        print_no_files_were_moved()
        raise typer.Exit(code=1)
    except SettingsError as exc:
        # Files may have been moved already, but the history was not saved.
        print_error(f"Error: Failed to record history: {exc}")
        raise typer.Exit(code=1)

    print_move_results(results)

@app.command()
def undo(ctx: typer.Context) -> None:
    """Put back the files moved by the most recent organize run."""
    service = _service(ctx)
    try:
        result = service.undo_last()
    except SettingsError as exc:
        print_error(f"Error: Failed to update history: {exc}")
        raise typer.Exit(code=1)

    print_undo_result(result)

@app.command()
def history(ctx: typer.Context) -> None:
    """Show the batches that can still be undone."""
    service = _service(ctx)
    print_history(service.ledger.entries)
