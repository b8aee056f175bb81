from __future__ import annotations
"""
Operation surface for TidyUp.

OrganizerService owns the settings store and the history ledger for the
lifetime of the process and exposes the operations the interface layer
needs:

- select_folder()         -> Path or None
- scan_folder(path)       -> List[FileRecord]
- analyze_files(records)  -> List[Suggestion]
- plan_moves(suggestions, records) -> List[MoveDirective]
- execute_moves(directives, base) -> List[MoveResult]
- undo_last()             -> UndoResult
- get_history_count()     -> int
- get_settings() / save_api_key(key)
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import classifier, executor, planner, scanner, undo
from .errors import InvalidApiKeyError, NoFilesFoundError, NothingSelectedError, ScanError
from .history import HistoryLedger
from .models import FileRecord, MoveDirective, MoveResult, Suggestion, UndoResult
from .settings import SettingsStore
from ..utils.env import SETTINGS_API_KEY, get_llm_api_key
from ..utils.paths import select_folder

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sk-"

class OrganizerService:
    """Ties scanner, classifier, executor and undo to one ledger + settings file."""

    def __init__(
        self,
        store: Optional[SettingsStore] = None,
        *,
        llm_client: Optional[Any] = None,
    ):
        self.store = store or SettingsStore()
        self.ledger = HistoryLedger.load(self.store)
        self.llm_client = llm_client

    # -- settings ----------------------------------------------------------

    def get_settings(self) -> Dict[str, Any]:
        return self.store.load()

    def save_api_key(self, api_key: str) -> None:
        """Validate and persist `api_key`, keeping every other setting."""
        key = (api_key or "").strip()
        if not key or not key.startswith(API_KEY_PREFIX):
            raise InvalidApiKeyError("Please enter a valid OpenAI API key (it starts with 'sk-').")
        self.store.update(**{SETTINGS_API_KEY: key})
        logger.info("API key saved to %s", self.store.path)

    # -- pipeline ----------------------------------------------------------

    def select_folder(self, prompt: Optional[Callable[[], str]] = None) -> Optional[Path]:
        return select_folder(prompt)

    def scan_folder(self, folder: Path | str) -> List[FileRecord]:
        """
        Scan `folder` and return its records.

        Raises
        ------
        ScanError
            If the folder could not be listed.
        NoFilesFoundError
            If the folder holds no eligible files.
        """
        result = scanner.scan_folder(folder)
        if result.failed:
            raise ScanError(f"Could not read folder '{result.folder}': {result.error}")
        if result.empty:
            raise NoFilesFoundError(f"No files found in '{result.folder}'.")
        return result.records

    def analyze_files(self, records: Sequence[FileRecord]) -> List[Suggestion]:
        """Classify `records`; fails fast with MissingApiKeyError when no key is set."""
        if self.llm_client is not None:
            return classifier.analyze_files(records, None, client=self.llm_client)
        api_key = get_llm_api_key(self.store.load())
        return classifier.analyze_files(records, api_key)

    def plan_moves(
        self,
        suggestions: Sequence[Suggestion],
        records: Sequence[FileRecord],
    ) -> List[MoveDirective]:
        """Match accepted suggestions to records; an empty result is an error."""
        directives = planner.build_directives(suggestions, records)
        if not directives:
            raise NothingSelectedError("Please select at least one file to organize.")
        return directives

    def execute_moves(
        self,
        directives: Sequence[MoveDirective],
        base_folder: Path | str,
    ) -> List[MoveResult]:
        return executor.execute_moves(directives, base_folder, self.ledger)

    def undo_last(self) -> UndoResult:
        return undo.undo_last(self.ledger)

    def get_history_count(self) -> int:
        return len(self.ledger)
