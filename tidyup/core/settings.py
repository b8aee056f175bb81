from __future__ import annotations
"""
Settings store for TidyUp.

A single JSON document (settings.json) holds the persisted state:

    {
      "apiKey": "sk-...",          # optional
      "history": [HistoryEntry...], # optional
      ...                           # anything else is preserved untouched
    }

The document is read at startup and fully rewritten on every mutation.
`update()` re-reads the file and merges the changed keys into it, so writes
from one component never drop fields owned by another.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import SettingsError
from ..utils.env import app_dir

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

class SettingsStore:
    """Loads and saves the settings document at `path`."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else app_dir() / SETTINGS_FILENAME

    def load(self) -> Dict[str, Any]:
        """
        Return the settings document.

        A missing file yields {}. An unreadable or malformed file is logged
        and also yields {}, matching the "start fresh" behaviour users expect
        from a desktop tool.
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to load settings from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.error("Ignoring settings at %s: top level is not an object", self.path)
            return {}
        return data

    def save(self, settings: Dict[str, Any]) -> None:
        """
        Overwrite the settings document with `settings`.

        Raises
        ------
        SettingsError
            If the directory cannot be created or the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(settings, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as exc:
            raise SettingsError(f"Failed to save settings to '{self.path}': {exc}") from exc

    def update(self, **changes: Any) -> Dict[str, Any]:
        """Merge `changes` into the on-disk document, save it and return it."""
        settings = self.load()
        settings.update(changes)
        self.save(settings)
        return settings
