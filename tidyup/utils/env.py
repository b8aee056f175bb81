"""
Environment helper utilities for TidyUp.

Responsible for:
- Loading environment variables from a .env file.
- Resolving the LLM API key from the settings document or the environment in
  a single, centralized place.
- Locating the per-user application directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import typer

from ..core.errors import MissingApiKeyError

APP_NAME = "tidyup"

# Name of the env var that may store the LLM API key.
LLM_API_KEY_ENV_VAR = "OPENAI_API_KEY"

# Overrides for the settings directory and the chat model.
HOME_ENV_VAR = "TIDYUP_HOME"
MODEL_ENV_VAR = "TIDYUP_MODEL"

# Key under which the API key is stored in settings.json.
SETTINGS_API_KEY = "apiKey"

# ---------------------------------------------------------------------------
# .env loading
# ---------------------------------------------------------------------------
try:
    from dotenv import load_dotenv

    # Load from a .env in the current working directory or its parents.
    # This is called once at import time.
    load_dotenv()
    DOTENV_LOADED = True
except ImportError:  # pragma: no cover - only hit if python-dotenv isn't installed
    DOTENV_LOADED = False

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def app_dir() -> Path:
    """
    Return the directory that holds settings.json.

    TIDYUP_HOME wins when set; otherwise the platform's per-user config
    directory as reported by typer/click.
    """
    override = os.getenv(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(typer.get_app_dir(APP_NAME))


def get_llm_api_key(settings: Optional[Mapping[str, Any]] = None) -> str:
    """
    Return the LLM API key.

    - Prefers the key persisted in settings (set via `tidyup set-key`).
    - Falls back to LLM_API_KEY_ENV_VAR (OPENAI_API_KEY).
    - Raises MissingApiKeyError if neither is set.
    """
    if settings:
        stored = settings.get(SETTINGS_API_KEY)
        if isinstance(stored, str) and stored.strip():
            return stored.strip()

    key = os.getenv(LLM_API_KEY_ENV_VAR)

    if not key:
        raise MissingApiKeyError(
            f"No API key configured. Run `tidyup set-key` or set {LLM_API_KEY_ENV_VAR} "
            "in your environment or in a .env file."
        )

    return key


def is_llm_key_present(settings: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Return True if an API key is available from settings or the environment.

    Used by `tidyup version` to show a quick status without raising an error.
    """
    try:
        get_llm_api_key(settings)
    except MissingApiKeyError:
        return False
    return True


def get_model_name(default: str) -> str:
    return os.getenv(MODEL_ENV_VAR) or default
