"""
Path utilities for TidyUp.

This module provides helpers for resolving and validating filesystem paths
used by the CLI. All user-specified folders should be passed through
resolve_root() before being used elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from ..core.errors import PathError, PathNotFoundError, PathNotDirectoryError

logger = logging.getLogger(__name__)

def resolve_root(path_str: str) -> Path:
    """
    Resolve a user-provided path string into an absolute directory Path.

    Steps:
    - Expand '~'.
    - Resolve to an absolute path.
    - Ensure the path exists.
    - Ensure the path is a directory (not a file).

    Raises:
    - PathNotFoundError: if the resolved path does not exist.
    - PathNotDirectoryError: if the path exists but is not a directory.
    """
    root = Path(path_str).expanduser().resolve()

    if not root.exists():
        raise PathNotFoundError(f"Path not found: {root}")

    if not root.is_dir():
        raise PathNotDirectoryError(f"Provided path is not a directory: {root}")

    return root


def _prompt_for_folder() -> str:
    return typer.prompt("Folder to organize", default="", show_default=False)


def select_folder(prompt: Optional[Callable[[], str]] = None) -> Optional[Path]:
    """
    Ask the user for a folder and return it resolved, or None.

    A blank answer counts as a cancelled selection. So does a path that is
    missing or not a directory; the reason is logged.
    """
    answer = (prompt or _prompt_for_folder)().strip()
    if not answer:
        return None
    try:
        return resolve_root(answer)
    except PathError as exc:
        logger.warning("%s", exc)
        return None
