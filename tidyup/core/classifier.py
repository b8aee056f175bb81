from __future__ import annotations
"""
Classifier client for TidyUp.

Responsibilities:

- Summarize scanned FileRecords (name, extension, human-readable size) into a
  single prompt.
- Ask the OpenAI chat model to suggest a destination folder, a confidence tag
  and a short reason for each file.
- Extract and parse the JSON array from the reply, keeping only well-formed
  entries.
- Surface clean, domain-specific errors:
  * MissingApiKeyError if no key is available (raised before any call).
  * LlmUnavailableError when the API call/network fails.
  * LlmResponseParseError when the reply is not a JSON array.

The classifier's output is untrusted: matching it back to real files happens
in the planner.
"""

import json
import logging
import re
from typing import Any, List, Optional, Sequence

from openai import OpenAI

from .errors import LlmResponseParseError, LlmUnavailableError, MissingApiKeyError
from .models import FileRecord, Suggestion
from ..utils.env import get_model_name

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Model defaults
# ---------------------------------------------------------------------------

DEFAULT_MODEL = "gpt-4o-mini"
TEMPERATURE = 0.3
MAX_TOKENS = 2000

PROMPT_TEMPLATE = """You are a file organization assistant. Analyze these files and suggest which folder each should go into.

Files to organize:
{file_list}

Respond with a JSON array where each object has:
- "name": the filename
- "folder": suggested folder path (e.g., "Documents/Invoices", "Images/Screenshots", "Music", "Videos", "Archives", "Code", "Other")
- "confidence": "high", "medium", or "low"
- "reason": brief reason for the suggestion

Be smart about categorization:
- Receipts, invoices, statements -> Documents/Finance
- Screenshots -> Images/Screenshots
- Photos with dates -> Images/Photos/[Year]
- Music files -> Music/[Artist if detectable]
- Code files (.js, .py, .ts, etc) -> Code
- Archives (.zip, .tar, etc) -> Archives
- Installers (.dmg, .exe, .pkg) -> Installers

Respond ONLY with valid JSON array, no other text."""

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_size(size: int) -> str:
    """Human-readable size: 512 B, 1.5 KB, 3.2 MB, 1.0 GB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    return f"{size / (1024 * 1024 * 1024):.1f} GB"


def build_prompt(records: Sequence[FileRecord]) -> str:
    file_list = "\n".join(
        f"{r.name} ({r.extension}, {format_size(r.size)})" for r in records
    )
    return PROMPT_TEMPLATE.format(file_list=file_list)


def analyze_files(
    records: Sequence[FileRecord],
    api_key: Optional[str],
    *,
    model: Optional[str] = None,
    client: Optional[Any] = None,
) -> List[Suggestion]:
    """
    Ask the LLM where each of `records` should go.

    Returns the parsed suggestions in the order the model produced them.
    Suggestions are NOT yet matched against `records`; see
    planner.build_directives for that.

    Raises
    ------
    MissingApiKeyError
        If api_key is empty and no client was injected. Nothing is sent.
    LlmUnavailableError
        If the OpenAI call fails for any reason.
    LlmResponseParseError
        If the reply holds no parseable JSON array.
    """
    if client is None:
        if not api_key:
            raise MissingApiKeyError("API key not configured")
        client = OpenAI(api_key=api_key)

    prompt = build_prompt(records)
    model_name = model or get_model_name(DEFAULT_MODEL)

    logger.debug("Asking %s to classify %d files", model_name, len(records))

    try:
        response = client.chat.completions.create(
            model=model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
    except Exception as exc:
        # Wrap any client/network error as LlmUnavailableError so the CLI
        # can show a friendly message and abort safely.
        raise LlmUnavailableError(f"Failed to analyze files: {exc}") from exc

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise LlmResponseParseError(f"Unexpected LLM response structure: {exc}") from exc

    return parse_suggestions(content)


def parse_suggestions(content: Optional[str]) -> List[Suggestion]:
    """
    Parse the model's reply into Suggestions.

    The reply may wrap the array in prose or a markdown fence; the outermost
    [...] span is used. Entries that are not objects or lack a string
    "name"/"folder" are skipped.
    """
    if not content:
        raise LlmResponseParseError("LLM returned an empty response")

    match = _JSON_ARRAY.search(content)
    text = match.group(0) if match else content

    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise LlmResponseParseError(f"Failed to parse LLM response as JSON: {exc}") from exc

    if not isinstance(parsed, list):
        raise LlmResponseParseError(
            f"LLM response JSON must be an array of suggestions, got {type(parsed).__name__}"
        )

    suggestions: List[Suggestion] = []
    for item in parsed:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object suggestion: %r", item)
            continue

        name = item.get("name")
        folder = item.get("folder")
        if not isinstance(name, str) or not isinstance(folder, str) or not folder.strip():
            logger.debug("Skipping incomplete suggestion: %r", item)
            continue

        suggestions.append(
            Suggestion(
                name=name,
                folder=folder.strip(),
                confidence=str(item.get("confidence") or "low"),
                reason=str(item.get("reason") or ""),
            )
        )

    return suggestions
