from pathlib import Path

import pytest

from conftest import fake_client
from tidyup.core.classifier import (
    DEFAULT_MODEL,
    analyze_files,
    build_prompt,
    format_size,
    parse_suggestions,
)
from tidyup.core.errors import LlmResponseParseError, LlmUnavailableError, MissingApiKeyError
from tidyup.core.models import FileRecord


RECORDS = [
    FileRecord(name="invoice.pdf", path=Path("/in/invoice.pdf"), size=2048, extension=".pdf", modified=0.0),
    FileRecord(name="song.mp3", path=Path("/in/song.mp3"), size=5 * 1024 * 1024, extension=".mp3", modified=0.0),
]


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 B"), (1023, "1023 B"), (1536, "1.5 KB"), (3 * 1024 * 1024, "3.0 MB"), (2 * 1024 ** 3, "2.0 GB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


def test_prompt_lists_name_extension_and_size():
    prompt = build_prompt(RECORDS)

    assert "invoice.pdf (.pdf, 2.0 KB)" in prompt
    assert "song.mp3 (.mp3, 5.0 MB)" in prompt
    assert "Respond ONLY with valid JSON array" in prompt


def test_analyze_files_sends_prompt_and_parses_reply():
    client = fake_client(
        [
            {"name": "invoice.pdf", "folder": "Documents/Finance", "confidence": "high", "reason": "Invoice"},
            {"name": "song.mp3", "folder": "Music", "confidence": "medium", "reason": "Audio"},
        ]
    )

    suggestions = analyze_files(RECORDS, None, client=client)

    assert [(s.name, s.folder, s.confidence) for s in suggestions] == [
        ("invoice.pdf", "Documents/Finance", "high"),
        ("song.mp3", "Music", "medium"),
    ]
    call = client.chat.completions.calls[0]
    assert call["model"] == DEFAULT_MODEL
    assert call["temperature"] == 0.3
    assert call["max_tokens"] == 2000
    assert "invoice.pdf" in call["messages"][0]["content"]


def test_model_can_be_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("TIDYUP_MODEL", "gpt-test")
    client = fake_client([])

    analyze_files(RECORDS, None, client=client)

    assert client.chat.completions.calls[0]["model"] == "gpt-test"


def test_missing_key_fails_before_any_call():
    with pytest.raises(MissingApiKeyError):
        analyze_files(RECORDS, "")


def test_api_failure_becomes_llm_unavailable():
    client = fake_client(error=RuntimeError("connection reset"))

    with pytest.raises(LlmUnavailableError, match="connection reset"):
        analyze_files(RECORDS, None, client=client)


def test_reply_wrapped_in_markdown_fence():
    content = 'Sure!\n```json\n[{"name": "a.txt", "folder": "Text", "confidence": "low", "reason": "r"}]\n```'

    suggestions = parse_suggestions(content)

    assert [s.name for s in suggestions] == ["a.txt"]


@pytest.mark.parametrize("content", ["", "no json here", '{"name": "a.txt"}', "[1, 2"])
def test_unparseable_reply_raises(content):
    with pytest.raises(LlmResponseParseError):
        parse_suggestions(content)


def test_malformed_entries_are_skipped_and_confidence_kept_verbatim():
    content = (
        '[{"name": "a.txt", "folder": "Text", "confidence": "certain"},'
        ' "junk",'
        ' {"name": "b.txt"},'
        ' {"name": "c.txt", "folder": "   "},'
        ' {"name": 5, "folder": "Numbers"}]'
    )

    suggestions = parse_suggestions(content)

    assert len(suggestions) == 1
    assert suggestions[0].confidence == "certain"
    assert suggestions[0].reason == ""


def test_null_confidence_and_reason_fall_back_to_defaults():
    suggestions = parse_suggestions('[{"name": "a.txt", "folder": "Text", "confidence": null, "reason": null}]')

    assert suggestions[0].confidence == "low"
    assert suggestions[0].reason == ""
