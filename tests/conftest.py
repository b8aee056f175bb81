import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from tidyup.core.history import HistoryLedger
from tidyup.core.settings import SettingsStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real settings dir and API key."""
    monkeypatch.setenv("TIDYUP_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("TIDYUP_MODEL", raising=False)


@pytest.fixture
def store(tmp_path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings" / "settings.json")


@pytest.fixture
def ledger(store) -> HistoryLedger:
    return HistoryLedger.load(store)


@pytest.fixture
def base(tmp_path) -> Path:
    folder = tmp_path / "inbox"
    folder.mkdir()
    return folder


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, error=None):
    """Stand-in for openai.OpenAI exposing chat.completions.create()."""
    if content is not None and not isinstance(content, str):
        content = json.dumps(content)
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))
