from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from impersonator import config
from impersonator.providers import client as providers


CONFIG_VARS = (
    "GENIUS_API_KEY",
    *config.COMPLETION_KEY_SOURCES,
    "SITE_URL",
    "SITE_TITLE",
    "GEMINI_MODEL",
    "CORS_ORIGINS",
    "IMPERSONATOR_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # keep a developer .env out of the tests
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


def completion_with(content: Any) -> SimpleNamespace:
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class FakeOpenRouter:
    """Stands in for openai.OpenAI; records construction and create() calls."""

    instances: List["FakeOpenRouter"] = []
    response: Any = None
    error: Exception | None = None

    def __init__(self, api_key: str, base_url: str, default_headers: Dict[str, str] | None = None) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.default_headers = default_headers or {}
        self.calls: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        FakeOpenRouter.instances.append(self)

    def _create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if FakeOpenRouter.error is not None:
            raise FakeOpenRouter.error
        return FakeOpenRouter.response


@pytest.fixture
def fake_openrouter(monkeypatch):
    FakeOpenRouter.instances = []
    FakeOpenRouter.response = completion_with("generated lyrics")
    FakeOpenRouter.error = None
    monkeypatch.setattr(providers, "OpenAI", FakeOpenRouter)
    return FakeOpenRouter


@pytest.fixture
def genius_calls(monkeypatch):
    """Replace the Genius lookup; set ``.result`` or ``.error`` per test."""
    recorder = SimpleNamespace(calls=[], result="la la la", error=None)

    def fake_search(title: str, artist: str, optimize: bool = True) -> Any:
        recorder.calls.append({"title": title, "artist": artist, "optimize": optimize})
        if recorder.error is not None:
            raise recorder.error
        return recorder.result

    monkeypatch.setattr(providers, "search_lyrics", fake_search)
    return recorder


def sent_prompt(fake: Any) -> str:
    call = fake.instances[-1].calls[-1]
    return call["messages"][1]["content"][0]["text"]
