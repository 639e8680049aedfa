from __future__ import annotations

import pytest

from impersonator import config
from impersonator.providers import client as providers


def test_completion_key_precedence(monkeypatch) -> None:
    assert config.resolve_completion_key() is None

    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    assert config.resolve_completion_key() == "sk-openai"

    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-router")
    assert config.resolve_completion_key() == "sk-router"

    monkeypatch.setenv("GEMINI_API_KEY", "sk-gemini")
    assert config.resolve_completion_key() == "sk-gemini"

    # blank values are skipped
    monkeypatch.setenv("GEMINI_API_KEY", "  ")
    assert config.resolve_completion_key() == "sk-router"


def test_identification_headers_only_when_set(monkeypatch) -> None:
    assert config.identification_headers() == {}
    monkeypatch.setenv("SITE_URL", "https://impersonator.example")
    assert config.identification_headers() == {"HTTP-Referer": "https://impersonator.example"}
    monkeypatch.setenv("SITE_TITLE", "Impersonator")
    assert config.identification_headers() == {
        "HTTP-Referer": "https://impersonator.example",
        "X-Title": "Impersonator",
    }


def test_completion_model_default(monkeypatch) -> None:
    assert config.completion_model() == "google/gemini-2.5-flash"
    monkeypatch.setenv("GEMINI_MODEL", "openai/gpt-4o-mini")
    assert config.completion_model() == "openai/gpt-4o-mini"


def test_cors_origins_extend_defaults(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, http://localhost:3000,")
    origins = config.cors_origins()
    assert origins[: len(config.DEFAULT_CORS_ORIGINS)] == config.DEFAULT_CORS_ORIGINS
    assert origins.count("http://localhost:3000") == 1
    assert "https://a.example" in origins


@pytest.mark.parametrize("raw, expected", [
    ("Cardigan", "cardigan"),
    ("Shape of You (Remix)", "shape of you"),
    ("Song [Live at Wembley] Name", "song name"),
    ("Ed Sheeran feat. Justin Bieber", "ed sheeran justin bieber"),
    ("Artist ft. Other", "artist other"),
    ("  Lots   of\tspace  ", "lots of space"),
    ("Left (Part 1) Right", "left right"),
    ("", ""),
])
def test_optimize_query(raw, expected) -> None:
    assert providers.optimize_query(raw) == expected


def test_optimize_query_keeps_words_containing_ft() -> None:
    assert providers.optimize_query("Daft Punk") == "daft punk"


class FakeGenius:
    instances: list = []

    def __init__(self, token):
        self.token = token
        self.verbose = True
        self.searches = []
        FakeGenius.instances.append(self)

    def search_song(self, title, artist):
        self.searches.append((title, artist))
        return None


def test_search_lyrics_optimizes_and_calls_genius(monkeypatch) -> None:
    FakeGenius.instances = []
    monkeypatch.setattr(providers.lyricsgenius, "Genius", FakeGenius)
    monkeypatch.setenv("GENIUS_API_KEY", "genius-token")

    assert providers.search_lyrics(title="Perfect (Acoustic)", artist="Ed Sheeran ft. Beyonce") is None

    genius = FakeGenius.instances[-1]
    assert genius.token == "genius-token"
    assert genius.verbose is False
    assert genius.searches == [("perfect", "ed sheeran beyonce")]


def test_search_lyrics_without_optimization(monkeypatch) -> None:
    FakeGenius.instances = []
    monkeypatch.setattr(providers.lyricsgenius, "Genius", FakeGenius)
    monkeypatch.setenv("GENIUS_API_KEY", "genius-token")
    providers.search_lyrics(title="Perfect (Acoustic)", artist="Ed Sheeran", optimize=False)
    assert FakeGenius.instances[-1].searches == [("Perfect (Acoustic)", "Ed Sheeran")]


def test_genius_requires_token() -> None:
    with pytest.raises(providers.LyricsLookupError):
        providers.get_genius_client()


def test_openrouter_client_requires_key() -> None:
    with pytest.raises(providers.MissingCredentialsError) as exc:
        providers.get_openrouter_client()
    assert str(exc.value) == "Missing GEMINI_API_KEY / OpenRouter API key"
    assert isinstance(exc.value, providers.ChatError)


def test_openrouter_client_is_configured(monkeypatch) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-router")
    monkeypatch.setenv("SITE_URL", "https://impersonator.example")
    client = providers.get_openrouter_client()
    assert client.api_key == "sk-router"
    assert str(client.base_url).rstrip("/") == "https://openrouter.ai/api/v1"
    assert client.default_headers["HTTP-Referer"] == "https://impersonator.example"
