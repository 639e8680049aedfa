"""Environment-sourced settings for the lyrics generator.

Everything is read at call time so a changed environment (or a test's
monkeypatch) is picked up without restarting the app.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple


OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"

# First non-empty wins.
COMPLETION_KEY_SOURCES: Tuple[str, ...] = (
    "GEMINI_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENAI_API_KEY",
)

# (env var, outbound header)
IDENTIFICATION_HEADER_SOURCES: Tuple[Tuple[str, str], ...] = (
    ("SITE_URL", "HTTP-Referer"),
    ("SITE_TITLE", "X-Title"),
)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_list(var_name: str) -> list[str]:
    raw = _env(var_name)
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def resolve_completion_key() -> Optional[str]:
    for name in COMPLETION_KEY_SOURCES:
        value = _env(name)
        if value:
            return value
    return None


def identification_headers() -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for var_name, header in IDENTIFICATION_HEADER_SOURCES:
        value = _env(var_name)
        if value:
            headers[header] = value
    return headers


def completion_model() -> str:
    return _env("GEMINI_MODEL") or DEFAULT_MODEL


def genius_api_key() -> Optional[str]:
    return _env("GENIUS_API_KEY") or None


def cors_origins() -> list[str]:
    origins = list(DEFAULT_CORS_ORIGINS)
    for origin in _env_list("CORS_ORIGINS"):
        if origin not in origins:
            origins.append(origin)
    return origins
