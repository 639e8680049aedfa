from __future__ import annotations

"""Provider client helpers used by lyrics_generation.

Two upstreams are involved: Genius for the original lyrics (best effort)
and OpenRouter, which speaks the OpenAI-compatible API, for the
generation itself. Clients are built per request from the current
environment.
"""

import logging
import re
from typing import Any

import lyricsgenius  # type: ignore
from openai import OpenAI

from impersonator import config

log = logging.getLogger("impersonator.providers")

MISSING_COMPLETION_KEY_MESSAGE = "Missing GEMINI_API_KEY / OpenRouter API key"


class ChatError(RuntimeError):
    pass


class MissingCredentialsError(ChatError):
    pass


class LyricsLookupError(RuntimeError):
    pass


_PARENTHESIZED = re.compile(r"\s*\([^)]*\)\s*")
_BRACKETED = re.compile(r"\s*\[[^\]]*\]\s*")
_FEATURING = re.compile(r"\b(?:feat|ft)\b\.?")
_WHITESPACE = re.compile(r"\s+")


def optimize_query(value: str) -> str:
    """Normalize a title or artist for search.

    "Song (Remix) [Live] feat. Someone" -> "song someone"
    """
    q = (value or "").lower()
    q = _PARENTHESIZED.sub(" ", q)
    q = _BRACKETED.sub(" ", q)
    q = _FEATURING.sub(" ", q)
    return _WHITESPACE.sub(" ", q).strip()


def get_genius_client() -> Any:
    token = config.genius_api_key()
    if not token:
        raise LyricsLookupError("GENIUS_API_KEY is not set in .env")
    genius = lyricsgenius.Genius(token)
    genius.verbose = False
    return genius


def search_lyrics(title: str, artist: str, optimize: bool = True) -> Any:
    """Look up a song on Genius and return whatever the library hands back.

    The result is not guaranteed to have a particular shape: usually a
    ``Song`` with a ``lyrics`` attribute, ``None`` when nothing matched.
    """
    if optimize:
        title, artist = optimize_query(title), optimize_query(artist)
    genius = get_genius_client()
    log.debug("genius search title=%r artist=%r", title, artist)
    return genius.search_song(title, artist)


def get_openrouter_client() -> OpenAI:
    """Client for OpenRouter, which speaks the OpenAI-compatible API.

    We reuse the OpenAI SDK with a fixed base_url. The key comes from the
    first configured variable in ``config.COMPLETION_KEY_SOURCES``; a
    missing key fails here, before anything goes over the wire.
    """
    api_key = config.resolve_completion_key()
    if not api_key:
        raise MissingCredentialsError(MISSING_COMPLETION_KEY_MESSAGE)
    headers = config.identification_headers()
    if headers:
        return OpenAI(api_key=api_key, base_url=config.OPENROUTER_BASE_URL, default_headers=headers)
    return OpenAI(api_key=api_key, base_url=config.OPENROUTER_BASE_URL)
