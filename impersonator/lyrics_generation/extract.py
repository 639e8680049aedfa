"""Turn loosely typed upstream payloads into plain text.

Neither upstream guarantees a response shape, so each payload is first
classified into one of a small set of variants and then rendered by a
single function per family. The fallback for every variant is explicit.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple, Union


LYRICS_FALLBACK_LIMIT = 4000


# -- lyrics provider --------------------------------------------------------

@dataclass(frozen=True)
class PlainLyrics:
    text: str


@dataclass(frozen=True)
class NoLyrics:
    pass


@dataclass(frozen=True)
class UnrecognizedLyrics:
    raw: Any


LyricsLookupResult = Union[PlainLyrics, NoLyrics, UnrecognizedLyrics]


def _text_field(value: Any, name: str) -> str | None:
    if isinstance(value, Mapping):
        field = value.get(name)
    else:
        field = getattr(value, name, None)
    return field if isinstance(field, str) else None


def _to_jsonable(value: Any) -> Any:
    for attr in ("model_dump", "to_dict"):
        dump = getattr(value, attr, None)
        if callable(dump):
            try:
                return dump()
            except Exception:
                break
    return value


def _serialize(value: Any) -> str:
    return json.dumps(_to_jsonable(value), default=str, ensure_ascii=False)


def classify_lyrics(raw: Any) -> LyricsLookupResult:
    if raw is None:
        return NoLyrics()
    if isinstance(raw, str):
        return PlainLyrics(raw)
    text = _text_field(raw, "lyrics")
    if text is not None:
        return PlainLyrics(text)
    return UnrecognizedLyrics(raw)


def lyrics_text(result: LyricsLookupResult) -> str:
    if isinstance(result, PlainLyrics):
        return result.text
    if isinstance(result, UnrecognizedLyrics):
        return _serialize(result.raw)[:LYRICS_FALLBACK_LIMIT]
    return ""


# -- completion provider ----------------------------------------------------

@dataclass(frozen=True)
class NoMessage:
    pass


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class PartsContent:
    parts: Tuple[str, ...]


@dataclass(frozen=True)
class OpaqueContent:
    raw: Any


@dataclass(frozen=True)
class ContentlessMessage:
    raw: Any


CompletionResult = Union[NoMessage, TextContent, PartsContent, OpaqueContent, ContentlessMessage]


def _part_text(part: Any) -> str:
    if isinstance(part, str):
        return part
    return _text_field(part, "text") or ""


def classify_message(message: Any) -> CompletionResult:
    if message is None:
        return NoMessage()
    if isinstance(message, str):
        return TextContent(message)
    if isinstance(message, Mapping):
        content = message.get("content")
    else:
        content = getattr(message, "content", None)
    if content is None:
        return ContentlessMessage(message)
    if isinstance(content, str):
        return TextContent(content)
    if isinstance(content, Sequence):
        return PartsContent(tuple(_part_text(p) for p in content))
    return OpaqueContent(content)


def completion_text(result: CompletionResult) -> str:
    if isinstance(result, TextContent):
        return result.text
    if isinstance(result, PartsContent):
        return "".join(result.parts)
    if isinstance(result, OpaqueContent):
        return str(result.raw)
    if isinstance(result, ContentlessMessage):
        return _serialize(result.raw)
    return ""


def first_message(completion: Any) -> Any:
    """Return ``choices[0].message`` or None when any step is missing."""
    if completion is None:
        return None
    if isinstance(completion, Mapping):
        choices = completion.get("choices")
    else:
        choices = getattr(completion, "choices", None)
    if not choices:
        return None
    choice = choices[0]
    if isinstance(choice, Mapping):
        return choice.get("message")
    return getattr(choice, "message", None)
