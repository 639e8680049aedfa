from __future__ import annotations

import logging
from typing import Any, Dict, List

from impersonator import config
from impersonator.providers import client as providers
from .extract import classify_lyrics, classify_message, completion_text, first_message, lyrics_text
from .schemas import GenerationRequest

log = logging.getLogger("impersonator.lyrics_generation")

SYSTEM_PERSONA = "You are a helpful creative songwriting assistant."
MAX_OUTPUT_TOKENS = 800

PROMPT_TEMPLATE = (
    "You are a creative assistant that writes song lyrics in the style of the provided artist/song.\n\n"
    "Original Lyrics:\n{original_lyrics}\n\n"
    "Description/Mood:\n{description}\n\n"
    "Please generate an original set of lyrics inspired by the above (do not reproduce copyrighted lyrics)."
)


def fetch_original_lyrics(author_name: str, song: str) -> str:
    """Best-effort Genius lookup; any failure degrades to empty lyrics."""
    try:
        raw = providers.search_lyrics(title=song, artist=author_name, optimize=True)
        return lyrics_text(classify_lyrics(raw))
    except Exception as e:
        log.warning("Genius fetch failed: %s", e)
        return ""


def build_prompt(original_lyrics: str, description: str) -> str:
    return PROMPT_TEMPLATE.format(original_lyrics=original_lyrics, description=description)


def build_messages(prompt: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": [{"type": "text", "text": SYSTEM_PERSONA}]},
        {"role": "user", "content": [{"type": "text", "text": prompt}]},
    ]


def request_completion(prompt: str) -> str:
    """Send the prompt to OpenRouter and flatten the reply to text.

    Raises MissingCredentialsError before any network call when no key is
    configured. Upstream errors propagate; there is no retry.
    """
    client = providers.get_openrouter_client()
    model = config.completion_model()
    log.info("requesting completion model=%s prompt_chars=%d", model, len(prompt))
    completion = client.chat.completions.create(
        model=model,
        messages=build_messages(prompt),
        max_tokens=MAX_OUTPUT_TOKENS,
    )
    return completion_text(classify_message(first_message(completion)))


def generate_lyrics(request: GenerationRequest) -> str:
    # the prompt embeds the lookup result, so the calls stay sequential
    original = fetch_original_lyrics(request.authorName, request.song)
    prompt = build_prompt(original, request.description)
    return request_completion(prompt)
