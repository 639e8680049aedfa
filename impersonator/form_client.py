"""Python counterpart of the browser form served at ``/``.

Validates the three fields locally, posts them to the generation endpoint
with a 20 second timeout and keeps the same result / error / loading state
the page shows. ``main`` wraps it as the ``impersonator-form`` command.
"""

from __future__ import annotations

import argparse
import concurrent.futures
import enum
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

import requests

log = logging.getLogger("impersonator.form_client")

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
ENDPOINT = "/api/generate-lyrics"
REQUEST_TIMEOUT_SECONDS = 20.0

TIMEOUT_MESSAGE = "Request timed out. Try again."
GENERIC_FAILURE_MESSAGE = "Failed to generate lyrics. Please try again."

# Checked in order; the first empty field's message is shown.
FORM_RULES = (
    ("authorName", "Author name is required"),
    ("song", "Song is required"),
    ("description", "Description is required"),
)


class FormStatus(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class FormState:
    status: FormStatus = FormStatus.IDLE
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is FormStatus.SUBMITTING


def validate(author_name: str, song: str, description: str) -> Optional[str]:
    values = {"authorName": author_name, "song": song, "description": description}
    for field, message in FORM_RULES:
        if not values[field]:
            return message
    return None


class FormClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("IMPERSONATOR_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.state = FormState()

    @property
    def url(self) -> str:
        return self.base_url + ENDPOINT

    def _fail(self, message: str) -> FormState:
        self.state = FormState(status=FormStatus.FAILED, error=message)
        return self.state

    def submit(self, author_name: str, song: str, description: str) -> FormState:
        self.state = FormState()
        problem = validate(author_name, song, description)
        if problem:
            return self._fail(problem)

        self.state = FormState(status=FormStatus.SUBMITTING)
        payload = {"authorName": author_name, "song": song, "description": description}
        # deadline for the whole exchange, not just connect and each read
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self.session.post, self.url, json=payload, timeout=self.timeout)
        try:
            resp = future.result(timeout=self.timeout)
        except (requests.Timeout, concurrent.futures.TimeoutError):
            future.cancel()
            log.warning("generation request exceeded %.0fs", self.timeout)
            return self._fail(TIMEOUT_MESSAGE)
        except Exception:
            log.exception("generation request failed")
            return self._fail(GENERIC_FAILURE_MESSAGE)
        finally:
            executor.shutdown(wait=False)

        if not resp.ok:
            return self._fail(resp.text or f"Server returned {resp.status_code}")
        try:
            data = resp.json()
        except ValueError:
            log.exception("generation response was not JSON")
            return self._fail(GENERIC_FAILURE_MESSAGE)

        lyrics = data.get("lyrics") if isinstance(data, dict) else None
        self.state = FormState(status=FormStatus.SUCCESS, result=lyrics or "")
        return self.state


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="impersonator-form",
        description="Generate lyrics in the style of an existing song.",
    )
    parser.add_argument("--author", default="", help="Author / artist name")
    parser.add_argument("--song", default="", help="Song title")
    parser.add_argument("--description", default="", help="Short description / mood / themes")
    parser.add_argument("--url", default=None, help=f"Server base URL (default: $IMPERSONATOR_URL or {DEFAULT_BASE_URL})")
    parser.add_argument("--timeout", type=float, default=REQUEST_TIMEOUT_SECONDS)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    client = FormClient(base_url=args.url, timeout=args.timeout)
    state = client.submit(args.author, args.song, args.description)
    if state.error is not None:
        print(state.error, file=sys.stderr)
        return 1
    print(state.result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
