"""
motzkin_store.pipeline.errors

Fetch error taxonomy.

Responsibilities:
- Distinguish transport, HTTP status and body-parsing failures.
- Collapse all of them into a single `FetchFailed` outcome for callers.
"""

from __future__ import annotations

from dataclasses import dataclass


class FetchError(Exception):
    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Transport unreachable, connection reset, timeout."""


class HttpError(FetchError):
    def __init__(self, message: str, *, status_code: int, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class ParseError(FetchError):
    """Body is not valid JSON or not the expected shape."""


@dataclass(frozen=True, slots=True)
class FetchFailed:
    """
    Outcome handed to `on_failure` callbacks; never raised.
    """

    stage: str
    reason: str
    error: FetchError


# --- Module Notes -----------------------------------------------------------
# Failures are contained at `FetchOrchestrator.run`; nothing here is fatal to a pipeline.
