"""Exceptions that reach the API layer.

Infrastructure failures (store, cache, fetch) are not exceptions: they come
back as StoreUnavailable / FetchError values and degrade at their origin.
"""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """A required setting (e.g. the generation API key) is missing."""


class GenerationError(Exception):
    """The Messages API call failed. Quota is never consumed for these.

    status_code is the downstream HTTP status, or 502 for transport errors
    and unreadable responses. body is forwarded to the caller as-is.
    """

    def __init__(self, status_code: int, body: dict[str, Any] | None = None, message: str = ""):
        self.status_code = status_code
        self.body = body if body is not None else {"error": message or f"HTTP {status_code}"}
        super().__init__(message or f"generation failed with status {status_code}")
