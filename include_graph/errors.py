"""Error taxonomy for listing, fetching and parsing."""

from __future__ import annotations


class IncludeGraphError(Exception):
    """Base class for all include-graph errors."""


class TransportError(IncludeGraphError):
    """A directory listing or content fetch failed."""

    def __init__(self, message: str, path: str = "", status_code: int | None = None):
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class RateLimitError(TransportError):
    """The remote API refused the request for quota or credential reasons.

    Unlike other transport failures this one is not swallowed per file or
    per directory: every following request would fail the same way.
    """


class NotFoundError(IncludeGraphError):
    """The requested path does not exist (or is not a directory)."""

    def __init__(self, path: str, message: str | None = None):
        super().__init__(message or f"Path not found: {path!r}")
        self.path = path


class ParseError(IncludeGraphError, ValueError):
    """Input handed to the include parser is not text."""
