"""
Exception hierarchy for the twitter_rest package.

Non-raising operations return these inside a ``Result``; the ``*_or_raise``
variants and ``Result.unwrap()`` raise them.
"""
from typing import Any, Optional


class APIError(Exception):
    """Base error. ``reason`` is a message or the underlying error value."""

    def __init__(self, reason: Any):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return str(self.reason)


class TransportError(APIError):
    """Raised when the HTTP transport fails; ``reason`` is the transport's exception."""


class ProviderError(APIError):
    """Raised when Twitter answers with a non-2xx status."""

    def __init__(self, reason: Any, *, status_code: Optional[int] = None, body: Any = None):
        super().__init__(reason)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.reason}"


class AuthError(APIError):
    """Raised when credentials are missing or malformed, or a token exchange fails."""


class DecodeError(APIError):
    """Raised when a body declared as JSON cannot be parsed."""
