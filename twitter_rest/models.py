"""Value types passed in and out of TwitterAPI."""
from typing import Any, Mapping, NamedTuple, Optional, Union


class ClientCredentials(NamedTuple):
    """OAuth1 user-context credentials.

    ``token`` and ``token_secret`` stay empty until an xAuth exchange fills them.
    """
    consumer_key: str
    consumer_secret: str
    token: Optional[str] = None
    token_secret: Optional[str] = None

    def with_token(self, token: Optional[str], token_secret: Optional[str]) -> "ClientCredentials":
        """Return a copy carrying the given access token pair."""
        return self._replace(token=token, token_secret=token_secret)


class BearerToken(NamedTuple):
    """Application-only OAuth2 access token."""
    access_token: str
    token_type: str = "bearer"


Auth = Union[ClientCredentials, BearerToken]


class APIResponse(NamedTuple):
    """A successful response with its body decoded by content type."""
    status_code: int
    headers: Mapping[str, str]
    body: Any
    url: Optional[str] = None


class Result(NamedTuple):
    """Outcome of an operation: either ``value`` or ``error`` is set."""
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
