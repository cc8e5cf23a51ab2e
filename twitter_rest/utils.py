"""
Utility Functions
URL resolution and response body helpers.
"""

import json
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlparse

from .exceptions import DecodeError

JSON_CONTENT_TYPES = ("application/json", "text/javascript")
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def resolve_url(url: str, api_url: str, api_version: str) -> str:
    """
    Make a URL absolute.

    Args:
        url: Relative API path (e.g. "/statuses/home_timeline.json") or absolute URL
        api_url: API base, without trailing slash
        api_version: API version prefix (e.g. "1.1")

    Returns:
        The URL unchanged if it has a scheme, otherwise base + "/" + version + path
    """
    if urlparse(url).scheme:
        return url
    return f"{api_url}/{api_version}{url}"


def content_type(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """Return the lowercased media type of a Content-Type header, or None."""
    if not headers:
        return None
    value = None
    for key, val in headers.items():
        if key.lower() == "content-type":
            value = val
            break
    if not value:
        return None
    return value.split(";", 1)[0].strip().lower()


def parse_form(body: Union[bytes, str]) -> Dict[str, str]:
    """
    Decode a form-encoded body.

    Args:
        body: Raw body, e.g. b"oauth_token=abc&oauth_token_secret=xyz"

    Returns:
        Mapping of decoded keys to values

    Raises:
        DecodeError: if the body is not valid UTF-8
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid form body: {e}") from e
    return dict(parse_qsl(body, keep_blank_values=True))


def decode_body(body: Union[bytes, str], headers: Optional[Mapping[str, str]]) -> Any:
    """
    Decode a response body according to its declared content type.

    JSON (and text/javascript) bodies become Python values, form-encoded
    bodies become dicts. Anything else, including empty bodies and bodies
    without a Content-Type, is returned raw.

    Raises:
        DecodeError: if a JSON or form body cannot be decoded
    """
    if not body:
        return body
    media_type = content_type(headers)
    if media_type in JSON_CONTENT_TYPES:
        try:
            return json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON body: {e}") from e
    if media_type == FORM_CONTENT_TYPE:
        return parse_form(body)
    return body


def error_reason(body: Any) -> Any:
    """
    Extract the reason from a Twitter error payload.

    Twitter reports errors as {"errors": [{"message": ..., "code": ...}]}.
    Only the first message is surfaced. Bodies of any other shape are
    returned whole.
    """
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and "message" in first:
                return first["message"]
    return body
