"""
Authentication Module
Build Authorization headers for Twitter API requests.
"""

from typing import Dict, Optional, Tuple
from urllib.parse import urlencode

from oauthlib import oauth1

from .exceptions import AuthError
from .models import BearerToken, ClientCredentials
from .utils import FORM_CONTENT_TYPE


def _oauth1_client(credentials: ClientCredentials) -> oauth1.Client:
    if not credentials.consumer_key or not credentials.consumer_secret:
        raise AuthError("Missing consumer key or consumer secret")
    return oauth1.Client(
        credentials.consumer_key,
        client_secret=credentials.consumer_secret,
        resource_owner_key=credentials.token,
        resource_owner_secret=credentials.token_secret,
        signature_method=oauth1.SIGNATURE_HMAC,
        signature_type=oauth1.SIGNATURE_TYPE_AUTH_HEADER,
    )


def sign_xauth(credentials: ClientCredentials, url: str,
               username: str, password: str) -> Tuple[Dict[str, str], str]:
    """
    Sign an xAuth access token request.

    Args:
        credentials: Consumer credentials (no token yet)
        url: Absolute access token endpoint
        username: Twitter username
        password: Twitter password

    Returns:
        Headers to send (Authorization and Content-Type) and the form-encoded body
    """
    body = urlencode([
        ("x_auth_mode", "client_auth"),
        ("x_auth_username", username),
        ("x_auth_password", password),
    ])
    client = _oauth1_client(credentials)
    try:
        _, headers, body = client.sign(url, "POST", body=body,
                                       headers={"Content-Type": FORM_CONTENT_TYPE})
    except ValueError as e:
        raise AuthError(f"Unable to sign xAuth request: {e}") from e
    return dict(headers), body


def authorization_header(auth, method: str, url: str) -> str:
    """
    Compute the Authorization header value for a request.

    Bearer tokens are sent as-is. OAuth1 credentials get a fresh signature
    (new nonce and timestamp) over the method and URL only; body
    parameters never enter the signature base.

    Args:
        auth: BearerToken or ClientCredentials
        method: HTTP method
        url: Absolute request URL

    Returns:
        Header value for ``Authorization``
    """
    if isinstance(auth, BearerToken):
        return f"{auth.token_type} {auth.access_token}"
    if isinstance(auth, ClientCredentials):
        client = _oauth1_client(auth)
        try:
            _, headers, _ = client.sign(url, str(method).upper())
        except ValueError as e:
            raise AuthError(f"Unable to sign request: {e}") from e
        return headers["Authorization"]
    raise AuthError(f"Unsupported auth type: {type(auth).__name__}")


def parse_oauth_fields(fields: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Keep ``oauth_``-prefixed fields of a token response, prefix stripped."""
    prefix = "oauth_"
    return {key[len(prefix):]: value for key, value in fields.items() if key.startswith(prefix)}
