"""Tests for Authorization header construction."""

import re
from urllib.parse import parse_qsl

import pytest

from twitter_rest.auth import authorization_header, parse_oauth_fields, sign_xauth
from twitter_rest.exceptions import AuthError
from twitter_rest.models import BearerToken, ClientCredentials

URL = "https://api.twitter.com/1.1/statuses/home_timeline.json"


def oauth_params(header):
    return dict(re.findall(r'(oauth_\w+)="([^"]*)"', header))


def test_bearer_header():
    """Test bearer tokens are rendered as '<type> <token>'."""
    assert authorization_header(BearerToken("AAAA"), "GET", URL) == "bearer AAAA"
    assert authorization_header(BearerToken("AAAA", "Bearer"), "GET", URL) == "Bearer AAAA"


def test_oauth1_header_fields():
    """Test an OAuth1 header carries the credential identifiers."""
    credentials = ClientCredentials("ck", "cs", "tok", "ts")
    header = authorization_header(credentials, "get", URL)
    params = oauth_params(header)

    assert header.startswith("OAuth ")
    assert params["oauth_consumer_key"] == "ck"
    assert params["oauth_token"] == "tok"
    assert params["oauth_signature_method"] == "HMAC-SHA1"
    assert params["oauth_signature"]


def test_oauth1_resign_changes_nonce():
    """Test re-signing the same request uses a new nonce but the same identifiers."""
    credentials = ClientCredentials("ck", "cs", "tok", "ts")
    first = oauth_params(authorization_header(credentials, "GET", URL))
    second = oauth_params(authorization_header(credentials, "GET", URL))

    assert first["oauth_nonce"] != second["oauth_nonce"]
    assert first["oauth_signature"] != second["oauth_signature"]
    assert first["oauth_consumer_key"] == second["oauth_consumer_key"]
    assert first["oauth_token"] == second["oauth_token"]


def test_oauth1_without_token():
    """Test consumer-only credentials sign without an oauth_token."""
    header = authorization_header(ClientCredentials("ck", "cs"), "POST", URL)
    assert "oauth_token" not in oauth_params(header)


def test_missing_consumer_key():
    """Test empty consumer credentials are rejected."""
    with pytest.raises(AuthError):
        authorization_header(ClientCredentials(None, "cs", "tok", "ts"), "GET", URL)


def test_unsupported_auth():
    """Test anything other than the two token types is rejected."""
    with pytest.raises(AuthError, match="dict"):
        authorization_header({"token": "x"}, "GET", URL)


def test_sign_xauth():
    """Test the xAuth request carries the exchange parameters."""
    headers, body = sign_xauth(ClientCredentials("ck", "cs"),
                               "https://api.twitter.com/oauth/access_token", "benwa", "p@ss word")

    assert dict(parse_qsl(body)) == {
        "x_auth_mode": "client_auth",
        "x_auth_username": "benwa",
        "x_auth_password": "p@ss word",
    }
    assert headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert oauth_params(headers["Authorization"])["oauth_consumer_key"] == "ck"


def test_parse_oauth_fields():
    """Test only oauth_ fields are kept, without their prefix."""
    fields = {"oauth_token": "abc", "oauth_token_secret": "xyz", "user_id": "6969", "x_auth_expires": "0"}
    assert parse_oauth_fields(fields) == {"token": "abc", "token_secret": "xyz"}
