"""Tests for configuration and result helpers."""

from unittest.mock import patch

import pytest

from twitter_rest.config import ClientConfig, Config
from twitter_rest.exceptions import ProviderError
from twitter_rest.models import ClientCredentials, Result


def test_from_env_falls_back_to_consumer_pair():
    """Test the client pair defaults to the consumer pair."""
    with patch.object(Config, "TWITTER_CONSUMER_KEY", "ck"), \
            patch.object(Config, "TWITTER_CONSUMER_SECRET", "cs"), \
            patch.object(Config, "TWITTER_CLIENT_ID", None), \
            patch.object(Config, "TWITTER_CLIENT_SECRET", None):
        config = ClientConfig.from_env()
    assert (config.client_id, config.client_secret) == ("ck", "cs")


def test_from_env_client_pair_override():
    """Test an explicit client pair is used for OAuth2."""
    with patch.object(Config, "TWITTER_CONSUMER_KEY", "ck"), \
            patch.object(Config, "TWITTER_CLIENT_ID", "id"), \
            patch.object(Config, "TWITTER_CLIENT_SECRET", "secret"):
        config = ClientConfig.from_env()
    assert config.consumer_key == "ck"
    assert (config.client_id, config.client_secret) == ("id", "secret")


def test_endpoints_follow_api_url():
    config = ClientConfig(api_url="http://localhost:8080")
    assert config.access_token_url == "http://localhost:8080/oauth/access_token"
    assert config.token_url == "http://localhost:8080/oauth2/token"


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        ClientConfig().api_url = "https://example.com"


def test_with_token_returns_new_credentials():
    base = ClientCredentials("ck", "cs")
    updated = base.with_token("abc", "xyz")
    assert base.token is None
    assert updated == ClientCredentials("ck", "cs", "abc", "xyz")


def test_result_unwrap():
    assert Result(value=1).unwrap() == 1
    error = ProviderError("Invalid token", status_code=403)
    result = Result(error=error)
    assert not result.ok
    with pytest.raises(ProviderError, match="Invalid token"):
        result.unwrap()
    assert str(error) == "HTTP 403: Invalid token"
