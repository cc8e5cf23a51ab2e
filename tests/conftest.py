"""Shared fixtures for twitter_rest tests."""

import json

import pytest
import requests

from twitter_rest.client import TwitterAPI
from twitter_rest.config import ClientConfig


@pytest.fixture
def config():
    return ClientConfig(
        consumer_key="test_key",
        consumer_secret="test_secret",
        client_id="test_client_id",
        client_secret="test_client_secret",
    )


@pytest.fixture
def api(config):
    return TwitterAPI(config)


@pytest.fixture
def make_response():
    """Build a real requests.Response without touching the network."""

    def _make(status_code=200, body=b"", content_type="application/json",
              url="https://api.twitter.com/1.1/test.json"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        response = requests.Response()
        response.status_code = status_code
        response._content = body
        response.url = url
        response.request = requests.Request("GET", url).prepare()
        if content_type:
            response.headers["Content-Type"] = content_type
        return response

    return _make
