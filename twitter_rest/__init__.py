"""
twitter_rest - Twitter REST API Client
Authenticated requests against Twitter's REST API using xAuth or
application-only OAuth2.
"""

__version__ = "0.1.0"
__author__ = "Developer"

from .client import TwitterAPI, get_default_api
from .config import ClientConfig, Config
from .exceptions import APIError, AuthError, DecodeError, ProviderError, TransportError
from .models import APIResponse, Auth, BearerToken, ClientCredentials, Result

__all__ = [
    "TwitterAPI",
    "get_default_api",
    "ClientConfig",
    "Config",
    "APIError",
    "AuthError",
    "DecodeError",
    "ProviderError",
    "TransportError",
    "APIResponse",
    "Auth",
    "BearerToken",
    "ClientCredentials",
    "Result",
]
