"""
Twitter API Client
Authenticated request primitive for Twitter's REST API.

Relative paths resolve against the versioned API base, so
``api.get("/statuses/home_timeline.json", auth=token)`` hits
``https://api.twitter.com/1.1/statuses/home_timeline.json``. Pass a
``ClientCredentials`` (xAuth) or ``BearerToken`` (application-only) as
``auth`` to sign a request; omit it to send the request unauthenticated.
"""
import asyncio
from typing import Any, Dict, Optional

import aiohttp
import requests
from oauthlib.oauth2 import BackendApplicationClient
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from requests_oauthlib import OAuth2Session

from .auth import authorization_header, parse_oauth_fields, sign_xauth
from .config import ClientConfig
from .exceptions import AuthError, DecodeError, ProviderError, TransportError
from .logger import logger
from .models import APIResponse, BearerToken, ClientCredentials, Result
from .utils import decode_body, error_reason, parse_form, resolve_url

# requests options understood by OAuth2Session.fetch_token; anything else would end up in the body
TOKEN_EXCHANGE_OPTIONS = ("timeout", "proxies", "verify", "cert", "headers")


def _reject_error_response(response: requests.Response) -> requests.Response:
    """Turn a non-2xx token response into a ProviderError before oauthlib parses it."""
    if 200 <= response.status_code <= 299:
        return response
    try:
        body = decode_body(response.content, response.headers)
    except DecodeError:
        body = response.content
    raise ProviderError(error_reason(body), status_code=response.status_code, body=body)


class TwitterAPI:
    """Twitter REST API client. Holds configuration only, no session state."""

    def __init__(self, config: Optional[ClientConfig] = None):
        """
        Initialize the client.

        Args:
            config: Keys, endpoints and timeout (default: ClientConfig.from_env())
        """
        self.config = config or ClientConfig.from_env()

    # -- credential acquisition -------------------------------------------

    def get_user_token(self, username: str, password: str, **options) -> Result:
        """
        Request a user-context (xAuth) access token.

        Args:
            username: Twitter username
            password: Twitter password
            **options: Transport options (timeout, proxies, session, ...); extra
                ``headers`` are sent alongside the signed ones

        Returns:
            Result holding ClientCredentials with token and token_secret set
        """
        if not username or not password:
            return Result(error=AuthError("Username and password are required"))

        credentials = ClientCredentials(self.config.consumer_key, self.config.consumer_secret)
        url = self.config.access_token_url
        try:
            headers, body = sign_xauth(credentials, url, username, password)
        except AuthError as e:
            logger.error(f"Failed to sign xAuth request: {e}")
            return Result(error=e)

        # the signed form body and its headers are fixed
        for key in ("auth", "stream", "data"):
            options.pop(key, None)
        headers = {**dict(options.pop("headers", None) or {}), **headers}
        result = self.request("POST", url, body, headers, **options)
        if not result.ok:
            return result

        fields = result.value.body
        if not isinstance(fields, dict):
            try:
                fields = parse_form(fields or b"")
            except DecodeError as e:
                logger.error(f"Unreadable xAuth token response: {e}")
                return Result(error=e)
        oauth = parse_oauth_fields(fields)
        logger.info("Obtained xAuth access token")
        return Result(value=credentials.with_token(oauth.get("token"), oauth.get("token_secret")))

    def get_user_token_or_raise(self, username: str, password: str, **options) -> ClientCredentials:
        """Same as get_user_token() but raises the error instead of returning it."""
        return self.get_user_token(username, password, **options).unwrap()

    def get_app_token(self, **options) -> Result:
        """
        Request an application-only bearer token (OAuth2 client credentials).

        Args:
            **options: timeout, proxies, verify, cert, headers

        Returns:
            Result holding a BearerToken
        """
        client_id = self.config.client_id
        client_secret = self.config.client_secret
        if not client_id or not client_secret:
            return Result(error=AuthError("Missing client id or client secret"))

        kwargs = {key: value for key, value in options.items() if key in TOKEN_EXCHANGE_OPTIONS}
        kwargs.setdefault("timeout", self.config.timeout)

        try:
            with OAuth2Session(client=BackendApplicationClient(client_id=client_id)) as oauth:
                oauth.register_compliance_hook("access_token_response", _reject_error_response)
                token = oauth.fetch_token(
                    token_url=self.config.token_url,
                    client_id=client_id,
                    client_secret=client_secret,
                    **kwargs,
                )
        except ProviderError as e:
            logger.error(f"OAuth2 token exchange rejected: {e}")
            return Result(error=e)
        except OAuth2Error as e:
            logger.error(f"OAuth2 token exchange failed: {e.description or e.error}")
            return Result(error=AuthError(e.description or e.error))
        except requests.RequestException as e:
            logger.error(f"OAuth2 token exchange failed: {e}")
            return Result(error=TransportError(e))

        logger.info("Obtained application-only bearer token")
        return Result(value=BearerToken(token["access_token"]))

    def get_app_token_or_raise(self, **options) -> BearerToken:
        """Same as get_app_token() but raises the error instead of returning it."""
        return self.get_app_token(**options).unwrap()

    # -- request dispatch ---------------------------------------------------

    def _prepare(self, method: str, url: str, headers, auth):
        url = resolve_url(url, self.config.api_url, self.config.api_version)
        headers = dict(headers or {})
        if auth is not None:
            value = authorization_header(auth, method, url)
            rest = {key: val for key, val in headers.items() if key.lower() != "authorization"}
            headers = {"Authorization": value, **rest}
        return url, headers

    def request(self, method: str, url: str, body: Any = None,
                headers: Optional[Dict[str, str]] = None, auth=None, **options) -> Result:
        """
        Send a request to the Twitter API.

        Args:
            method: HTTP method
            url: Relative API path or absolute URL
            body: Request body (bytes, str or form dict)
            headers: Extra request headers
            auth: ClientCredentials or BearerToken, or None for no Authorization header
            **options: Passed to requests (timeout, params, stream, ...); a
                requests.Session may be given as ``session`` and ``data`` is
                accepted in place of ``body``

        Returns:
            Result holding an APIResponse. With ``stream=True`` the raw
            requests.Response is returned undecoded.
        """
        data = options.pop("data", None)
        if body is None:
            body = data
        try:
            url, headers = self._prepare(method, url, headers, auth)
        except AuthError as e:
            logger.error(f"Failed to authenticate {method.upper()} {url}: {e}")
            return Result(error=e)

        session = options.pop("session", None)
        send = session.request if session is not None else requests.request
        options.setdefault("timeout", self.config.timeout)

        logger.debug(f"{method.upper()} {url}")
        try:
            response = send(method, url, data=body, headers=headers, **options)
        except requests.RequestException as e:
            logger.error(f"{method.upper()} {url} failed: {e}")
            return Result(error=TransportError(e))

        if options.get("stream"):
            return Result(value=response)
        return self._normalize(response)

    def _normalize(self, response: requests.Response) -> Result:
        status_code = response.status_code
        success = 200 <= status_code <= 299
        try:
            body = decode_body(response.content, response.headers)
        except DecodeError as e:
            if success:
                return Result(error=e)
            body = response.content

        if success:
            return Result(value=APIResponse(status_code, response.headers, body, response.url))

        reason = error_reason(body)
        logger.warning(f"Twitter API returned {status_code} for {response.url}: {reason}")
        return Result(error=ProviderError(reason, status_code=status_code, body=body))

    def request_or_raise(self, method: str, url: str, body: Any = None,
                         headers: Optional[Dict[str, str]] = None, auth=None, **options) -> APIResponse:
        """Same as request() but raises the error instead of returning it."""
        return self.request(method, url, body, headers, auth, **options).unwrap()

    async def request_async(self, method: str, url: str, body: Any = None,
                            headers: Optional[Dict[str, str]] = None, auth=None, *,
                            session: aiohttp.ClientSession, **options) -> Result:
        """
        Send a request through a caller-owned aiohttp session.

        URL resolution and authentication work as in request(). The
        aiohttp.ClientResponse is returned as-is: its body is not read or
        decoded and its status is not checked.
        """
        data = options.pop("data", None)
        if body is None:
            body = data
        try:
            url, headers = self._prepare(method, url, headers, auth)
        except AuthError as e:
            logger.error(f"Failed to authenticate {method.upper()} {url}: {e}")
            return Result(error=e)

        logger.debug(f"{method.upper()} {url} (async)")
        try:
            response = await session.request(method, url, data=body, headers=headers, **options)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method.upper()} {url} failed: {e!r}")
            return Result(error=TransportError(e))
        return Result(value=response)

    # -- verbs ----------------------------------------------------------------

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("GET", url, None, headers, **options)

    def head(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("HEAD", url, None, headers, **options)

    def delete(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("DELETE", url, None, headers, **options)

    def options(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("OPTIONS", url, None, headers, **options)

    def post(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("POST", url, body, headers, **options)

    def put(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("PUT", url, body, headers, **options)

    def patch(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> Result:
        return self.request("PATCH", url, body, headers, **options)

    def get_or_raise(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> APIResponse:
        return self.get(url, headers, **options).unwrap()

    def head_or_raise(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> APIResponse:
        return self.head(url, headers, **options).unwrap()

    def delete_or_raise(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> APIResponse:
        return self.delete(url, headers, **options).unwrap()

    def options_or_raise(self, url: str, headers: Optional[Dict[str, str]] = None, **options) -> APIResponse:
        return self.options(url, headers, **options).unwrap()

    def post_or_raise(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None,
                      **options) -> APIResponse:
        return self.post(url, body, headers, **options).unwrap()

    def put_or_raise(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None,
                     **options) -> APIResponse:
        return self.put(url, body, headers, **options).unwrap()

    def patch_or_raise(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None,
                       **options) -> APIResponse:
        return self.patch(url, body, headers, **options).unwrap()


_default_api = None


def get_default_api() -> TwitterAPI:
    """Get the process-wide client configured from the environment."""
    global _default_api
    if _default_api is None:
        _default_api = TwitterAPI(ClientConfig.from_env())
    return _default_api
