from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    TWITTER_CONSUMER_KEY = os.getenv('TWITTER_CONSUMER_KEY')
    TWITTER_CONSUMER_SECRET = os.getenv('TWITTER_CONSUMER_SECRET')
    TWITTER_CLIENT_ID = os.getenv('TWITTER_CLIENT_ID')
    TWITTER_CLIENT_SECRET = os.getenv('TWITTER_CLIENT_SECRET')

    TWITTER_API_URL = os.getenv('TWITTER_API_URL', 'https://api.twitter.com').rstrip('/')
    TWITTER_API_VERSION = os.getenv('TWITTER_API_VERSION', '1.1')
    TWITTER_TIMEOUT = float(os.getenv('TWITTER_TIMEOUT', '20'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a single TwitterAPI instance.

    The consumer pair signs user-context (xAuth) requests, the client pair
    authenticates the application-only token exchange.
    """

    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_url: str = 'https://api.twitter.com'
    api_version: str = '1.1'
    timeout: Optional[float] = 20.0

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from the process environment (and .env file)."""
        return cls(
            consumer_key=Config.TWITTER_CONSUMER_KEY,
            consumer_secret=Config.TWITTER_CONSUMER_SECRET,
            # Twitter issues one key pair per app; reuse it for OAuth2 unless overridden
            client_id=Config.TWITTER_CLIENT_ID or Config.TWITTER_CONSUMER_KEY,
            client_secret=Config.TWITTER_CLIENT_SECRET or Config.TWITTER_CONSUMER_SECRET,
            api_url=Config.TWITTER_API_URL,
            api_version=Config.TWITTER_API_VERSION,
            timeout=Config.TWITTER_TIMEOUT,
        )

    @property
    def access_token_url(self) -> str:
        return f"{self.api_url}/oauth/access_token"

    @property
    def token_url(self) -> str:
        return f"{self.api_url}/oauth2/token"
