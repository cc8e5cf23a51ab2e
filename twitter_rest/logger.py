import logging
from .config import Config

logger = logging.getLogger('twitter_rest')
logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
