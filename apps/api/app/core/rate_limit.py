"""Rate limiting configuration for the form builder API."""

import logging
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

logger = logging.getLogger(__name__)

# Use Redis for multi-worker support when configured.
# Falls back to in-memory if Redis is not available (dev/test mode)
IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)


def _storage_uri() -> str:
    if IS_TESTING or not settings.REDIS_URL:
        return "memory://"
    try:
        import redis

        # Test connection upfront
        r = redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        r.ping()
        return settings.REDIS_URL
    except Exception as e:
        logger.warning("Redis unavailable for rate limiting, using in-memory: %s", e)
        return "memory://"


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_storage_uri(),
    default_limits=DEFAULT_LIMITS,
    enabled=not IS_TESTING,
)
