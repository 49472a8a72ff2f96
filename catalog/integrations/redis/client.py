"""Redis connection used by the read-through caches."""
from __future__ import annotations

from typing import Optional

import redis

from catalog.core.config import settings
from catalog.core.logging import get_logger

logger = get_logger(__name__)

_client: Optional[redis.Redis] = None


def init_redis(url: Optional[str] = None) -> Optional[redis.Redis]:
    """Create the shared client; caching stays off when no URL is configured."""
    global _client
    url = url or settings.REDIS_URL
    if not url:
        logger.info("redis disabled, REDIS_URL not set")
        return None
    _client = redis.from_url(url, encoding="utf-8", decode_responses=True)
    logger.info("redis client created")
    return _client


def close_redis() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get_redis() -> Optional[redis.Redis]:
    """FastAPI dependency; ``None`` when Redis is not configured."""
    return _client
