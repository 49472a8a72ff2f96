"""Read-through Redis cache for the country listing.

Entries expire after ``COUNTRY_CACHE_TTL_SECONDS``; writes do not evict them,
so a new or edited country can take up to one TTL to show up.
"""
from __future__ import annotations

import json
from typing import Any, Optional

import redis

from catalog.core.logging import get_logger

logger = get_logger(__name__)

COUNTRY_CACHE_KEY = "geo:countries:{params}"


class CountryListCache:
    def __init__(self, client: Optional[redis.Redis], ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self.client is not None and self.ttl_seconds > 0

    @staticmethod
    def key_for(params: dict[str, Any]) -> str:
        normalized = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
        return COUNTRY_CACHE_KEY.format(params=normalized)

    def get(self, params: dict[str, Any]) -> Optional[dict[str, Any]]:
        if not self.enabled:
            return None
        key = self.key_for(params)
        try:
            cached = self.client.get(key)
        except redis.RedisError as exc:
            logger.warning("country cache read failed", key=key, error=str(exc))
            return None
        if not cached:
            return None
        logger.debug("country cache hit", key=key)
        return json.loads(cached)

    def set(self, params: dict[str, Any], payload: dict[str, Any]) -> None:
        if not self.enabled:
            return
        key = self.key_for(params)
        try:
            self.client.setex(key, self.ttl_seconds, json.dumps(payload))
        except redis.RedisError as exc:
            logger.warning("country cache write failed", key=key, error=str(exc))
