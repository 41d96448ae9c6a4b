"""
Real Redis-backed response cache for production when REDIS_URL is set.
Implements the same interface as storefront.database.redis (in-memory stub).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """
    Redis-backed response cache. Use when REDIS_URL is set in production.
    """

    def __init__(self, url: str, default_ttl: int = 300) -> None:
        self._client = redis.from_url(url, decode_responses=True)
        self._default_ttl = default_ttl

    def get(self, key: str) -> Optional[Any]:
        raw = self._client.get(key)
        if not raw:
            logger.debug("[Redis Cache] MISS: %s", key)
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            return None
        logger.debug("[Redis Cache] HIT: %s", key)
        return value

    def set(self, key: str, value: Any, ttl: int = 300) -> None:
        payload = json.dumps(value, default=str)
        self._client.setex(key, ttl or self._default_ttl, payload)
        logger.debug("[Redis Cache] SET: %s (TTL: %ss)", key, ttl)

    def clear(self) -> None:
        self._client.flushdb()

    def stats(self) -> Dict[str, Any]:
        return {
            "type": "redis",
            "size": self._client.dbsize(),
            "connected": self.ping(),
        }

    def ping(self) -> bool:
        try:
            return self._client.ping()
        except redis.RedisError:
            return False
