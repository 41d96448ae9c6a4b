"""
Lightweight in-memory replacement for the Redis response cache.

Used by the Catalog Query Service when REDIS_URL is not set, so the API can
run locally without a Redis instance. Implements the same interface as
storefront.database.redis_real.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class RedisCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        # key -> (expires_at, value)
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        item = self._entries.get(key)
        if item is None:
            logger.debug("[Memory Cache] MISS: %s", key)
            return None
        expires_at, value = item
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            logger.debug("[Memory Cache] EXPIRED: %s", key)
            return None
        logger.debug("[Memory Cache] HIT: %s", key)
        return value

    def set(self, key: str, value: Any, ttl: int = 300) -> None:
        self._entries[key] = (self._clock() + ttl, value)
        logger.debug("[Memory Cache] SET: %s (TTL: %ss)", key, ttl)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "type": "memory",
            "size": len(self._entries),
            "keys": list(self._entries),
            "connected": self.ping(),
        }

    def ping(self) -> bool:
        """Health checks call this; always True in local/dev mode."""
        return True
