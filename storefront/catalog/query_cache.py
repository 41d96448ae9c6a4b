"""
Client-side query cache for product listings.

Maps a query signature to the last page fetched for it. Entries are never
evicted; the owning application calls clear() on logout or navigation.
All access happens on one event loop, so there is no lock.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from storefront.integrations.contracts.catalog import CatalogPage, Product

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW_S = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    products: Tuple[Product, ...]
    total: int
    total_pages: int
    captured_at: float

    @classmethod
    def from_page(cls, page: CatalogPage, captured_at: float) -> "CacheEntry":
        return cls(
            products=tuple(page.products),
            total=page.total,
            total_pages=page.total_pages,
            captured_at=captured_at,
        )


class ClientQueryCache:
    def __init__(
        self,
        freshness_seconds: float = FRESHNESS_WINDOW_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.freshness_seconds = freshness_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, signature: str) -> Optional[CacheEntry]:
        """Return the entry for a signature; staleness is checked by the caller."""
        return self._entries.get(signature)

    def set(self, signature: str, entry: CacheEntry) -> None:
        self._entries[signature] = entry

    def is_fresh(self, entry: CacheEntry, now: Optional[float] = None) -> bool:
        if now is None:
            now = self.clock()
        return now - entry.captured_at < self.freshness_seconds

    def get_fresh(self, signature: str) -> Optional[CacheEntry]:
        entry = self.get(signature)
        if entry is None:
            logger.debug("Query cache MISS: %s", signature)
            return None
        if not self.is_fresh(entry):
            logger.debug("Query cache STALE: %s", signature)
            return None
        logger.debug("Query cache HIT: %s", signature)
        return entry

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cleared client query cache (%d entries)", count)

    def signatures(self) -> List[str]:
        return list(self._entries)

    def stats(self) -> dict:
        now = self.clock()
        fresh = sum(1 for entry in self._entries.values() if self.is_fresh(entry, now))
        return {
            "size": len(self._entries),
            "fresh": fresh,
            "stale": len(self._entries) - fresh,
            "freshness_seconds": self.freshness_seconds,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, signature: str) -> bool:
        return signature in self._entries
