"""
Catalog Query Service.

Translates /api/products query parameters into a store query, paginates the
result and caches whole response bodies in the response cache (memory or
Redis). Cache failures are logged and never fail a request.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from storefront.catalog.signature import DEFAULT_LIMIT, DEFAULT_PAGE, response_cache_key
from storefront.catalog.store import DEFAULT_SORT, SORT_KEYS, InMemoryCatalogStore, StoreQuery

logger = logging.getLogger(__name__)

RESPONSE_TTL_S = 5 * 60


@dataclass
class CatalogQueryParams:
    category: Optional[str] = None
    search: Optional[str] = None
    gender: Optional[str] = None
    in_stock: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    related_to: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: Optional[str] = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1; got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1; got {self.limit}")

    def cache_params(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "search": self.search,
            "gender": self.gender,
            "inStock": self.in_stock,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "relatedTo": self.related_to,
            "page": self.page,
            "limit": self.limit,
            "sort": self.resolved_sort,
        }

    @property
    def resolved_sort(self) -> str:
        return self.sort if self.sort in SORT_KEYS else DEFAULT_SORT

    def to_store_query(self) -> StoreQuery:
        return StoreQuery(
            category=self.category,
            search=self.search,
            gender=self.gender,
            in_stock=(self.in_stock or "").lower() == "true",
            min_price=self.min_price,
            max_price=self.max_price,
            related_to=self.related_to,
            sort=self.resolved_sort,
        )


class CatalogQueryService:
    def __init__(self, store: InMemoryCatalogStore, response_cache=None, ttl_seconds: int = RESPONSE_TTL_S) -> None:
        self.store = store
        self.response_cache = response_cache
        self.ttl_seconds = ttl_seconds

    def query(self, params: CatalogQueryParams) -> Dict[str, Any]:
        cache_key = response_cache_key(params.cache_params())

        cached = self._cache_get(cache_key)
        if cached is not None:
            logger.info("[Products API] Serving from cache: %s", cache_key)
            return cached

        logger.info("[Products API] Cache miss, querying store")
        docs = self.store.find(params.to_store_query())

        total = len(docs)
        skip = (params.page - 1) * params.limit
        page_docs = docs[skip:skip + params.limit]
        logger.info("[Products API] Returning %d products (total: %d)", len(page_docs), total)

        body = {
            "success": True,
            "data": page_docs,
            "products": page_docs,
            "total": total,
            "page": params.page,
            "totalPages": math.ceil(total / params.limit),
        }
        self._cache_set(cache_key, body)
        return body

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self.store.get(product_id)

    def _cache_get(self, key: str) -> Optional[Dict[str, Any]]:
        if self.response_cache is None:
            return None
        try:
            return self.response_cache.get(key)
        except Exception as e:
            logger.error("[Products API] Cache read error: %s", e)
            return None

    def _cache_set(self, key: str, body: Dict[str, Any]) -> None:
        if self.response_cache is None:
            return
        try:
            self.response_cache.set(key, body, ttl=self.ttl_seconds)
        except Exception as e:
            logger.error("[Products API] Cache write error: %s", e)
