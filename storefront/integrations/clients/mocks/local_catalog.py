"""
Local Catalogue Client (in-process).

Purpose:
- Acts as a development-time catalogue source without running the HTTP API.
- Calls CatalogQueryService directly and normalizes its response the same
  way the HTTP client does.

Swap:
Replace with clients/real_http/catalog.py when the API is deployed.
"""

from __future__ import annotations

import asyncio

from storefront.catalog.service import CatalogQueryParams, CatalogQueryService
from storefront.catalog.signature import ProductQuery
from storefront.integrations.contracts.catalog import CatalogClient, CatalogPage
from storefront.integrations.response_wrappers import normalize_catalog_response


class LocalCatalogClient(CatalogClient):
    def __init__(self, service: CatalogQueryService, latency_seconds: float = 0.0) -> None:
        self.service = service
        self.latency_seconds = latency_seconds
        self.calls = 0

    async def fetch_page(self, query: ProductQuery) -> CatalogPage:
        self.calls += 1
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)
        body = self.service.query(
            CatalogQueryParams(
                category=query.category,
                search=query.search,
                page=query.page,
                limit=query.limit,
                sort=query.sort,
            )
        )
        return normalize_catalog_response(body, page=query.page, limit=query.limit)
