"""
Catalogue HTTP Client.

Purpose:
- Fetches product pages from the Catalog Query Service (GET /api/products)
- Normalizes responses into the CatalogPage contract

Implementation notes:
- Uses httpx for async requests; cancelling the calling task aborts the request
- Any non-2xx status is a CatalogTransportError regardless of body shape
- A body without `data` is an empty page
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from storefront.catalog.signature import ProductQuery
from storefront.integrations.contracts.catalog import CatalogClient, CatalogPage
from storefront.integrations.response_wrappers import (
    CatalogResponseError,
    CatalogTransportError,
    error_message_from_body,
    normalize_catalog_response,
)
from storefront.utils.config_loader import ClientConfig

logger = logging.getLogger(__name__)


class HttpCatalogClient(CatalogClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        products_path: str = "/api/products",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("CATALOG_API_URL", "http://localhost:8000")).rstrip("/")
        self.products_path = products_path
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpCatalogClient":
        """Build a client from config; an explicit base_url or CATALOG_API_URL wins over config."""
        return cls(
            base_url=base_url or os.getenv("CATALOG_API_URL") or config.base_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    async def fetch_page(self, query: ProductQuery) -> CatalogPage:
        params: Dict[str, Any] = query.to_params()
        logger.debug("GET %s%s params=%s", self.base_url, self.products_path, params)

        try:
            response = await self._client.get(self.products_path, params=params)
        except httpx.RequestError as e:
            logger.error("Request error connecting to catalogue API: %s", e)
            raise CatalogTransportError(f"Network error: {e}") from e

        if not response.is_success:
            body = _safe_json(response)
            message = error_message_from_body(body) or ""
            logger.error("HTTP error from catalogue API: %s %s", response.status_code, message)
            raise CatalogTransportError(message, status_code=response.status_code, payload=body if isinstance(body, dict) else None)

        try:
            data = response.json() if response.content else {}
        except ValueError as e:
            raise CatalogResponseError(f"Response is not valid JSON: {e}") from e

        return normalize_catalog_response(data, page=query.page, limit=query.limit)

    async def aclose(self) -> None:
        await self._client.aclose()


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
