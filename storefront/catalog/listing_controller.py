"""
Product listing controller.

Turns listing parameter changes into product pages for a view:
- serves fresh pages from the ClientQueryCache without touching the network
- otherwise starts one fetch task through a CatalogClient
- cancels the previous fetch whenever the parameters change again, and only
  commits a result whose generation still matches the current one
- converts every failure into `state.error`; nothing is raised to the caller

Usage:
    cache = ClientQueryCache()
    controller = ProductListingController(HttpCatalogClient(), cache)
    state = await controller.load(ProductQuery(category="Shirts"))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from storefront.catalog.query_cache import CacheEntry, ClientQueryCache
from storefront.catalog.signature import ProductQuery
from storefront.error_handler import ErrorHandler
from storefront.integrations.contracts.catalog import CatalogClient, Product

logger = logging.getLogger(__name__)


@dataclass
class ListingState:
    products: Tuple[Product, ...] = field(default_factory=tuple)
    total: int = 0
    total_pages: int = 0
    loading: bool = False
    error: Optional[str] = None
    # signature of the query the displayed products belong to
    signature: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.products


class ProductListingController:
    def __init__(
        self,
        client: CatalogClient,
        cache: ClientQueryCache,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.error_handler = error_handler or ErrorHandler()
        self.state = ListingState()
        self.query: Optional[ProductQuery] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._pending_signature: Optional[str] = None
        self._closed = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> Optional[asyncio.Task]:
        if self._task is not None and not self._task.done():
            return self._task
        return None

    # --- Parameter changes ----------------------------------------------------

    def set_params(self, query: Optional[ProductQuery] = None, **params) -> Optional[asyncio.Task]:
        """
        Apply new listing parameters.

        Returns the fetch task when a network request was started, or None when
        a fresh cache entry was adopted.
        """
        if self._closed:
            raise RuntimeError("ProductListingController is closed")
        if query is None:
            query = ProductQuery(**params)

        signature = query.signature()
        pending = self.in_flight
        if pending is not None and signature == self._pending_signature:
            logger.debug("Reusing in-flight catalogue fetch: %s", signature)
            return pending
        return self._start(query, signature)

    def _start(self, query: ProductQuery, signature: str) -> Optional[asyncio.Task]:
        self.query = query
        self._generation += 1
        generation = self._generation
        self._cancel_in_flight()

        entry = self.cache.get_fresh(signature)
        if entry is not None:
            self._apply_entry(entry, signature)
            return None

        self.state.loading = True
        self.state.error = None
        self._pending_signature = signature
        self._task = asyncio.get_running_loop().create_task(self._fetch(query, signature, generation))
        return self._task

    async def load(self, query: Optional[ProductQuery] = None, **params) -> ListingState:
        """Apply parameters and wait until this request settles."""
        task = self.set_params(query, **params)
        if task is not None:
            await asyncio.wait({task})
        return self.state

    def refresh(self) -> Optional[asyncio.Task]:
        """
        Re-trigger the current parameters (user-initiated retry).

        Unlike set_params, this restarts a fetch already running for the same
        parameters.
        """
        if self.query is None:
            return None
        if self._closed:
            raise RuntimeError("ProductListingController is closed")
        return self._start(self.query, self.query.signature())

    def close(self) -> None:
        """Tear down: abort the in-flight fetch and ignore anything it returns."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._cancel_in_flight()

    # --- Internals ------------------------------------------------------------

    def _cancel_in_flight(self) -> None:
        task = self.in_flight
        if task is not None:
            logger.debug("Cancelling superseded catalogue fetch: %s", task.get_name())
            task.cancel()
        self._task = None
        self._pending_signature = None

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _fetch(self, query: ProductQuery, signature: str, generation: int) -> None:
        try:
            page = await self.client.fetch_page(query)
        except asyncio.CancelledError:
            logger.debug("Catalogue fetch cancelled: %s", signature)
            raise
        except Exception as exc:
            if not self._is_current(generation):
                logger.debug("Ignoring failure of superseded fetch: %s", signature)
                return
            message = self.error_handler.describe(exc)
            logger.warning("Catalogue fetch failed for %s: %s", signature, message)
            self.state.error = message
            self.state.loading = False
            return

        if not self._is_current(generation):
            logger.debug("Discarding result of superseded fetch: %s", signature)
            return

        entry = CacheEntry.from_page(page, captured_at=self.cache.clock())
        self.cache.set(signature, entry)
        self._apply_entry(entry, signature)

    def _apply_entry(self, entry: CacheEntry, signature: str) -> None:
        self.state.products = entry.products
        self.state.total = entry.total
        self.state.total_pages = entry.total_pages
        self.state.loading = False
        self.state.error = None
        self.state.signature = signature
