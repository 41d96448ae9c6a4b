#!/usr/bin/env python3
"""
Drive the product listing controller from the terminal:
- load a page for the given filters (twice, to show the cache hit)
- print products, totals and any error state

Uses the in-process catalogue by default; pass --http to hit the API at
client.base_url (or CATALOG_API_URL), or --base-url to pick another one.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from storefront.catalog import ClientQueryCache, ProductListingController, ProductQuery
from storefront.catalog.service import CatalogQueryService
from storefront.catalog.store import InMemoryCatalogStore
from storefront.database.redis import RedisCache
from storefront.integrations.clients.mocks.local_catalog import LocalCatalogClient
from storefront.integrations.clients.real_http.catalog import HttpCatalogClient
from storefront.utils.config_loader import load_storefront_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_state(state) -> None:
    if state.error:
        print(f"Error: {state.error}")
        return
    if state.is_empty:
        print("No products found.")
        return
    print(f"{state.total} products, {state.total_pages} page(s):")
    for product in state.products:
        stock = "" if product.in_stock else " (out of stock)"
        print(f"  - {product.name} [{product.category}] {product.price:.2f}{stock}")


async def run(args) -> int:
    cfg = load_storefront_config()
    if args.http or args.base_url:
        client = HttpCatalogClient.from_config(cfg.client, base_url=args.base_url)
    else:
        store = InMemoryCatalogStore.from_json_file(cfg.catalog.resolved_seed_path())
        client = LocalCatalogClient(CatalogQueryService(store, response_cache=RedisCache()))

    cache = ClientQueryCache(freshness_seconds=cfg.cache.freshness_seconds)
    controller = ProductListingController(client, cache)
    query = ProductQuery(
        category=args.category,
        search=args.search,
        page=args.page,
        limit=args.limit or cfg.catalog.default_limit,
        sort=args.sort,
    )

    try:
        print_state(await controller.load(query))
        # Same parameters again: served from the client cache.
        task = controller.set_params(query)
        print(f"Repeat request served from cache: {task is None}")
    finally:
        controller.close()
        cache.clear()
        await client.aclose()
    return 1 if controller.state.error else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Load a product listing page")
    parser.add_argument("--category", help="Category filter, e.g. Shirts")
    parser.add_argument("--search", help="Search text")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--sort", help="newest, price-low, price-high, discount, popular")
    parser.add_argument("--base-url", help="Catalogue API base URL (default: in-process catalogue)")
    parser.add_argument("--http", action="store_true", help="Use the catalogue API at the configured base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
