import asyncio

import pytest

from storefront.catalog.listing_controller import ProductListingController
from storefront.catalog.query_cache import ClientQueryCache
from storefront.catalog.signature import ProductQuery
from storefront.integrations.clients.mocks.local_catalog import LocalCatalogClient


@pytest.mark.asyncio
async def test_local_client_returns_normalized_pages(catalog_service):
    client = LocalCatalogClient(catalog_service)

    page = await client.fetch_page(ProductQuery(category="Shirts", page=3, limit=20, sort="price-low"))

    assert client.calls == 1
    assert page.total == 45
    assert page.total_pages == 3
    assert page.page == 3
    assert [p.price for p in page.products] == [900.0, 910.0, 920.0, 930.0, 940.0]


@pytest.mark.asyncio
async def test_slow_local_fetch_is_superseded(catalog_service, clock):
    client = LocalCatalogClient(catalog_service, latency_seconds=0.05)
    cache = ClientQueryCache(clock=clock)
    controller = ProductListingController(client, cache)

    slow = controller.set_params(category="Shirts")
    await asyncio.sleep(0)
    state = await controller.load(category="Polo")

    assert slow.cancelled()
    assert state.total == 1
    assert cache.signatures() == [ProductQuery(category="Polo").signature()]
