"""Pytest fixtures for catalogue, cache and listing controller tests."""

import asyncio
from typing import Dict, List

import pytest

from storefront.catalog.service import CatalogQueryService
from storefront.catalog.store import InMemoryCatalogStore
from storefront.database.redis import RedisCache
from storefront.integrations.contracts.catalog import CatalogClient, CatalogPage, products_from_payload


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ControlledCatalogClient(CatalogClient):
    """Catalogue client whose responses are released by the test."""

    def __init__(self):
        self.calls: List[str] = []
        self.cancelled: List[str] = []
        self.pending: Dict[str, asyncio.Future] = {}

    async def fetch_page(self, query):
        signature = query.signature()
        self.calls.append(signature)
        fut = asyncio.get_running_loop().create_future()
        self.pending[signature] = fut
        try:
            return await fut
        except asyncio.CancelledError:
            self.cancelled.append(signature)
            raise

    def resolve(self, query, page: CatalogPage) -> None:
        self.pending[query.signature()].set_result(page)

    def fail(self, query, exc: Exception) -> None:
        self.pending[query.signature()].set_exception(exc)


class StubbornCatalogClient(ControlledCatalogClient):
    """Ignores cancellation and still returns whatever the 'network' answers."""

    async def fetch_page(self, query):
        signature = query.signature()
        self.calls.append(signature)
        fut = asyncio.get_running_loop().create_future()
        self.pending[signature] = fut
        try:
            return await asyncio.shield(fut)
        except asyncio.CancelledError:
            self.cancelled.append(signature)
            return await fut


def make_product(product_id: str, **overrides) -> dict:
    doc = {
        "_id": product_id,
        "name": f"Product {product_id}",
        "price": 1000,
        "mrp": 1200,
        "discount": 17,
        "images": [f"https://img.example/{product_id}.jpg"],
        "colors": ["Black"],
        "sizes": ["M"],
        "category": "Shirts",
        "gender": "Men",
        "inStock": True,
        "stockQuantity": 5,
        "createdAt": "2025-01-01T00:00:00",
    }
    doc.update(overrides)
    return doc


def make_page(*names: str, total: int = None, total_pages: int = 1) -> CatalogPage:
    products = products_from_payload([make_product(name, name=name) for name in names])
    return CatalogPage(
        products=products,
        total=len(products) if total is None else total,
        total_pages=total_pages,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def shirts_store():
    """45 shirts and a handful of other categories, no jackets."""
    products = [
        make_product(f"shirt-{i:02d}", price=500 + i * 10, createdAt=f"2025-01-{(i % 28) + 1:02d}T00:00:00")
        for i in range(45)
    ]
    products += [
        make_product("polo-1", category="Polo", colors=["Navy"]),
        make_product("tee-1", category="T-Shirts", gender="Women"),
    ]
    return InMemoryCatalogStore(products)


@pytest.fixture
def catalog_service(shirts_store):
    return CatalogQueryService(shirts_store, response_cache=RedisCache())
