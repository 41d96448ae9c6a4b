from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

"""
Product catalogue contracts.

Defines the structure of catalogue data exchanged with the Catalog Query
Service, e.g.:
- product_id, name, price, discount, images, stock flag, category
- a page of products with total count and total pages

These contracts must be used by both:
- clients/mocks/local_catalog.py (in-process catalogue for development/tests)
- clients/real_http/catalog.py (HTTP calls to /api/products)

Why:
- Keeps the listing controller independent of the wire format
- Lets the cache hold immutable copies instead of raw dicts
"""


# ---------------------------------------------------------------------------
# Product model
# ---------------------------------------------------------------------------

class Product(BaseModel):
    """A catalogue product as returned by /api/products."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    product_id: str = Field(alias="_id")
    name: str
    price: float = 0.0
    mrp: float = 0.0
    discount: float = 0.0
    images: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    sizes: Tuple[str, ...] = ()
    category: str = ""
    gender: Optional[str] = None
    in_stock: bool = Field(default=True, alias="inStock")
    stock_quantity: int = Field(default=0, alias="stockQuantity")
    rating: Optional[float] = None
    reviews: Optional[int] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


# ---------------------------------------------------------------------------
# Page / request models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogPage:
    """One page of catalogue results."""
    products: Tuple[Product, ...]
    total: int
    total_pages: int
    page: int = 1


# ---------------------------------------------------------------------------
# Abstract client interface
# ---------------------------------------------------------------------------

class CatalogClient(ABC):
    """Every catalogue client (mock or real) must implement this interface."""

    @abstractmethod
    async def fetch_page(self, query) -> CatalogPage:
        """Fetch one page of products for a ProductQuery."""

    async def aclose(self) -> None:
        """Release any transport resources held by the client."""


def products_from_payload(items: List[Dict[str, Any]]) -> Tuple[Product, ...]:
    """Build immutable products from raw wire dicts, accepting `id` when `_id` is absent."""
    products = []
    for item in items:
        product_id = item.get("_id", item.get("id"))
        if product_id is not None:
            item = {**item, "_id": str(product_id)}
        products.append(Product.model_validate(item))
    return tuple(products)
