"""
Catalogue core.

- signature: ProductQuery and canonical query signatures
- query_cache: client-side cache of product pages with a freshness window
- listing_controller: cache-first, cancellation-aware page loading for views
- store / service: the Catalog Query Service behind /api/products
"""

from .signature import ProductQuery, build_query_signature
from .query_cache import CacheEntry, ClientQueryCache
from .listing_controller import ListingState, ProductListingController

__all__ = [
    "ProductQuery",
    "build_query_signature",
    "CacheEntry",
    "ClientQueryCache",
    "ListingState",
    "ProductListingController",
]
