"""
Integrations layer.
This package contains all code used to talk to the Catalog Query Service:
- contracts: Product / CatalogPage models and the CatalogClient interface
- response_wrappers: normalization of /api/products bodies and catalogue errors
- clients: the in-process mock client and the real httpx client

Key rule:
- The listing controller MUST NOT call HTTP directly; it goes through a CatalogClient.
"""

from .contracts.catalog import CatalogClient, CatalogPage, Product
from .response_wrappers import (
    CatalogError,
    CatalogResponseError,
    CatalogTransportError,
    normalize_catalog_response,
)

__all__ = [
    "CatalogClient", "CatalogPage", "Product",
    "CatalogError", "CatalogResponseError", "CatalogTransportError",
    "normalize_catalog_response",
]
