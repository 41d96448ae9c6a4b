"""Storefront product catalogue: query service, client cache and listing controller."""

__version__ = "1.0.0"
