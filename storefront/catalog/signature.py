"""
Query signatures for catalogue listings.

A ProductQuery is the set of filter/sort/pagination parameters a listing view
asks for. Its signature is the cache key: absent fields are dropped and the
remaining ones are written in a fixed order, so two equal queries always map
to the same key no matter how they were built.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Order in which fields appear in a signature.
SIGNATURE_FIELDS = ("category", "search", "page", "limit", "sort")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


class ProductQuery(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    category: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    sort: Optional[str] = None

    @field_validator("category", "search", "sort", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ProductQuery":
        """Build a query from a raw mapping, ignoring unknown and empty values."""
        known = {k: v for k, v in params.items() if k in SIGNATURE_FIELDS and v not in (None, "")}
        return cls(**known)

    def to_params(self) -> Dict[str, Any]:
        """Request parameters in signature order, absent fields omitted."""
        params: Dict[str, Any] = {}
        for name in SIGNATURE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                params[name] = value
        return params

    def signature(self) -> str:
        return urlencode([(k, str(v)) for k, v in self.to_params().items()])


def build_query_signature(params: Mapping[str, Any]) -> str:
    return ProductQuery.from_params(params).signature()


def response_cache_key(params: Mapping[str, Any]) -> str:
    """Server-side cache key: non-null params sorted by name under a `products:` prefix."""
    pairs = sorted((k, v) for k, v in params.items() if v is not None)
    query = "&".join(f"{k}={v}" for k, v in pairs)
    return f"products:{query or 'all'}"
