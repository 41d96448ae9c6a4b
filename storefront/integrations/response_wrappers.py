from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from storefront.integrations.contracts.catalog import CatalogPage, products_from_payload


class CatalogError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class CatalogTransportError(CatalogError):
    """Network failure or non-2xx status from the Catalog Query Service."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, payload=payload)
        self.status_code = status_code


class CatalogResponseError(CatalogError):
    """Body could not be parsed into a catalogue page."""


class CatalogResponseModel(BaseModel):
    data: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    total_pages: Optional[int] = Field(default=None, ge=0)
    page: int = Field(default=1, ge=1)


def normalize_catalog_response(raw: Any, *, page: int = 1, limit: int = 20) -> CatalogPage:
    """
    Turn a /api/products JSON body into a CatalogPage.

    A body without a usable `data` list is an empty page, not a failure.
    """
    if not isinstance(raw, dict):
        raise CatalogResponseError(f"Expected a JSON object, got {type(raw).__name__}.")

    items = raw.get("data")
    if not isinstance(items, list):
        items = []

    model = _build_model(
        CatalogResponseModel,
        {
            "data": [item for item in items if isinstance(item, dict)],
            "total": _coerce_count(raw.get("total"), "total"),
            "total_pages": _coerce_optional_count(_first_present(raw, "totalPages", "total_pages"), "totalPages"),
            "page": _coerce_count(raw.get("page"), "page") or page,
        },
        raw,
    )

    total_pages = model.total_pages
    if total_pages is None:
        total_pages = math.ceil(model.total / limit) if limit else 0

    try:
        products = products_from_payload(model.data)
    except ValidationError as exc:
        raise CatalogResponseError(f"Product validation failed: {exc}", payload=raw) from exc

    return CatalogPage(products=products, total=model.total, total_pages=total_pages, page=model.page)


def error_message_from_body(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    for key in ("error", "message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _first_present(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _coerce_count(value: Any, label: str) -> int:
    if value is None or value == "":
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogResponseError(f"Invalid {label}: {value!r}") from exc
    if count < 0:
        raise CatalogResponseError(f"{label} must be >= 0; got {count}.")
    return count


def _coerce_optional_count(value: Any, label: str) -> Optional[int]:
    if value is None:
        return None
    return _coerce_count(value, label)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise CatalogResponseError(f"Response validation failed: {exc}", payload=raw) from exc
