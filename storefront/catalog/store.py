"""
In-memory catalogue store.

Stands in for the document database behind the Catalog Query Service. Holds
product documents as plain dicts (wire field names) and answers filtered,
sorted queries. Pagination is applied by the service, not here.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

SORT_KEYS = ("newest", "price-low", "price-high", "discount", "popular")
DEFAULT_SORT = "newest"

# Related products are priced within this fraction of the base product.
RELATED_PRICE_BAND = 0.2


@dataclass
class StoreQuery:
    category: Optional[str] = None
    search: Optional[str] = None
    gender: Optional[str] = None
    in_stock: bool = False
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    related_to: Optional[str] = None
    sort: str = DEFAULT_SORT


class InMemoryCatalogStore:
    def __init__(self, products: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._products: Dict[str, Dict[str, Any]] = {}
        for product in products or []:
            self.insert(product)

    @classmethod
    def from_json_file(cls, path: Path) -> "InMemoryCatalogStore":
        if not path.exists():
            raise FileNotFoundError(f"Catalogue seed file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        items = data.get("products", []) if isinstance(data, dict) else data
        store = cls(items)
        logger.info("Loaded %d products from %s", len(store), path)
        return store

    # --- Writes ---------------------------------------------------------------

    def insert(self, product: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(product)
        product_id = str(doc.get("_id") or doc.get("id") or uuid.uuid4().hex)
        doc["_id"] = product_id
        doc["id"] = product_id
        doc.setdefault("createdAt", datetime.now(timezone.utc).isoformat())
        self._products[product_id] = doc
        return dict(doc)

    # --- Reads ----------------------------------------------------------------

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        doc = self._products.get(product_id)
        return dict(doc) if doc is not None else None

    def find(self, query: StoreQuery) -> List[Dict[str, Any]]:
        docs = list(self._products.values())

        if query.related_to:
            docs = self._related(docs, query.related_to)
        elif query.category and query.category.lower() != "all":
            pattern = _category_pattern(query.category)
            docs = [d for d in docs if pattern.match(str(d.get("category", "")))]

        if query.gender and query.gender.lower() != "all":
            docs = [d for d in docs if d.get("gender") == query.gender]
        if query.in_stock:
            docs = [d for d in docs if d.get("inStock") is True]
        if query.min_price is not None:
            docs = [d for d in docs if _number(d.get("price")) >= query.min_price]
        if query.max_price is not None:
            docs = [d for d in docs if _number(d.get("price")) <= query.max_price]
        if query.search:
            docs = [d for d in docs if _matches_search(d, query.search)]

        docs.sort(key=_sort_key(query.sort), reverse=query.sort != "price-low")
        return [dict(d) for d in docs]

    def _related(self, docs: List[Dict[str, Any]], product_id: str) -> List[Dict[str, Any]]:
        base = self._products.get(product_id)
        if base is None:
            logger.warning("relatedTo product %s not found", product_id)
            return docs
        price = _number(base.get("price"))
        low, high = price * (1 - RELATED_PRICE_BAND), price * (1 + RELATED_PRICE_BAND)
        colors = set(base.get("colors") or [])

        related = []
        for d in docs:
            if d["_id"] == base["_id"] or d.get("category") != base.get("category"):
                continue
            if not low <= _number(d.get("price")) <= high:
                continue
            if colors and not colors.intersection(d.get("colors") or []):
                continue
            related.append(d)
        return related

    def __len__(self) -> int:
        return len(self._products)


def _category_pattern(category: str) -> "re.Pattern[str]":
    base = re.sub(r"s$", "", category, flags=re.IGNORECASE)
    return re.compile(rf"^{re.escape(base)}s?$", re.IGNORECASE)


def _matches_search(doc: Dict[str, Any], search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    if needle in str(doc.get("name", "")).lower():
        return True
    if needle in str(doc.get("category", "")).lower():
        return True
    return any(needle in str(color).lower() for color in doc.get("colors") or [])


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _sort_key(sort: str):
    # Every key sorts descending except price-low.
    if sort in ("price-low", "price-high"):
        return lambda d: _number(d.get("price"))
    if sort == "discount":
        return lambda d: _number(d.get("discount"))
    if sort == "popular":
        return lambda d: _number(d.get("soldCount")) + _number(d.get("viewCount"))
    return lambda d: str(d.get("createdAt") or "")
