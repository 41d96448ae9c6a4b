import pytest

from conftest import make_product
from storefront.catalog.service import CatalogQueryParams, CatalogQueryService
from storefront.catalog.store import InMemoryCatalogStore, StoreQuery
from storefront.database.redis import RedisCache
from storefront.utils.config_loader import load_storefront_config


@pytest.fixture
def store():
    return InMemoryCatalogStore(
        [
            make_product("oxford", name="Oxford Shirt", category="Shirts", price=1900, colors=["White", "Blue"], discount=24,
                         soldCount=300, viewCount=2000, createdAt="2025-01-12T00:00:00"),
            make_product("linen", name="Linen Shirt", category="shirt", price=2100, colors=["Sand"], discount=21,
                         soldCount=100, viewCount=500, createdAt="2025-03-02T00:00:00"),
            make_product("denim", name="Denim Shirt", category="Shirts", price=2500, colors=["Blue"], inStock=False,
                         discount=17, createdAt="2024-11-20T00:00:00"),
            make_product("polo", name="Pique Polo", category="Polo", price=1300, colors=["Navy"], gender="Men",
                         createdAt="2025-01-28T00:00:00"),
            make_product("tee", name="Graphic Tee", category="T-Shirts", price=900, colors=["Orange"], gender="Women",
                         discount=30, createdAt="2025-03-15T00:00:00"),
        ]
    )


def _ids(docs):
    return [d["_id"] for d in docs]


def test_category_match_is_case_insensitive_and_plural_tolerant(store):
    assert set(_ids(store.find(StoreQuery(category="Shirts")))) == {"oxford", "linen", "denim"}
    assert set(_ids(store.find(StoreQuery(category="SHIRT")))) == {"oxford", "linen", "denim"}
    assert len(store.find(StoreQuery(category="all"))) == 5
    assert store.find(StoreQuery(category="Jackets")) == []


def test_search_matches_name_category_and_colors(store):
    assert set(_ids(store.find(StoreQuery(search="linen")))) == {"linen"}
    assert set(_ids(store.find(StoreQuery(search="blue")))) == {"oxford", "denim"}
    assert set(_ids(store.find(StoreQuery(search="t-shirt")))) == {"tee"}


def test_stock_gender_and_price_filters(store):
    assert "denim" not in _ids(store.find(StoreQuery(category="Shirts", in_stock=True)))
    assert _ids(store.find(StoreQuery(gender="Women"))) == ["tee"]
    assert set(_ids(store.find(StoreQuery(min_price=1500, max_price=2200)))) == {"oxford", "linen"}


def test_sort_orders(store):
    assert _ids(store.find(StoreQuery(sort="price-low")))[:2] == ["tee", "polo"]
    assert _ids(store.find(StoreQuery(sort="price-high")))[0] == "denim"
    assert _ids(store.find(StoreQuery(sort="discount")))[0] == "tee"
    assert _ids(store.find(StoreQuery(sort="popular")))[0] == "oxford"
    assert _ids(store.find(StoreQuery(sort="newest")))[0] == "tee"


def test_related_products_share_category_price_band_and_color(store):
    store.insert(make_product("oxford-blue", name="Oxford Blue", category="Shirts", price=2000, colors=["Blue"]))
    store.insert(make_product("pricey", name="Pricey Shirt", category="Shirts", price=5000, colors=["Blue"]))

    related = _ids(store.find(StoreQuery(related_to="oxford")))

    assert set(related) == {"oxford-blue"}


def test_insert_assigns_ids_and_get_returns_copy(store):
    doc = store.insert({"name": "New Arrival", "category": "Shirts", "price": 999})

    fetched = store.get(doc["_id"])
    fetched["name"] = "changed"

    assert doc["id"] == doc["_id"]
    assert doc["createdAt"].endswith("+00:00")
    assert store.get(doc["_id"])["name"] == "New Arrival"
    assert store.get("missing") is None


def test_service_paginates_and_computes_total_pages(shirts_store):
    service = CatalogQueryService(shirts_store)

    body = service.query(CatalogQueryParams(category="Shirts", page=3, limit=20))

    assert body["success"] is True
    assert body["total"] == 45
    assert body["totalPages"] == 3
    assert body["page"] == 3
    assert len(body["data"]) == 5
    assert body["products"] == body["data"]


def test_service_serves_repeat_queries_from_response_cache(shirts_store):
    cache = RedisCache()
    service = CatalogQueryService(shirts_store, response_cache=cache)
    params = CatalogQueryParams(category="Polo")

    first = service.query(params)
    shirts_store.insert(make_product("polo-2", category="Polo"))
    second = service.query(CatalogQueryParams(category="Polo"))

    assert first == second
    assert second["total"] == 1
    assert cache.stats()["keys"] == ["products:category=Polo&limit=20&page=1&sort=newest"]


def test_service_survives_response_cache_failures(shirts_store):
    class BrokenCache:
        def get(self, key):
            raise ConnectionError("redis down")

        def set(self, key, value, ttl=300):
            raise ConnectionError("redis down")

    service = CatalogQueryService(shirts_store, response_cache=BrokenCache())

    assert service.query(CatalogQueryParams(category="Shirts"))["total"] == 45


def test_invalid_pagination_is_rejected():
    with pytest.raises(ValueError):
        CatalogQueryParams(page=0)
    with pytest.raises(ValueError):
        CatalogQueryParams(limit=0)


def test_seed_file_loads():
    cfg = load_storefront_config()
    store = InMemoryCatalogStore.from_json_file(cfg.catalog.resolved_seed_path())

    assert len(store) > 0
    assert store.find(StoreQuery(category="Jackets")) == []
