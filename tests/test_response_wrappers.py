import pytest

from storefront.integrations.response_wrappers import (
    CatalogResponseError,
    error_message_from_body,
    normalize_catalog_response,
)


def test_normalizes_full_body():
    page = normalize_catalog_response(
        {
            "success": True,
            "data": [
                {"_id": "p1", "name": "Oxford Shirt", "price": 1899, "discount": 24, "inStock": True, "category": "Shirts"},
                {"id": "p2", "name": "Linen Shirt", "price": "2199", "inStock": False, "category": "Shirts"},
            ],
            "total": 45,
            "page": 1,
            "totalPages": 3,
        }
    )

    assert page.total == 45
    assert page.total_pages == 3
    assert [p.product_id for p in page.products] == ["p1", "p2"]
    assert page.products[1].price == 2199.0
    assert page.products[1].in_stock is False


def test_missing_data_is_an_empty_page():
    page = normalize_catalog_response({"success": True, "total": 0})

    assert page.products == ()
    assert page.total == 0
    assert page.total_pages == 0


def test_total_pages_computed_when_absent():
    page = normalize_catalog_response({"data": [], "total": 45}, limit=20)

    assert page.total_pages == 3


def test_non_object_body_is_rejected():
    with pytest.raises(CatalogResponseError):
        normalize_catalog_response(["not", "an", "object"])


def test_negative_total_is_rejected():
    with pytest.raises(CatalogResponseError):
        normalize_catalog_response({"data": [], "total": -1})


def test_error_message_from_body():
    assert error_message_from_body({"success": False, "error": "Database down"}) == "Database down"
    assert error_message_from_body({"detail": "Not Found"}) == "Not Found"
    assert error_message_from_body("plain text") is None
