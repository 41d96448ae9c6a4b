import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from storefront.api.dependencies import get_catalog_service, rate_limit
from storefront.catalog.service import CatalogQueryParams, CatalogQueryService
from storefront.catalog.signature import DEFAULT_LIMIT, DEFAULT_PAGE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


@router.get("/products", dependencies=[Depends(rate_limit)])
def list_products(
    response: Response,
    category: Optional[str] = None,
    search: Optional[str] = None,
    gender: Optional[str] = None,
    in_stock: Optional[str] = Query(default=None, alias="inStock"),
    min_price: Optional[float] = Query(default=None, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, alias="maxPrice"),
    related_to: Optional[str] = Query(default=None, alias="relatedTo"),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1),
    sort: Optional[str] = None,
    service: CatalogQueryService = Depends(get_catalog_service),
):
    try:
        params = CatalogQueryParams(
            category=category,
            search=search,
            gender=gender,
            in_stock=in_stock,
            min_price=min_price,
            max_price=max_price,
            related_to=related_to,
            page=page,
            limit=limit,
            sort=sort,
        )
        body = service.query(params)
    except Exception as e:
        logger.error("[Products API] Error: %s", e, exc_info=True)
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return {"success": False, "error": str(e) or "Unknown error"}

    response.headers["Cache-Control"] = CACHE_CONTROL
    return body


@router.get("/products/{product_id}")
def get_product(
    product_id: str,
    response: Response,
    service: CatalogQueryService = Depends(get_catalog_service),
):
    product = service.get_product(product_id)
    if product is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return {"success": False, "error": "Product not found"}
    return {"success": True, "data": product}
