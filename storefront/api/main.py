"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.cache_router import router as cache_router
from storefront.api.dependencies import RateLimitExceeded, rate_limit_headers
from storefront.api.products_router import router as products_router
from storefront.catalog.service import CatalogQueryService
from storefront.catalog.store import InMemoryCatalogStore
from storefront.utils.config_loader import StorefrontConfig, load_storefront_config
from storefront.utils.rate_limiter import RateLimiter

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _select_response_cache(config: StorefrontConfig):
    # Use real Redis when REDIS_URL is set, else the in-memory stub
    if os.getenv("REDIS_URL"):
        from storefront.database.redis_real import RedisCache

        logger.info("Using Redis response cache")
        return RedisCache(url=os.environ["REDIS_URL"], default_ttl=config.cache.response_ttl_seconds)

    from storefront.database.redis import RedisCache

    logger.info("REDIS_URL not set, using in-memory response cache")
    return RedisCache()


def create_app(
    config: Optional[StorefrontConfig] = None,
    store: Optional[InMemoryCatalogStore] = None,
    response_cache=None,
) -> FastAPI:
    config = config or load_storefront_config()
    if store is None:
        store = InMemoryCatalogStore.from_json_file(config.catalog.resolved_seed_path())
    if response_cache is None:
        response_cache = _select_response_cache(config)

    app = FastAPI(
        title="Storefront Catalogue API",
        description="Product catalogue query service with response caching",
        version="1.0.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.response_cache = response_cache
    app.state.catalog_service = CatalogQueryService(
        store,
        response_cache=response_cache,
        ttl_seconds=config.cache.response_ttl_seconds,
    )
    app.state.rate_limiter = (
        RateLimiter(config.rate_limit.requests_per_minute, window_seconds=config.rate_limit.window_seconds)
        if config.rate_limit.enabled
        else None
    )
    if app.state.rate_limiter is None:
        logger.warning("[RateLimit] Rate limiting disabled by configuration")

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={
                "error": str(exc),
                "limit": exc.result.limit,
                "remaining": exc.result.remaining,
                "reset": exc.result.reset,
            },
            headers=rate_limit_headers(exc.result),
        )

    @app.get("/health")
    def health():
        return {"status": "ok", "products": len(store), "cache_connected": response_cache.ping()}

    app.include_router(products_router, prefix="/api")
    app.include_router(cache_router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("storefront.api.main:app", host="0.0.0.0", port=port)
