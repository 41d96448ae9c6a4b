import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from storefront.api.dependencies import get_response_cache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Cache"])


@router.get("/cache")
def cache_stats(response: Response, cache=Depends(get_response_cache)):
    try:
        connected = cache.ping()
        stats = cache.stats()
    except Exception as e:
        logger.error("[Cache API] Stats error: %s", e)
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return {"success": False, "error": str(e) or "Unknown error"}

    return {
        "success": True,
        "cache": stats,
        "connected": connected,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.delete("/cache")
def clear_cache(response: Response, cache=Depends(get_response_cache)):
    try:
        cache.clear()
    except Exception as e:
        logger.error("[Cache API] Clear error: %s", e)
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return {"success": False, "error": str(e) or "Unknown error"}

    logger.info("[Cache API] Response cache cleared")
    return {"success": True, "message": "Cache cleared successfully"}
