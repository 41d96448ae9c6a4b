import logging

from fastapi import Request, Response

from storefront.utils.rate_limiter import RateLimitResult

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    def __init__(self, result: RateLimitResult):
        super().__init__("Too many requests. Please try again later.")
        self.result = result


def rate_limit_headers(result: RateLimitResult):
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(int(result.reset * 1000)),
    }


def get_rate_limit_identifier(request: Request, user_id: str = None) -> str:
    if user_id:
        return f"user:{user_id}"

    forwarded = request.headers.get("x-forwarded-for")
    real_ip = request.headers.get("x-real-ip")
    ip = (forwarded.split(",")[0].strip() if forwarded else None) or real_ip or "anonymous"
    return f"ip:{ip}"


async def rate_limit(request: Request, response: Response):
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    identifier = get_rate_limit_identifier(request)
    result = limiter.hit(identifier)
    if not result.success:
        logger.warning("Rate limit exceeded for %s on %s", identifier, request.url.path)
        raise RateLimitExceeded(result)
    response.headers.update(rate_limit_headers(result))


def get_catalog_service(request: Request):
    return request.app.state.catalog_service


def get_response_cache(request: Request):
    return request.app.state.response_cache
