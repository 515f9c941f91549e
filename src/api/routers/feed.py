"""URLhaus feed proxy endpoints, rate limited per client."""
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_urlhaus_client, rate_limited
from core.config import get_settings
from core.rate_limit_config import RateLimitConfig
from core.rate_limiter import FixedWindowRateLimiter
from schemas.errors import FEED_ERRORS
from services.urlhaus_client import DEFAULT_LIMIT, UrlhausClient

# Lets shared caches reuse feed responses for a few minutes
FEED_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"

_settings = get_settings()

# One limiter per guarded endpoint; started and stopped by the app lifespan
feed_limit = RateLimitConfig(
    max_requests=_settings.feed_rate_limit_requests,
    window_ms=_settings.feed_rate_limit_window_ms,
)
recent_urls_limiter = FixedWindowRateLimiter.from_config(feed_limit)
recent_payloads_limiter = FixedWindowRateLimiter.from_config(feed_limit)
LIMITERS: tuple[FixedWindowRateLimiter, ...] = (recent_urls_limiter, recent_payloads_limiter)

router = APIRouter(prefix="/urlhaus", tags=["feed"])


def _feed_response(data: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=data, headers={"Cache-Control": FEED_CACHE_CONTROL})


@router.get(
    "/urls/recent",
    responses=FEED_ERRORS,
    dependencies=[Depends(rate_limited(recent_urls_limiter))],
)
async def recent_urls(
    limit: int = Query(default=DEFAULT_LIMIT, description="Records to fetch (clamped to 1-1000)"),
    client: UrlhausClient = Depends(get_urlhaus_client),
) -> JSONResponse:
    """Proxy the URLhaus recent URLs feed."""
    return _feed_response(await client.recent_urls(limit))


@router.get(
    "/payloads/recent",
    responses=FEED_ERRORS,
    dependencies=[Depends(rate_limited(recent_payloads_limiter))],
)
async def recent_payloads(
    limit: int = Query(default=DEFAULT_LIMIT, description="Records to fetch (clamped to 1-1000)"),
    client: UrlhausClient = Depends(get_urlhaus_client),
) -> JSONResponse:
    """Proxy the URLhaus recent payloads feed."""
    return _feed_response(await client.recent_payloads(limit))
