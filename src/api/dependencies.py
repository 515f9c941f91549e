"""FastAPI dependencies for injection."""
import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, Request

from core.config import Settings, get_settings
from core.rate_limit_config import RateLimitExceededError
from core.rate_limiter import FixedWindowRateLimiter
from core.request_context import get_client_identifier
from db.session import get_async_session
from services.urlhaus_client import UrlhausClient

logger = logging.getLogger(__name__)

__all__ = [
    "get_async_session",
    "get_settings",
    "get_urlhaus_client",
    "rate_limited",
]


def get_urlhaus_client(settings: Settings = Depends(get_settings)) -> UrlhausClient:
    """Build the upstream feed client from settings."""
    return UrlhausClient(
        auth_key=settings.urlhaus_auth_key,
        base_url=settings.urlhaus_api_url,
        timeout=settings.urlhaus_timeout_seconds,
    )


def rate_limited(limiter: FixedWindowRateLimiter) -> Callable[[Request], Awaitable[None]]:
    """
    Build a dependency that charges one request to the caller's bucket in limiter.

    The result is stored on request.state for the headers middleware. Denied
    requests raise RateLimitExceededError, turned into a 429 by the app.
    """

    async def _enforce(request: Request) -> None:
        identifier = get_client_identifier(request.headers)
        result = limiter.check(identifier)
        request.state.rate_limit_info = result
        if not result.allowed:
            logger.warning(
                "rate_limit_exceeded",
                extra={
                    "client": identifier,
                    "path": request.url.path,
                    "limit": result.limit,
                    "retry_after": result.retry_after,
                },
            )
            raise RateLimitExceededError(result)

    return _enforce
