"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, categories, feed, health
from core.config import get_settings
from core.rate_limit_config import RateLimitExceededError, RateLimitResult
from db.session import init_db
from services.exceptions import (
    BookmarkStoreError,
    DuplicateUrlError,
    EmptyNameError,
    MissingUrlError,
    NotFoundError,
    StorageError,
    UrlValidationError,
)
from services.urlhaus_client import FeedConfigurationError, FeedUpstreamError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()

    # Startup: create missing tables, start expired-entry sweeps
    await init_db()
    for limiter in feed.LIMITERS:
        limiter.start_sweeper(app_settings.rate_limit_sweep_interval_seconds)

    yield

    # Shutdown: stop sweeper threads
    for limiter in feed.LIMITERS:
        limiter.stop_sweeper()


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    """X-RateLimit-* headers describing a rate limit check."""
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_at),
    }


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Add rate limit headers to successful responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add rate limit headers to response."""
        response = await call_next(request)

        # Add headers if rate limit info was stored by dependency
        # Note: 429 responses are handled by exception handler, not middleware
        info = getattr(request.state, "rate_limit_info", None)
        if info is not None and info.allowed:
            response.headers.update(rate_limit_headers(info))

        return response


# Status codes for store errors, most specific class first
STORE_ERROR_STATUS: tuple[tuple[type[BookmarkStoreError], int], ...] = (
    (UrlValidationError, 400),
    (MissingUrlError, 400),
    (EmptyNameError, 400),
    (DuplicateUrlError, 409),
    (NotFoundError, 404),
    (StorageError, 500),
)


def status_for_store_error(exc: BookmarkStoreError) -> int:
    """HTTP status code for a bookmark store error."""
    for error_type, status_code in STORE_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


app_settings = get_settings()

app = FastAPI(
    title="URLhaus Bookmarks API",
    description="Browse the URLhaus malicious URL feed and keep categorized bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RateLimitExceededError)
async def rate_limit_exception_handler(
    _request: Request, exc: RateLimitExceededError,
) -> JSONResponse:
    """Handle rate limit exceeded with proper headers."""
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc), "error": "RateLimited"},
        headers={
            "Retry-After": str(exc.result.retry_after),
            **rate_limit_headers(exc.result),
        },
    )


@app.exception_handler(BookmarkStoreError)
async def store_exception_handler(
    request: Request, exc: BookmarkStoreError,
) -> JSONResponse:
    """Map store errors to status codes; keep storage internals in the logs."""
    status_code = status_for_store_error(exc)
    if isinstance(exc, StorageError):
        logger.error(
            "storage_failure",
            extra={
                "operation": exc.operation,
                "detail": exc.detail,
                "path": request.url.path,
            },
        )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


@app.exception_handler(FeedConfigurationError)
async def feed_configuration_exception_handler(
    _request: Request, exc: FeedConfigurationError,
) -> JSONResponse:
    """Feed proxy is not configured."""
    logger.error("feed_not_configured", extra={"detail": str(exc)})
    return JSONResponse(
        status_code=503,
        content={"detail": "Feed is not configured", "error": "FeedUnavailable"},
    )


@app.exception_handler(FeedUpstreamError)
async def feed_upstream_exception_handler(
    _request: Request, exc: FeedUpstreamError,
) -> JSONResponse:
    """Upstream feed failed or could not be reached."""
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "error": "UpstreamFailed",
            "upstream_status": exc.status_code,
        },
    )


# Rate limit headers middleware (runs first, adds headers to successful responses)
app.add_middleware(RateLimitHeadersMiddleware)

# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
app.include_router(categories.router)
app.include_router(feed.router)


def main() -> None:
    """Entry point for running the API with uvicorn."""
    logging.basicConfig(
        level=app_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    main()
