"""
Rate limiting configuration and types.

This module contains the policy configuration for rate limiting - the "what" limits
to apply, separate from the "how" (enforcement logic in rate_limiter.py).

To adjust the feed proxy limit, set FEED_RATE_LIMIT_REQUESTS / FEED_RATE_LIMIT_WINDOW_MS.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limit configuration for a guarded endpoint."""

    max_requests: int = 10
    window_ms: int = 60_000


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check with all info needed for headers."""

    allowed: bool
    limit: int  # Max requests in current window
    remaining: int  # Requests remaining in current window
    reset_at: int  # Unix timestamp in milliseconds when window resets
    retry_after: int  # Seconds until retry allowed (0 if allowed)


class RateLimitExceededError(Exception):
    """Raised when rate limit is exceeded."""

    def __init__(self, result: RateLimitResult) -> None:
        self.result = result
        super().__init__(
            f"Rate limit exceeded. Try again in {result.retry_after} seconds.",
        )

