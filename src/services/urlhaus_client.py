"""Client for the URLhaus (abuse.ch) recent-activity feeds."""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = 'Mozilla/5.0 (compatible; URLhausBookmarks/1.0)'
DEFAULT_TIMEOUT = 10.0
DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


class FeedConfigurationError(Exception):
    """Raised when the feed cannot be queried because the client is not configured."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FeedUpstreamError(Exception):
    """Raised when URLhaus returns an error status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested record count to [1, MAX_LIMIT], defaulting to DEFAULT_LIMIT."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, limit))


class UrlhausClient:
    """
    Thin read-only client for the URLhaus v1 API.

    Only the two feeds the app proxies are exposed. Responses are returned as
    decoded JSON without reshaping.
    """

    def __init__(
        self,
        auth_key: str,
        base_url: str = "https://urlhaus-api.abuse.ch/v1",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.auth_key = auth_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def recent_urls(self, limit: int | None = None) -> dict[str, Any]:
        """Most recently reported malicious URLs."""
        return await self._get(f"/urls/recent/limit/{clamp_limit(limit)}/")

    async def recent_payloads(self, limit: int | None = None) -> dict[str, Any]:
        """Most recently observed payloads."""
        return await self._get(f"/payloads/recent/limit/{clamp_limit(limit)}/")

    async def _get(self, path: str) -> dict[str, Any]:
        if not self.auth_key:
            raise FeedConfigurationError("Missing URLHAUS_AUTH_KEY")

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    'User-Agent': USER_AGENT,
                    'Auth-Key': self.auth_key,
                    'Accept': 'application/json',
                },
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning("urlhaus_timeout", extra={"path": path})
            raise FeedUpstreamError("Upstream request timed out") from e
        except httpx.RequestError as e:
            logger.warning("urlhaus_unreachable", extra={"path": path, "error": str(e)})
            raise FeedUpstreamError("Upstream request failed") from e

        if not response.is_success:
            logger.warning(
                "urlhaus_error_status",
                extra={"path": path, "status_code": response.status_code},
            )
            raise FeedUpstreamError("Upstream failed", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise FeedUpstreamError("Upstream returned invalid JSON", response.status_code) from e
