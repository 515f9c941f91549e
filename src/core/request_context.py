"""Request context helpers for identifying the calling client."""
from collections.abc import Mapping

# Shared bucket for requests that carry no client address headers
UNKNOWN_CLIENT = "unknown"


def get_client_identifier(headers: Mapping[str, str]) -> str:
    """
    Derive a rate limit identifier from proxy headers.

    Prefers the first address in X-Forwarded-For, then X-Real-IP. Falls back to
    UNKNOWN_CLIENT, so all clients without these headers share one bucket.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT
