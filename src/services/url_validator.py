"""
URL validation and normalization for bookmarks.

validate_url() reports the first problem found; normalize_url() never fails and
returns its input unchanged when it cannot parse it.
"""
from dataclasses import dataclass
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from services.exceptions import (
    EmptyUrlError,
    MalformedUrlError,
    MissingHostError,
    UnsupportedSchemeError,
    UrlTooLongError,
    UrlValidationError,
)

MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_url(). `error` is set when `valid` is False."""

    valid: bool
    error: UrlValidationError | None = None


def _parse_absolute(url: str) -> SplitResult | None:
    """
    Split an absolute URL, or return None if it is not one.

    Rejects inputs without a scheme, with a non-numeric or out-of-range port,
    with an unbalanced IPv6 bracket, or with whitespace inside the authority.
    """
    try:
        parts = urlsplit(url.strip())
        _ = parts.port  # raises ValueError on bad ports
    except ValueError:
        return None
    if not parts.scheme:
        return None
    if any(ch.isspace() for ch in parts.netloc):
        return None
    return parts


def _encode_non_ascii(component: str) -> str:
    """Percent-encode non-ASCII characters as UTF-8, leaving ASCII text untouched."""
    if component.isascii():
        return component
    return "".join(
        ch if ch.isascii() else quote(ch, safe="", errors="surrogatepass") for ch in component
    )


def validate_url(url: str | None) -> ValidationResult:
    """Check that url is a non-empty, reasonably sized, absolute http(s) URL."""
    if not url or not url.strip():
        return ValidationResult(valid=False, error=EmptyUrlError())

    if len(url) > MAX_URL_LENGTH:
        return ValidationResult(valid=False, error=UrlTooLongError(MAX_URL_LENGTH))

    parts = _parse_absolute(url)
    if parts is None:
        return ValidationResult(valid=False, error=MalformedUrlError())

    if parts.scheme not in ALLOWED_SCHEMES:
        return ValidationResult(valid=False, error=UnsupportedSchemeError(parts.scheme))

    if not parts.hostname:
        return ValidationResult(valid=False, error=MissingHostError())

    return ValidationResult(valid=True)


def normalize_url(url: str) -> str:
    """
    Normalize a URL for comparison and storage.

    Lowercases the scheme and host, drops the scheme's default port, and removes
    trailing slashes from any path other than "/". An empty http(s) path becomes "/".
    Non-ASCII hosts are IDNA-encoded and non-ASCII characters elsewhere are
    percent-encoded, so stored URLs are pure ASCII and case folding agrees between
    Python and the database.
    Returns url unchanged if it is not an absolute URL with a host.
    """
    parts = _parse_absolute(url)
    if parts is None or not parts.hostname:
        return url

    host = parts.hostname
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return url
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and DEFAULT_PORTS.get(parts.scheme) != port:
        host = f"{host}:{port}"

    netloc = host
    if parts.username is not None:
        userinfo = _encode_non_ascii(parts.netloc.rpartition("@")[0])
        netloc = f"{userinfo}@{host}"

    path = _encode_non_ascii(parts.path)
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/") or "/"
    if not path and parts.scheme in DEFAULT_PORTS:
        path = "/"

    return urlunsplit((
        parts.scheme,
        netloc,
        path,
        _encode_non_ascii(parts.query),
        _encode_non_ascii(parts.fragment),
    ))


def sanitize_url(url: str) -> str:
    """Trim whitespace and normalize."""
    return normalize_url(url.strip())
