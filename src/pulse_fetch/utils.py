"""Utility functions for URLs and content-type headers."""

from __future__ import annotations

from urllib.parse import urlparse

DEFAULT_CONTENT_TYPE = "text/plain"


def is_http_url(url: str) -> bool:
    """Check that a URL is absolute and uses the http or https scheme.

    Args:
        url: The URL to check

    Returns:
        True if the URL can be fetched over HTTP(S)
    """
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def media_type(content_type: str | None) -> str:
    """Return the lower-cased media type without parameters.

    Examples:
        >>> media_type("text/HTML; charset=utf-8")
        'text/html'
        >>> media_type(None)
        'text/plain'
    """
    if not content_type:
        return DEFAULT_CONTENT_TYPE
    return content_type.split(";", 1)[0].strip().lower() or DEFAULT_CONTENT_TYPE


def charset_from_content_type(content_type: str | None) -> str | None:
    """Extract the ``charset`` parameter from a Content-Type value.

    Args:
        content_type: Raw Content-Type header value

    Returns:
        The charset name, or None if not declared
    """
    if not content_type:
        return None

    for param in content_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"').strip("'")

    return None


def decode_bytes(raw: bytes, content_type: str | None = None) -> str:
    """Decode bytes using the declared charset, falling back to UTF-8.

    Undecodable sequences are replaced rather than raising.
    """
    charset = charset_from_content_type(content_type)
    if charset:
        try:
            return raw.decode(charset, errors="replace")
        except LookupError:
            # Unknown charset name
            pass
    return raw.decode("utf-8", errors="replace")
