"""Crawl request configuration and language path exclusion policy."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from pulse_fetch.utils import is_http_url

DEFAULT_MAX_DEPTH = 5

# Ports left out of the origin, as a browser would
DEFAULT_PORTS = {"http": 80, "https": 443}

UNIVERSAL_LANGUAGE_EXCLUDES: tuple[str, ...] = (
    "^/de/",
    "^/es/",
    "^/fr/",
    "^/it/",
    "^/pt/",
    "^/pt-BR/",
    "^/ja/",
    "^/ko/",
    "^/zh/",
    "^/zh-CN/",
    "^/zh-TW/",
    "^/ru/",
    "^/id/",
)

# Documentation sites with known translated path prefixes, keyed by host
DOMAIN_LANGUAGE_EXCLUDES: dict[str, tuple[str, ...]] = {
    "docs.firecrawl.dev": ("^/es/", "^/fr/", "^/ja/", "^/pt-BR/", "^/zh/"),
    "docs.claude.com": (
        "^/de/",
        "^/es/",
        "^/fr/",
        "^/id/",
        "^/it/",
        "^/ja/",
        "^/ko/",
        "^/pt/",
        "^/ru/",
        "^/zh-CN/",
        "^/zh-TW/",
    ),
    "docs.unraid.net": ("^/de/", "^/es/", "^/fr/", "^/zh/"),
}


@dataclass(frozen=True)
class CrawlRequestConfig:
    """Parameters for a background crawl of a site.

    Attributes:
        url: Site origin (scheme and host, no path)
        exclude_paths: Anchored path regexes the crawl must skip
        max_depth: Discovery depth requested by the caller
        change_detection: Ask the backend to track page changes
    """

    url: str
    exclude_paths: tuple[str, ...]
    max_depth: int = DEFAULT_MAX_DEPTH
    change_detection: bool = True


def exclude_paths_for_host(host: str) -> tuple[str, ...]:
    """Look up the exclusion list for an exact host, else the universal list."""
    return DOMAIN_LANGUAGE_EXCLUDES.get(host.lower(), UNIVERSAL_LANGUAGE_EXCLUDES)


def build_crawl_request_config(target_url: str) -> CrawlRequestConfig | None:
    """Build crawl configuration for a target URL.

    Args:
        target_url: Any URL on the site to crawl

    Returns:
        CrawlRequestConfig for the site's origin, or None if the URL
        cannot be parsed
    """
    try:
        parsed = urlparse(target_url)
        port = parsed.port
    except (TypeError, ValueError):
        return None

    if not parsed.scheme or not parsed.hostname:
        return None

    scheme = parsed.scheme.lower()
    hostname = f"[{parsed.hostname}]" if ":" in parsed.hostname else parsed.hostname
    if port is None or DEFAULT_PORTS.get(scheme) == port:
        host = hostname
    else:
        host = f"{hostname}:{port}"

    return CrawlRequestConfig(
        url=f"{scheme}://{host}",
        exclude_paths=exclude_paths_for_host(host),
        max_depth=DEFAULT_MAX_DEPTH,
        change_detection=True,
    )


def should_start_crawl(target_url: str) -> bool:
    """Check if a URL is suitable for crawling.

    Args:
        target_url: URL to validate

    Returns:
        True only for http and https URLs
    """
    return is_http_url(target_url)
