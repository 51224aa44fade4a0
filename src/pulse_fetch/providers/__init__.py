"""Scraper providers for different scraping backends."""

from pulse_fetch.providers.base import ScraperProvider
from pulse_fetch.providers.firecrawl_provider import (
    ExtractOptions,
    FirecrawlContent,
    FirecrawlProvider,
    FirecrawlScrapeOptions,
    FirecrawlScrapeResult,
    MapOptions,
)
from pulse_fetch.providers.native_provider import (
    NativeProvider,
    NativeScrapeOptions,
    NativeScrapeResult,
)

__all__ = [
    "ScraperProvider",
    "NativeProvider",
    "NativeScrapeOptions",
    "NativeScrapeResult",
    "FirecrawlProvider",
    "FirecrawlScrapeOptions",
    "FirecrawlScrapeResult",
    "FirecrawlContent",
    "ExtractOptions",
    "MapOptions",
]
