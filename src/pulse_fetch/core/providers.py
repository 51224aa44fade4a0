"""Provider initialization for the pulse-fetch server."""

from __future__ import annotations

import logging

from pulse_fetch.config import Settings, get_settings
from pulse_fetch.core.selector import ProviderSet
from pulse_fetch.crawl import CrawlManager
from pulse_fetch.providers import FirecrawlProvider, NativeProvider

logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> ProviderSet:
    """Create provider instances from validated settings.

    Args:
        settings: Loaded settings; the base URL is already validated

    Returns:
        ProviderSet with the native provider and, if an API key is set,
        the Firecrawl provider
    """
    native = NativeProvider(timeout=settings.native_timeout)

    firecrawl = None
    if settings.firecrawl_enabled:
        firecrawl = FirecrawlProvider(
            api_key=settings.firecrawl_api_key or "",
            base_url=settings.firecrawl_base_url,
            timeout=settings.firecrawl_timeout,
        )
    else:
        logger.info("FIRECRAWL_API_KEY not set, only the native strategy is available")

    return ProviderSet(native=native, firecrawl=firecrawl, optimize_for=settings.optimize_for)


# Global provider set, built on first use
_providers: ProviderSet | None = None


def get_providers() -> ProviderSet:
    """Get or create the global provider set.

    Raises:
        ConfigurationError: If the environment configuration is invalid
    """
    global _providers

    if _providers is None:
        _providers = build_providers(get_settings())

    return _providers


def get_crawl_manager() -> CrawlManager | None:
    """Crawl manager bound to the global Firecrawl provider, if configured."""
    firecrawl = get_providers().firecrawl
    return CrawlManager(firecrawl) if firecrawl is not None else None
