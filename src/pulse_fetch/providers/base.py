"""Base provider interface for web scraping."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pulse_fetch.utils import is_http_url


class ScraperProvider(ABC):
    """Abstract base class for scraper providers.

    Providers are interchangeable backends for one capability: fetch a URL
    and return a normalized result. Each provider defines its own options
    and result types because the backends expose different fidelity.
    """

    #: Strategy name used by the selector and in metrics
    name: str = "base"

    @abstractmethod
    async def scrape(self, url: str, options: Any = None) -> Any:
        """Scrape content from a URL.

        Args:
            url: The URL to scrape
            options: Provider-specific options object

        Returns:
            Provider-specific result; failures are reported in the result,
            never raised
        """
        pass

    def supports_url(self, url: str) -> bool:
        """Check if this provider supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if the URL uses http or https scheme
        """
        return is_http_url(url)
