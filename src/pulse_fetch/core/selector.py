"""Scraping strategy selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pulse_fetch.errors import StrategyUnavailableError
from pulse_fetch.providers import FirecrawlProvider, NativeProvider, ScraperProvider

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """Available scraping backends."""

    NATIVE = "native"
    FIRECRAWL = "firecrawl"


@dataclass(frozen=True)
class SelectionOptions:
    """Caller-declared preferences used to pick a backend.

    Attributes:
        strategy: Explicit backend; overrides every other field
        needs_javascript: Page must be rendered in a browser
        needs_extraction: Structured extraction (schema or prompt) is required
        needs_anti_bot: Page is behind bot protection (stealth proxy)
    """

    strategy: Strategy | None = None
    needs_javascript: bool = False
    needs_extraction: bool = False
    needs_anti_bot: bool = False

    @property
    def needs_managed_service(self) -> bool:
        return self.needs_javascript or self.needs_extraction or self.needs_anti_bot


@dataclass(frozen=True)
class ProviderSet:
    """Configured provider instances.

    Attributes:
        native: Direct-fetch provider, always available
        firecrawl: Managed-service provider, None without an API key
        optimize_for: "cost" prefers native, "speed" prefers firecrawl
    """

    native: NativeProvider
    firecrawl: FirecrawlProvider | None = None
    optimize_for: str = "cost"


def _require_firecrawl(providers: ProviderSet, reason: str) -> FirecrawlProvider:
    if providers.firecrawl is None:
        raise StrategyUnavailableError(
            f"Firecrawl is required ({reason}) but FIRECRAWL_API_KEY is not configured"
        )
    return providers.firecrawl


def select_strategy(options: SelectionOptions, providers: ProviderSet) -> Strategy:
    """Pick exactly one backend strategy for a request.

    Selection happens before any network activity and never falls back to
    another strategy on failure; escalating to the managed service after a
    failed direct fetch is the caller's decision.

    Args:
        options: Caller preferences and feature requirements
        providers: Configured providers

    Returns:
        The chosen strategy

    Raises:
        StrategyUnavailableError: If the managed service is needed but not configured
    """
    if options.strategy is Strategy.NATIVE:
        return Strategy.NATIVE

    if options.strategy is Strategy.FIRECRAWL:
        _require_firecrawl(providers, "explicitly requested")
        return Strategy.FIRECRAWL

    if options.needs_managed_service:
        features = [
            name
            for name, needed in (
                ("javascript rendering", options.needs_javascript),
                ("structured extraction", options.needs_extraction),
                ("anti-bot bypass", options.needs_anti_bot),
            )
            if needed
        ]
        _require_firecrawl(providers, ", ".join(features))
        return Strategy.FIRECRAWL

    if providers.optimize_for == "speed" and providers.firecrawl is not None:
        return Strategy.FIRECRAWL

    return Strategy.NATIVE


def select_provider(options: SelectionOptions, providers: ProviderSet) -> ScraperProvider:
    """Return the provider instance for the selected strategy."""
    if select_strategy(options, providers) is Strategy.FIRECRAWL:
        return _require_firecrawl(providers, "selected")
    return providers.native
