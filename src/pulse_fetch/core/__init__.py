"""Core infrastructure: provider construction and strategy selection.

This module provides the single source of truth for provider instances
and the rules that decide which backend handles a request:
- build_providers / get_providers: construct providers from settings
- select_provider: pick one backend per request, before any I/O
"""

from pulse_fetch.core.providers import (
    build_providers,
    get_crawl_manager,
    get_providers,
)
from pulse_fetch.core.selector import (
    ProviderSet,
    SelectionOptions,
    Strategy,
    select_provider,
    select_strategy,
)

__all__ = [
    "build_providers",
    "get_crawl_manager",
    "get_providers",
    "ProviderSet",
    "SelectionOptions",
    "Strategy",
    "select_provider",
    "select_strategy",
]
