"""Admin service layer for stats and configuration reporting."""

from __future__ import annotations

from typing import Any

from pulse_fetch.config import get_settings
from pulse_fetch.core.providers import get_providers
from pulse_fetch.metrics import get_metrics


def get_stats() -> dict[str, Any]:
    """Get server statistics and metrics.

    Returns:
        Dictionary with request metrics and per-strategy counters
    """
    return get_metrics().to_dict()


def get_current_config() -> dict[str, Any]:
    """Get the active configuration with secrets masked.

    Returns:
        Dictionary with settings and the strategies that are available
    """
    providers = get_providers()
    strategies = [providers.native.name]
    if providers.firecrawl is not None:
        strategies.append(providers.firecrawl.name)

    return {
        "config": get_settings().to_dict(),
        "strategies": strategies,
        "note": "Configuration is read from the environment at startup",
    }
