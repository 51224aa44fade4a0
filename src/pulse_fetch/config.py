"""Environment-driven configuration for pulse-fetch."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any

from pulse_fetch.errors import ConfigurationError

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_FIRECRAWL_BASE_URL = "https://api.firecrawl.dev"
DEFAULT_OPTIMIZE_FOR = "cost"
DEFAULT_NATIVE_TIMEOUT = 30.0
DEFAULT_FIRECRAWL_TIMEOUT = 60.0

OPTIMIZE_MODES = ("cost", "speed")

_BASE_URL_PATTERN = re.compile(r"https?://[^\\\s]+")


def validate_base_url(base_url: str) -> str:
    """Validate the Firecrawl base URL override.

    Args:
        base_url: Configured base URL

    Returns:
        The base URL without a trailing slash

    Raises:
        ConfigurationError: If the URL is not http(s), contains whitespace or a
            backslash, or contains ``..``
    """
    if not _BASE_URL_PATTERN.fullmatch(base_url) or ".." in base_url:
        raise ConfigurationError(f"Invalid FIRECRAWL_BASE_URL: {base_url!r}")
    return base_url.rstrip("/")


def _parse_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, computed once at startup."""

    firecrawl_api_key: str | None = None
    firecrawl_base_url: str = DEFAULT_FIRECRAWL_BASE_URL
    optimize_for: str = DEFAULT_OPTIMIZE_FOR
    native_timeout: float = DEFAULT_NATIVE_TIMEOUT
    firecrawl_timeout: float = DEFAULT_FIRECRAWL_TIMEOUT

    @property
    def firecrawl_enabled(self) -> bool:
        return bool(self.firecrawl_api_key)

    def to_dict(self) -> dict[str, Any]:
        """Public view of the settings with the API key masked."""
        return {
            "firecrawl_enabled": self.firecrawl_enabled,
            "firecrawl_api_key": "***" if self.firecrawl_api_key else None,
            "firecrawl_base_url": self.firecrawl_base_url,
            "optimize_for": self.optimize_for,
            "native_timeout": self.native_timeout,
            "firecrawl_timeout": self.firecrawl_timeout,
        }


def load_settings() -> Settings:
    """Read settings from environment variables.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If any value is invalid
    """
    base_url = validate_base_url(os.getenv("FIRECRAWL_BASE_URL") or DEFAULT_FIRECRAWL_BASE_URL)

    optimize_for = (os.getenv("OPTIMIZE_FOR") or DEFAULT_OPTIMIZE_FOR).lower()
    if optimize_for not in OPTIMIZE_MODES:
        raise ConfigurationError(
            f"OPTIMIZE_FOR must be one of {', '.join(OPTIMIZE_MODES)}, got {optimize_for!r}"
        )

    settings = Settings(
        firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY") or None,
        firecrawl_base_url=base_url,
        optimize_for=optimize_for,
        native_timeout=_parse_seconds("NATIVE_TIMEOUT", DEFAULT_NATIVE_TIMEOUT),
        firecrawl_timeout=_parse_seconds("FIRECRAWL_TIMEOUT", DEFAULT_FIRECRAWL_TIMEOUT),
    )

    logger.info(
        f"Settings loaded (firecrawl_enabled={settings.firecrawl_enabled}, "
        f"base_url={settings.firecrawl_base_url}, optimize_for={settings.optimize_for})"
    )
    return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or load the global settings instance.

    Returns:
        Global Settings instance
    """
    global _settings

    if _settings is None:
        _settings = load_settings()

    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None
