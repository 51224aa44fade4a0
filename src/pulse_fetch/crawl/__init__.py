"""Crawl configuration and crawl job lifecycle management."""

from pulse_fetch.crawl.config import (
    DEFAULT_MAX_DEPTH,
    DOMAIN_LANGUAGE_EXCLUDES,
    UNIVERSAL_LANGUAGE_EXCLUDES,
    CrawlRequestConfig,
    build_crawl_request_config,
    should_start_crawl,
)
from pulse_fetch.crawl.manager import (
    MIN_MAX_DEPTH,
    CrawlCancelResult,
    CrawlManager,
    CrawlStartResult,
    CrawlState,
    CrawlStatusResult,
    build_crawl_payload,
    extract_crawl_id,
    state_from_status,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DOMAIN_LANGUAGE_EXCLUDES",
    "UNIVERSAL_LANGUAGE_EXCLUDES",
    "MIN_MAX_DEPTH",
    "CrawlRequestConfig",
    "build_crawl_request_config",
    "should_start_crawl",
    "CrawlManager",
    "CrawlState",
    "CrawlStartResult",
    "CrawlStatusResult",
    "CrawlCancelResult",
    "build_crawl_payload",
    "extract_crawl_id",
    "state_from_status",
]
