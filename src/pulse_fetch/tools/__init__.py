"""MCP scrape, crawl and map tools and their business logic.

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- service.py: strategy selection, crawl dispatch, site mapping, metrics recording
"""

from pulse_fetch.tools.router import crawl, map_urls, register_tools, scrape
from pulse_fetch.tools.service import (
    cancel_crawl,
    crawl_status,
    map_site,
    run_crawl,
    scrape_page,
    start_crawl,
)

__all__ = [
    # MCP tool functions
    "scrape",
    "crawl",
    "map_urls",
    "register_tools",
    # Service functions
    "scrape_page",
    "run_crawl",
    "start_crawl",
    "crawl_status",
    "cancel_crawl",
    "map_site",
]
