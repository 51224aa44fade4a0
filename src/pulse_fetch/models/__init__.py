"""Pydantic data models for the scrape, crawl and map tools.

All models use Pydantic v2 for validation and serialization, ensuring
data integrity across the MCP tool interface.
"""

from pulse_fetch.models.crawl import CrawlResponse
from pulse_fetch.models.map import MapLink, MapResponse
from pulse_fetch.models.scrape import ScrapeRequest, ScrapeResponse

__all__ = [
    "ScrapeRequest",
    "ScrapeResponse",
    "CrawlResponse",
    "MapLink",
    "MapResponse",
]
