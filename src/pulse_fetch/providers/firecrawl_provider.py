"""Managed scraping provider backed by the Firecrawl API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import quote

import requests

from pulse_fetch.errors import (
    ClassifiedError,
    FirecrawlAPIError,
    classify_error,
    extract_error_message,
)
from pulse_fetch.providers.base import ScraperProvider

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_FORMATS = ("markdown", "html")

ProxyTier = Literal["basic", "stealth", "auto"]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class ExtractOptions:
    """Structured extraction request for the managed service."""

    schema: dict[str, Any] | None = None
    system_prompt: str | None = None
    prompt: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.schema is not None:
            payload["schema"] = self.schema
        if self.system_prompt is not None:
            payload["systemPrompt"] = self.system_prompt
        if self.prompt is not None:
            payload["prompt"] = self.prompt
        return payload


@dataclass(frozen=True)
class FirecrawlScrapeOptions:
    """Options forwarded to the Firecrawl scrape endpoint.

    Durations (``wait_for``, ``timeout``, ``max_age``) are milliseconds, as
    the API expects them.
    """

    formats: tuple[str, ...] = DEFAULT_FORMATS
    only_main_content: bool | None = None
    wait_for: int | None = None
    timeout: int | None = None
    extract: ExtractOptions | None = None
    remove_base64_images: bool | None = None
    max_age: int | None = None
    proxy: ProxyTier | None = None
    block_ads: bool | None = None
    headers: dict[str, str] | None = None
    include_tags: tuple[str, ...] | None = None
    exclude_tags: tuple[str, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Render the camelCase request options, omitting unset fields."""
        payload: dict[str, Any] = {"formats": list(self.formats)}
        optional = {
            "onlyMainContent": self.only_main_content,
            "waitFor": self.wait_for,
            "timeout": self.timeout,
            "removeBase64Images": self.remove_base64_images,
            "maxAge": self.max_age,
            "proxy": self.proxy,
            "blockAds": self.block_ads,
            "headers": self.headers,
            "includeTags": list(self.include_tags) if self.include_tags is not None else None,
            "excludeTags": list(self.exclude_tags) if self.exclude_tags is not None else None,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.extract is not None:
            payload["extract"] = self.extract.to_payload()
        return payload


@dataclass(frozen=True)
class MapOptions:
    """Options for URL discovery through the map endpoint.

    Attributes:
        search: Only return URLs related to this query
        limit: Maximum number of URLs to return
        sitemap: "skip", "include" or "only" the site's sitemap
        include_subdomains: Follow links onto subdomains
        ignore_query_parameters: Treat URLs differing only by query as one
        timeout: API-side timeout in milliseconds
        country: ISO country code for geo-dependent sites
        languages: Preferred languages for geo-dependent sites
    """

    search: str | None = None
    limit: int = 5000
    sitemap: Literal["skip", "include", "only"] = "include"
    include_subdomains: bool = True
    ignore_query_parameters: bool = True
    timeout: int | None = None
    country: str | None = None
    languages: tuple[str, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "limit": self.limit,
            "sitemap": self.sitemap,
            "includeSubdomains": self.include_subdomains,
            "ignoreQueryParameters": self.ignore_query_parameters,
        }
        if self.search:
            payload["search"] = self.search
        if self.timeout is not None:
            payload["timeout"] = self.timeout
        if self.country or self.languages:
            location: dict[str, Any] = {"country": self.country or "US"}
            if self.languages:
                location["languages"] = list(self.languages)
            payload["location"] = location
        return payload


@dataclass
class FirecrawlContent:
    """Page content returned by the managed service."""

    content: str = ""
    markdown: str = ""
    html: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    links: list[str] | None = None
    screenshot: str | None = None
    extract: Any = None


@dataclass
class FirecrawlScrapeResult:
    """Result from a managed-service scrape."""

    success: bool
    data: FirecrawlContent | None = None
    error: str | None = None
    classified_error: ClassifiedError | None = None


class FirecrawlProvider(ScraperProvider):
    """Scraper that delegates to the Firecrawl API.

    Handles JavaScript rendering, anti-bot measures and structured
    extraction. Also carries the map endpoint and the crawl job endpoints
    used by the crawl manager.
    """

    name = "firecrawl"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float | None = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the Firecrawl provider.

        Args:
            api_key: Firecrawl bearer API key
            base_url: Validated API base URL (see config.validate_base_url)
            timeout: HTTP timeout in seconds for API calls
            session: requests session to reuse (default: new session)

        Raises:
            ValueError: If the API key is empty
        """
        if not api_key or not api_key.strip():
            raise ValueError("Firecrawl API key is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info(f"FirecrawlProvider initialized (base_url={self.base_url})")

    def _headers(self, json_body: bool = True) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send an API request without blocking the event loop."""
        url = f"{self.base_url}{path}"
        headers = self._headers(json_body=payload is not None)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: self.session.request(
                method, url, headers=headers, json=payload, timeout=self.timeout
            ),
        )

    @staticmethod
    def _json_or_empty(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    async def _call_json(
        self,
        method: str,
        path: str,
        operation: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the JSON body.

        Raises:
            FirecrawlAPIError: On a non-2xx response
            requests.RequestException: On transport failure
        """
        response = await self._request(method, path, payload)
        if not response.ok:
            raise FirecrawlAPIError(response.status_code, response.text, operation=operation)
        return self._json_or_empty(response)

    async def scrape(
        self, url: str, options: FirecrawlScrapeOptions | None = None
    ) -> FirecrawlScrapeResult:
        """Scrape a page through ``POST /v1/scrape``.

        Args:
            url: The URL to scrape
            options: Managed-service options (default: markdown and html formats)

        Returns:
            FirecrawlScrapeResult; failures are reported with success=False
        """
        options = options or FirecrawlScrapeOptions()
        payload = {"url": url, **options.to_payload()}

        logger.debug(f"Firecrawl scrape {url} (formats={payload['formats']})")

        try:
            response = await self._request("POST", "/v1/scrape", payload)
        except requests.RequestException as e:
            message = str(e) or type(e).__name__
            logger.debug(f"Firecrawl scrape transport error for {url}: {message}")
            return FirecrawlScrapeResult(
                success=False,
                error=message,
                classified_error=classify_error(0, message),
            )

        if not response.ok:
            body = response.text
            detail = extract_error_message(body)
            suffix = f" - {detail}" if detail else ""
            return FirecrawlScrapeResult(
                success=False,
                error=f"Firecrawl API error: {response.status_code} {response.reason}{suffix}",
                classified_error=classify_error(response.status_code, body),
            )

        result = self._json_or_empty(response)
        if not result.get("success"):
            return FirecrawlScrapeResult(
                success=False,
                error=_text(result.get("error")) or "Firecrawl scraping failed",
            )

        data = result.get("data")
        if not isinstance(data, dict):
            data = {}
        metadata = data.get("metadata")
        links = data.get("links")
        return FirecrawlScrapeResult(
            success=True,
            data=FirecrawlContent(
                content=_text(data.get("content")),
                markdown=_text(data.get("markdown")),
                html=_text(data.get("html")),
                metadata=metadata if isinstance(metadata, dict) else {},
                links=links if isinstance(links, list) else None,
                screenshot=_text(data.get("screenshot")) or None,
                extract=data.get("extract") or data.get("json"),
            ),
        )

    async def start_crawl(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Start a crawl job through ``POST /v2/crawl``.

        Returns:
            The raw response body

        Raises:
            FirecrawlAPIError: On a non-2xx response
            requests.RequestException: On transport failure
        """
        return await self._call_json("POST", "/v2/crawl", "crawl", payload)

    async def map_site(self, url: str, options: MapOptions | None = None) -> dict[str, Any]:
        """Discover the URLs of a site through ``POST /v2/map``.

        Args:
            url: Site URL to map
            options: Discovery options (default: sitemap included, 5000 URLs)

        Returns:
            The raw response body

        Raises:
            FirecrawlAPIError: On a non-2xx response
            requests.RequestException: On transport failure
        """
        options = options or MapOptions()
        return await self._call_json("POST", "/v2/map", "map", {"url": url, **options.to_payload()})

    def _crawl_path(self, crawl_id: str) -> str:
        return f"/v2/crawl/{quote(crawl_id, safe='')}"

    async def get_crawl_status(self, crawl_id: str) -> dict[str, Any]:
        """Fetch crawl job status through ``GET /v2/crawl/{id}``."""
        return await self._call_json("GET", self._crawl_path(crawl_id), "crawl status")

    async def cancel_crawl(self, crawl_id: str) -> dict[str, Any]:
        """Cancel a crawl job through ``DELETE /v2/crawl/{id}``."""
        return await self._call_json("DELETE", self._crawl_path(crawl_id), "crawl cancel")
