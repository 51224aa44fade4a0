"""MCP tool definitions for scraping, crawling and site mapping."""

from __future__ import annotations

from typing import Any, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from pulse_fetch.core.selector import SelectionOptions, Strategy
from pulse_fetch.models.crawl import CrawlResponse
from pulse_fetch.models.map import MapResponse
from pulse_fetch.models.scrape import ScrapeRequest, ScrapeResponse
from pulse_fetch.providers import (
    ExtractOptions,
    FirecrawlScrapeOptions,
    MapOptions,
    NativeScrapeOptions,
)
from pulse_fetch.providers.firecrawl_provider import DEFAULT_FORMATS
from pulse_fetch.tools.service import map_site, run_crawl, scrape_page

MAX_MAP_LIMIT = 100000


async def scrape(
    url: str,
    strategy: Literal["native", "firecrawl"] | None = None,
    needs_javascript: bool = False,
    timeout: float | None = None,
    headers: dict[str, str] | None = None,
    method: Literal["GET", "POST"] = "GET",
    body: str | None = None,
    formats: list[str] | None = None,
    only_main_content: bool | None = None,
    wait_for: int | None = None,
    extract_schema: dict[str, Any] | None = None,
    extract_prompt: str | None = None,
    extract_system_prompt: str | None = None,
    remove_base64_images: bool | None = None,
    max_age: int | None = None,
    proxy: Literal["basic", "stealth", "auto"] | None = None,
    block_ads: bool | None = None,
) -> ScrapeResponse:
    """Scrape a single URL and return normalized content.

    Args:
        url: URL to scrape (must be http:// or https://)
        strategy: Force a backend: "native" (plain HTTP) or "firecrawl" (rendered)
        needs_javascript: Page needs JavaScript rendering (selects firecrawl)
        timeout: Timeout in seconds (native: whole request, firecrawl: page load)
        headers: Extra request headers
        method: HTTP method for native fetches
        body: Request body for native POST fetches
        formats: Firecrawl output formats (default: markdown, html)
        only_main_content: Firecrawl: strip navigation, footers and similar
        wait_for: Firecrawl: milliseconds to wait for rendering
        extract_schema: Firecrawl: JSON schema for structured extraction
        extract_prompt: Firecrawl: extraction prompt
        extract_system_prompt: Firecrawl: extraction system prompt
        remove_base64_images: Firecrawl: drop inline base64 images
        max_age: Firecrawl: accept a cached page up to this many milliseconds old
        proxy: Firecrawl proxy tier: basic, stealth or auto
        block_ads: Firecrawl: block ads and cookie banners

    Returns:
        ScrapeResponse with content from the selected strategy
    """
    try:
        request = ScrapeRequest(url=url)
    except ValidationError as e:
        return ScrapeResponse(
            url=url,
            strategy=strategy or "none",
            success=False,
            error=e.errors()[0]["msg"],
        )

    extract = None
    if extract_schema is not None or extract_prompt or extract_system_prompt:
        extract = ExtractOptions(
            schema=extract_schema, prompt=extract_prompt, system_prompt=extract_system_prompt
        )

    selection = SelectionOptions(
        strategy=Strategy(strategy) if strategy else None,
        needs_javascript=needs_javascript,
        needs_extraction=extract is not None,
        needs_anti_bot=proxy == "stealth",
    )

    native_options = NativeScrapeOptions(
        timeout=timeout, headers=headers or {}, method=method, body=body
    )
    firecrawl_options = FirecrawlScrapeOptions(
        formats=tuple(formats) if formats else DEFAULT_FORMATS,
        only_main_content=only_main_content,
        wait_for=wait_for,
        timeout=int(timeout * 1000) if timeout is not None else None,
        extract=extract,
        remove_base64_images=remove_base64_images,
        max_age=max_age,
        proxy=proxy,
        block_ads=block_ads,
        headers=headers,
    )

    return await scrape_page(request, selection, native_options, firecrawl_options)


async def crawl(
    url: str | None = None,
    job_id: str | None = None,
    cancel: bool = False,
) -> CrawlResponse:
    """Start a site crawl, check its progress, or cancel it.

    Provide ``url`` to start crawling the site it belongs to (translated
    documentation paths are excluded automatically), or ``job_id`` to check
    status. Set ``cancel`` with ``job_id`` to stop the job. Status is not
    polled automatically; call again with ``job_id`` to check progress.

    Args:
        url: Any page on the site to crawl (starts a new crawl)
        job_id: Crawl id returned when the crawl was started
        cancel: Cancel the job instead of reporting its status

    Returns:
        CrawlResponse describing the operation result
    """
    return await run_crawl(url=url, job_id=job_id, cancel=cancel)


async def map_urls(
    url: str,
    search: str | None = None,
    limit: int = 5000,
    sitemap: Literal["skip", "include", "only"] = "include",
    include_subdomains: bool = True,
    ignore_query_parameters: bool = True,
    timeout: float | None = None,
    country: str | None = None,
    languages: list[str] | None = None,
) -> MapResponse:
    """Discover the URLs of a site without scraping them.

    Args:
        url: Site URL to map (must be http:// or https://)
        search: Only return URLs related to this query
        limit: Maximum number of URLs to return (1-100000)
        sitemap: "skip", "include" or "only" the site's sitemap
        include_subdomains: Include URLs on subdomains
        ignore_query_parameters: Collapse URLs that differ only by query string
        timeout: Timeout in seconds
        country: ISO country code for geo-dependent sites (default: US)
        languages: Preferred languages for geo-dependent sites

    Returns:
        MapResponse with discovered URLs
    """
    if not 1 <= limit <= MAX_MAP_LIMIT:
        return MapResponse(
            url=url, success=False, error=f"limit must be between 1 and {MAX_MAP_LIMIT}"
        )

    options = MapOptions(
        search=search,
        limit=limit,
        sitemap=sitemap,
        include_subdomains=include_subdomains,
        ignore_query_parameters=ignore_query_parameters,
        timeout=int(timeout * 1000) if timeout is not None else None,
        country=country,
        languages=tuple(languages) if languages else None,
    )
    return await map_site(url.strip(), options)


def register_tools(mcp: FastMCP) -> None:
    """Register the scrape, crawl and map tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(scrape)
    mcp.tool()(crawl)
    mcp.tool(name="map")(map_urls)
