"""Business logic for the scrape, crawl and map tools."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from pulse_fetch.core.providers import get_crawl_manager, get_providers
from pulse_fetch.core.selector import ProviderSet, SelectionOptions, Strategy, select_provider
from pulse_fetch.crawl import (
    CrawlManager,
    build_crawl_request_config,
    should_start_crawl,
)
from pulse_fetch.errors import FirecrawlAPIError, StrategyUnavailableError, classify_error
from pulse_fetch.metrics import record_request
from pulse_fetch.models.crawl import CrawlResponse
from pulse_fetch.models.map import MapLink, MapResponse
from pulse_fetch.models.scrape import ScrapeRequest, ScrapeResponse
from pulse_fetch.providers import (
    FirecrawlProvider,
    FirecrawlScrapeOptions,
    MapOptions,
    NativeProvider,
    NativeScrapeOptions,
)
from pulse_fetch.utils import is_http_url

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


async def _scrape_firecrawl(
    url: str, provider: FirecrawlProvider, options: FirecrawlScrapeOptions | None
) -> ScrapeResponse:
    started = time.perf_counter()
    result = await provider.scrape(url, options)
    elapsed = _elapsed_ms(started)
    record_request(
        url=url, strategy=provider.name, success=result.success, elapsed_ms=elapsed, error=result.error
    )

    if not result.success or result.data is None:
        details = result.classified_error
        return ScrapeResponse(
            url=url,
            strategy=provider.name,
            success=False,
            error=details.user_message if details else result.error,
            error_details={**details.to_dict(), "raw_error": result.error} if details else None,
        )

    data = result.data
    return ScrapeResponse(
        url=url,
        strategy=provider.name,
        success=True,
        content=data.content or data.markdown or data.html,
        markdown=data.markdown,
        html=data.html,
        extract=data.extract,
        metadata={**data.metadata, "elapsed_ms": elapsed},
    )


async def _scrape_native(
    url: str, provider: NativeProvider, options: NativeScrapeOptions | None
) -> ScrapeResponse:
    started = time.perf_counter()
    result = await provider.scrape(url, options)
    elapsed = _elapsed_ms(started)
    record_request(
        url=url, strategy=provider.name, success=result.success, elapsed_ms=elapsed, error=result.error
    )

    metadata = {**result.metadata, "elapsed_ms": elapsed}
    if result.headers and not result.success:
        # Response headers help diagnose blocks and redirects
        metadata["headers"] = result.headers

    return ScrapeResponse(
        url=url,
        strategy=provider.name,
        success=result.success,
        content=result.data,
        status_code=result.status_code,
        content_type=result.content_type,
        content_length=result.content_length,
        metadata=metadata,
        error=result.error,
    )


async def scrape_page(
    request: ScrapeRequest,
    selection: SelectionOptions | None = None,
    native_options: NativeScrapeOptions | None = None,
    firecrawl_options: FirecrawlScrapeOptions | None = None,
    providers: ProviderSet | None = None,
) -> ScrapeResponse:
    """Scrape one URL with the selected backend strategy.

    Exactly one provider is tried; a failure is returned as-is rather than
    retried on another backend.

    Args:
        request: Validated scrape request
        selection: Strategy preferences (default: configured optimization mode)
        native_options: Options used if the native provider is selected
        firecrawl_options: Options used if the Firecrawl provider is selected
        providers: Provider set (default: global providers)

    Returns:
        ScrapeResponse with normalized content or an error
    """
    providers = providers or get_providers()
    selection = selection or SelectionOptions()

    try:
        provider = select_provider(selection, providers)
    except StrategyUnavailableError as e:
        record_request(url=request.url, strategy=Strategy.FIRECRAWL.value, success=False, error=str(e))
        return ScrapeResponse(
            url=request.url, strategy=Strategy.FIRECRAWL.value, success=False, error=str(e)
        )

    if not provider.supports_url(request.url):
        error = f"{provider.name} cannot fetch {request.url}"
        record_request(url=request.url, strategy=provider.name, success=False, error=error)
        return ScrapeResponse(url=request.url, strategy=provider.name, success=False, error=error)

    if Strategy(provider.name) is Strategy.FIRECRAWL:
        return await _scrape_firecrawl(request.url, provider, firecrawl_options)
    return await _scrape_native(request.url, provider, native_options)


async def start_crawl(url: str, manager: CrawlManager) -> CrawlResponse:
    """Start a crawl of the site that ``url`` belongs to.

    Args:
        url: Any http(s) URL on the site
        manager: Crawl manager bound to the Firecrawl provider

    Returns:
        CrawlResponse with the crawl id on success
    """
    if not should_start_crawl(url):
        return CrawlResponse(
            operation="start",
            success=False,
            error=f"Crawling requires an http(s) URL, got: {url}",
        )

    config = build_crawl_request_config(url)
    if config is None:
        return CrawlResponse(operation="start", success=False, error=f"Invalid URL: {url}")

    started = time.perf_counter()
    result = await manager.start(config)
    record_request(
        url=config.url,
        strategy="firecrawl",
        success=result.success,
        operation="crawl_start",
        elapsed_ms=_elapsed_ms(started),
        error=result.error,
    )

    return CrawlResponse(
        operation="start",
        success=result.success,
        crawl_id=result.crawl_id,
        state=result.state.value,
        exclude_paths=list(config.exclude_paths),
        error=result.error,
        error_details=result.classified_error.to_dict() if result.classified_error else None,
    )


async def crawl_status(crawl_id: str, manager: CrawlManager) -> CrawlResponse:
    """Report the progress of a crawl job."""
    started = time.perf_counter()
    result = await manager.status(crawl_id)
    record_request(
        url=crawl_id,
        strategy="firecrawl",
        success=result.success,
        operation="crawl_status",
        elapsed_ms=_elapsed_ms(started),
        error=result.error,
    )

    return CrawlResponse(
        operation="status",
        success=result.success,
        crawl_id=crawl_id,
        state=result.state.value if result.state else None,
        status=result.status,
        total=result.total,
        completed=result.completed,
        credits_used=result.credits_used,
        expires_at=result.expires_at,
        next=result.next,
        data=result.data,
        error=result.error,
        error_details=result.classified_error.to_dict() if result.classified_error else None,
    )


async def cancel_crawl(crawl_id: str, manager: CrawlManager) -> CrawlResponse:
    """Cancel a crawl job."""
    started = time.perf_counter()
    result = await manager.cancel(crawl_id)
    record_request(
        url=crawl_id,
        strategy="firecrawl",
        success=result.success,
        operation="crawl_cancel",
        elapsed_ms=_elapsed_ms(started),
        error=result.error,
    )

    return CrawlResponse(
        operation="cancel",
        success=result.success,
        crawl_id=crawl_id,
        state=result.state.value if result.state else None,
        status=result.status,
        error=result.error,
        error_details=result.classified_error.to_dict() if result.classified_error else None,
    )


async def run_crawl(
    url: str | None = None,
    job_id: str | None = None,
    cancel: bool = False,
    manager: CrawlManager | None = None,
) -> CrawlResponse:
    """Dispatch a crawl tool call to start, status or cancel.

    Exactly one of ``url`` (start) or ``job_id`` (status/cancel) must be set.
    """
    if bool(url) == bool(job_id):
        return CrawlResponse(
            operation="start" if url else "status",
            success=False,
            error='Provide either "url" to start a crawl, or "job_id" to check status/cancel',
        )

    manager = manager or get_crawl_manager()
    operation = "start" if url else ("cancel" if cancel else "status")
    if manager is None:
        return CrawlResponse(
            operation=operation,
            success=False,
            error="Crawling requires Firecrawl, but FIRECRAWL_API_KEY is not configured",
        )

    if url:
        return await start_crawl(url, manager)
    if cancel:
        return await cancel_crawl(job_id or "", manager)
    return await crawl_status(job_id or "", manager)


def _map_links(body: dict[str, Any]) -> list[MapLink]:
    """Normalize map results; older API versions return bare URL strings."""
    raw = body.get("links")
    if not isinstance(raw, list):
        data = body.get("data")
        raw = data.get("links") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return []

    links: list[MapLink] = []
    for item in raw:
        if isinstance(item, str):
            links.append(MapLink(url=item))
        elif isinstance(item, dict) and isinstance(item.get("url"), str):
            title = item.get("title")
            description = item.get("description")
            links.append(
                MapLink(
                    url=item["url"],
                    title=title if isinstance(title, str) else None,
                    description=description if isinstance(description, str) else None,
                )
            )
    return links


async def map_site(
    url: str,
    options: MapOptions | None = None,
    providers: ProviderSet | None = None,
) -> MapResponse:
    """Discover the URLs of a site without scraping them.

    Args:
        url: Any http(s) URL on the site
        options: Discovery options
        providers: Provider set (default: global providers)

    Returns:
        MapResponse with the discovered links or an error
    """
    if not is_http_url(url):
        return MapResponse(
            url=url, success=False, error=f"Mapping requires an http(s) URL, got: {url}"
        )

    providers = providers or get_providers()
    if providers.firecrawl is None:
        return MapResponse(
            url=url,
            success=False,
            error="Mapping requires Firecrawl, but FIRECRAWL_API_KEY is not configured",
        )

    started = time.perf_counter()
    try:
        body = await providers.firecrawl.map_site(url, options)
    except FirecrawlAPIError as e:
        classified = e.classified
        error = classified.user_message
        details: dict[str, Any] | None = {**classified.to_dict(), "raw_error": str(e)}
    except requests.RequestException as e:
        message = str(e) or type(e).__name__
        classified = classify_error(0, message)
        error = classified.user_message
        details = {**classified.to_dict(), "raw_error": message}
    else:
        error = None
        details = None
        if body.get("success") is False:
            reported = body.get("error")
            error = reported if isinstance(reported, str) and reported else "Firecrawl map failed"

    elapsed = _elapsed_ms(started)
    record_request(
        url=url,
        strategy="firecrawl",
        success=error is None,
        operation="map",
        elapsed_ms=elapsed,
        error=error,
    )

    if error is not None:
        logger.warning(f"Map failed for {url}: {error}")
        return MapResponse(url=url, success=False, error=error, error_details=details)

    links = _map_links(body)
    return MapResponse(url=url, success=True, links=links, total=len(links))
