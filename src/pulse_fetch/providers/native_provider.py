"""Direct-fetch scraper provider using the requests library."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

import requests

from pulse_fetch.parsers import ContentParserFactory, default_parser_factory
from pulse_fetch.providers.base import ScraperProvider
from pulse_fetch.utils import DEFAULT_CONTENT_TYPE

# Configure logging
logger = logging.getLogger(__name__)

TIMEOUT_ERROR = "Request timeout"

DEFAULT_HEADERS = MappingProxyType(
    {
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Cache-Control": "no-cache",
    }
)


@dataclass(frozen=True)
class NativeScrapeOptions:
    """Options for a direct HTTP fetch.

    Attributes:
        timeout: Overall timeout in seconds (None = provider default)
        headers: Headers merged over the default header set
        method: HTTP method, GET or POST
        body: Optional request body for POST
    """

    timeout: float | None = None
    headers: dict[str, str] = field(default_factory=dict)
    method: Literal["GET", "POST"] = "GET"
    body: str | None = None


@dataclass
class NativeScrapeResult:
    """Result from a direct HTTP fetch."""

    success: bool
    data: str | None = None
    error: str | None = None
    status_code: int | None = None
    headers: dict[str, str] | None = None
    content_type: str | None = None
    content_length: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class NativeProvider(ScraperProvider):
    """Scraper that issues a single plain HTTP request.

    Fastest option, but does not render JavaScript or get past bot
    protection. Suitable for static pages only.
    """

    name = "native"

    def __init__(
        self,
        timeout: float | None = 30.0,
        parser_factory: ContentParserFactory | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the native provider.

        Args:
            timeout: Default request timeout in seconds (None = no timeout)
            parser_factory: Parser registry (default: shared HTML/PDF/text registry)
            session: requests session to reuse (default: new session)
        """
        self.timeout = timeout
        self.parser_factory = parser_factory or default_parser_factory
        self.session = session or requests.Session()
        logger.info(f"NativeProvider initialized (timeout={timeout}s)")

    def _fetch(self, url: str, options: NativeScrapeOptions, timeout: float | None) -> NativeScrapeResult:
        """Blocking request and body handling, run in a worker thread."""
        headers = {**DEFAULT_HEADERS, **options.headers}

        # stream=True defers reading the body until we know how to read it
        response = self.session.request(
            options.method,
            url,
            headers=headers,
            data=options.body,
            timeout=timeout,
            stream=True,
        )
        try:
            response_headers = dict(response.headers)

            if not 200 <= response.status_code < 300:
                return NativeScrapeResult(
                    success=False,
                    error=f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    headers=response_headers,
                )

            content_type = response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE

            if self.parser_factory.requires_binary_handling(content_type):
                raw: bytes | str = response.content
            else:
                raw = response.text

            parsed = self.parser_factory.parse(raw, content_type)

            return NativeScrapeResult(
                success=True,
                data=parsed.content,
                status_code=response.status_code,
                headers=response_headers,
                content_type=content_type,
                content_length=len(raw),
                metadata=parsed.metadata,
            )
        finally:
            response.close()

    async def scrape(self, url: str, options: NativeScrapeOptions | None = None) -> NativeScrapeResult:
        """Fetch a URL and parse the body according to its content type.

        The timeout covers the whole call: when it fires the pending request
        is abandoned and a "Request timeout" result is returned. The worker
        thread is not interrupted; it stays busy until requests' own connect
        or read timeout (the same value, applied per socket operation) ends it.

        Args:
            url: The URL to scrape
            options: Fetch options (default: GET with default headers)

        Returns:
            NativeScrapeResult; failures are reported with success=False
        """
        options = options or NativeScrapeOptions()
        timeout = options.timeout if options.timeout is not None else self.timeout

        logger.debug(f"Native {options.method} {url} (timeout={timeout}s)")

        loop = asyncio.get_running_loop()
        request = loop.run_in_executor(None, self._fetch, url, options, timeout)

        try:
            return await asyncio.wait_for(request, timeout=timeout)
        except (asyncio.TimeoutError, requests.Timeout):
            logger.debug(f"Native fetch timed out after {timeout}s: {url}")
            return NativeScrapeResult(success=False, error=TIMEOUT_ERROR)
        except requests.RequestException as e:
            logger.debug(f"Native fetch failed for {url}: {e}")
            return NativeScrapeResult(success=False, error=str(e) or type(e).__name__)
        except Exception as e:
            logger.error(f"Unexpected native fetch error for {url}: {type(e).__name__}: {e}")
            return NativeScrapeResult(success=False, error=f"{type(e).__name__}: {e}")
