"""Crawl job lifecycle: start, status and cancel on the managed service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import requests

from pulse_fetch.crawl.config import CrawlRequestConfig
from pulse_fetch.errors import ClassifiedError, FirecrawlAPIError, classify_error
from pulse_fetch.providers.firecrawl_provider import DEFAULT_FORMATS, FirecrawlProvider

# Configure logging
logger = logging.getLogger(__name__)

# Depth floor sent to the backend so a crawl always traverses past the landing page
MIN_MAX_DEPTH = 3

# Places the backend has been observed to put the job id, in lookup order
CRAWL_ID_PATHS: tuple[tuple[str, ...], ...] = (
    ("jobId",),
    ("id",),
    ("data", "jobId"),
)


class CrawlState(str, Enum):
    """Lifecycle states of a crawl job."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


# Backend status strings -> lifecycle state
_BACKEND_STATES = {
    "scraping": CrawlState.RUNNING,
    "running": CrawlState.RUNNING,
    "completed": CrawlState.COMPLETED,
    "cancelled": CrawlState.CANCELLED,
    "failed": CrawlState.FAILED,
}


@dataclass
class CrawlStartResult:
    """Outcome of starting a crawl job."""

    success: bool
    crawl_id: str | None = None
    error: str | None = None
    classified_error: ClassifiedError | None = None

    @property
    def state(self) -> CrawlState:
        return CrawlState.RUNNING if self.success else CrawlState.NOT_STARTED


@dataclass
class CrawlStatusResult:
    """Progress report for a crawl job."""

    success: bool
    crawl_id: str
    state: CrawlState | None = None
    status: str | None = None
    total: int = 0
    completed: int = 0
    credits_used: int | None = None
    expires_at: str | None = None
    next: str | None = None
    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    classified_error: ClassifiedError | None = None


@dataclass
class CrawlCancelResult:
    """Outcome of cancelling a crawl job."""

    success: bool
    crawl_id: str
    state: CrawlState | None = None
    status: str | None = None
    error: str | None = None
    classified_error: ClassifiedError | None = None


def extract_crawl_id(body: dict[str, Any]) -> str | None:
    """Find the job id in a crawl-start response.

    The field has moved between API versions, so each known location is
    tried in order and the first non-empty value wins.
    """
    for path in CRAWL_ID_PATHS:
        value: Any = body
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if value:
            return str(value)
    return None


def build_crawl_payload(
    config: CrawlRequestConfig, formats: tuple[str, ...] = DEFAULT_FORMATS
) -> dict[str, Any]:
    """Render the ``POST /v2/crawl`` body for a crawl config.

    ``maxDepth`` is never sent below MIN_MAX_DEPTH.
    """
    return {
        "url": config.url,
        "maxDepth": max(config.max_depth, MIN_MAX_DEPTH),
        "changeDetection": config.change_detection,
        "excludePaths": list(config.exclude_paths),
        "scrapeOptions": {"formats": list(formats)},
    }


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or_none(value: Any) -> int | None:
    # bool is an int subclass but never a count
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _int_or_zero(value: Any) -> int:
    return _int_or_none(value) or 0


def state_from_status(status: str | None) -> CrawlState | None:
    """Map a backend status string to a lifecycle state."""
    if not status:
        return None
    return _BACKEND_STATES.get(status.lower())


def _describe_failure(e: Exception) -> tuple[str, ClassifiedError]:
    """Turn a client exception into an error string and classification."""
    if isinstance(e, FirecrawlAPIError):
        classified = e.classified
        detail = f" - {classified.message}" if classified.message else ""
        return f"Firecrawl {e.operation} error: {e.status_code}{detail}", classified

    message = str(e) or type(e).__name__
    return message, classify_error(0, message)


class CrawlManager:
    """Starts and tracks crawl jobs on the managed service.

    The manager holds no job state; jobs are referenced by the opaque id
    returned from :meth:`start`. Polling is left to the caller.
    """

    def __init__(self, provider: FirecrawlProvider) -> None:
        """Initialize the crawl manager.

        Args:
            provider: Firecrawl provider that owns the crawl endpoints
        """
        self.provider = provider

    async def start(self, config: CrawlRequestConfig) -> CrawlStartResult:
        """Start a crawl job.

        Args:
            config: Crawl configuration from build_crawl_request_config

        Returns:
            CrawlStartResult with the backend job id on success
        """
        payload = build_crawl_payload(config)
        logger.info(
            f"Starting crawl of {config.url} (maxDepth={payload['maxDepth']}, "
            f"{len(payload['excludePaths'])} excluded paths)"
        )

        try:
            body = await self.provider.start_crawl(payload)
        except (FirecrawlAPIError, requests.RequestException) as e:
            error, classified = _describe_failure(e)
            logger.warning(f"Crawl start failed for {config.url}: {error}")
            return CrawlStartResult(success=False, error=error, classified_error=classified)

        crawl_id = extract_crawl_id(body)
        if body.get("success") is False:
            return CrawlStartResult(
                success=False,
                crawl_id=crawl_id,
                error=_str_or_none(body.get("error")) or "Firecrawl crawl failed to start",
            )

        if crawl_id is None:
            return CrawlStartResult(
                success=False, error="Firecrawl crawl response did not include a job id"
            )

        logger.info(f"Crawl started for {config.url}: {crawl_id}")
        return CrawlStartResult(
            success=True, crawl_id=crawl_id, error=_str_or_none(body.get("error"))
        )

    async def status(self, crawl_id: str) -> CrawlStatusResult:
        """Fetch the current status of a crawl job.

        Args:
            crawl_id: Job id returned by start

        Returns:
            CrawlStatusResult with progress and any pages collected so far
        """
        try:
            body = await self.provider.get_crawl_status(crawl_id)
        except (FirecrawlAPIError, requests.RequestException) as e:
            error, classified = _describe_failure(e)
            logger.warning(f"Crawl status failed for {crawl_id}: {error}")
            return CrawlStatusResult(
                success=False, crawl_id=crawl_id, error=error, classified_error=classified
            )

        status = _str_or_none(body.get("status"))
        pages = body.get("data")
        if not isinstance(pages, list):
            pages = []
        return CrawlStatusResult(
            success=body.get("success") is not False,
            crawl_id=crawl_id,
            state=state_from_status(status),
            status=status,
            total=_int_or_zero(body.get("total")),
            completed=_int_or_zero(body.get("completed")),
            credits_used=_int_or_none(body.get("creditsUsed")),
            expires_at=_str_or_none(body.get("expiresAt")),
            next=_str_or_none(body.get("next")),
            data=[page for page in pages if isinstance(page, dict)],
            error=_str_or_none(body.get("error")),
        )

    async def cancel(self, crawl_id: str) -> CrawlCancelResult:
        """Cancel a running crawl job.

        Args:
            crawl_id: Job id returned by start

        Returns:
            CrawlCancelResult with the backend's reported status
        """
        try:
            body = await self.provider.cancel_crawl(crawl_id)
        except (FirecrawlAPIError, requests.RequestException) as e:
            error, classified = _describe_failure(e)
            logger.warning(f"Crawl cancel failed for {crawl_id}: {error}")
            return CrawlCancelResult(
                success=False, crawl_id=crawl_id, error=error, classified_error=classified
            )

        status = _str_or_none(body.get("status")) or "cancelled"
        logger.info(f"Crawl {crawl_id} cancel requested: {status}")
        return CrawlCancelResult(
            success=body.get("success") is not False,
            crawl_id=crawl_id,
            state=state_from_status(status),
            status=status,
            error=_str_or_none(body.get("error")),
        )
