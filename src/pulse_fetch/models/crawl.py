"""Pydantic models for crawl job operations."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CrawlResponse(BaseModel):
    """Response model for crawl start, status and cancel operations."""

    operation: Literal["start", "status", "cancel"] = Field(description="Operation performed")
    success: bool = Field(description="Whether the operation was successful")
    crawl_id: str | None = Field(default=None, description="Crawl job id")
    state: str | None = Field(default=None, description="Lifecycle state of the job")
    status: str | None = Field(default=None, description="Raw backend status")
    total: int | None = Field(default=None, description="Pages discovered so far")
    completed: int | None = Field(default=None, description="Pages scraped so far")
    credits_used: int | None = Field(default=None, description="Backend credits consumed")
    expires_at: str | None = Field(default=None, description="When the job results expire")
    next: str | None = Field(default=None, description="Pagination URL for more results")
    data: list[dict[str, Any]] = Field(default_factory=list, description="Pages collected so far")
    exclude_paths: list[str] | None = Field(
        default=None, description="Path patterns excluded from the crawl (start only)"
    )
    error: str | None = Field(default=None, description="Error message if failed")
    error_details: dict[str, Any] | None = Field(
        default=None, description="Classified error with retry guidance, if available"
    )
