"""Pydantic models for scrape requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from pulse_fetch.utils import is_http_url


class ScrapeRequest(BaseModel):
    """A single URL to scrape."""

    url: str = Field(description="The URL to scrape (must be http:// or https://)")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        value = value.strip()
        if not is_http_url(value):
            raise ValueError(f"URL must be an absolute http(s) URL: {value!r}")
        return value


class ScrapeResponse(BaseModel):
    """Response model for scrape operations."""

    url: str = Field(description="The URL that was requested")
    strategy: str = Field(description="Backend strategy that handled the request")
    success: bool = Field(description="Whether the scrape was successful")
    content: str | None = Field(default=None, description="Normalized page content")
    markdown: str | None = Field(default=None, description="Markdown rendering (managed service only)")
    html: str | None = Field(default=None, description="HTML rendering (managed service only)")
    extract: Any = Field(default=None, description="Structured extraction output, if requested")
    status_code: int | None = Field(default=None, description="HTTP status code (native only)")
    content_type: str | None = Field(default=None, description="Content-Type header value (native only)")
    content_length: int | None = Field(default=None, description="Size of the raw body (native only)")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Additional metadata from the scrape")
    error: str | None = Field(default=None, description="Error message if failed")
    error_details: dict[str, Any] | None = Field(
        default=None, description="Classified error with retry guidance, if available"
    )
