"""Pydantic models for site URL discovery."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MapLink(BaseModel):
    """A URL discovered on the site."""

    url: str = Field(description="Discovered URL")
    title: str | None = Field(default=None, description="Page title, if known")
    description: str | None = Field(default=None, description="Page description, if known")


class MapResponse(BaseModel):
    """Response model for map operations."""

    url: str = Field(description="The site URL that was mapped")
    success: bool = Field(description="Whether the map was successful")
    links: list[MapLink] = Field(default_factory=list, description="Discovered URLs")
    total: int = Field(default=0, description="Number of discovered URLs")
    error: str | None = Field(default=None, description="Error message if failed")
    error_details: dict[str, Any] | None = Field(
        default=None, description="Classified error with retry guidance, if available"
    )
