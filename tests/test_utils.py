"""Tests for URL helpers and request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pulse_fetch.models.crawl import CrawlResponse
from pulse_fetch.models.scrape import ScrapeRequest
from pulse_fetch.utils import is_http_url


class TestIsHttpUrl:
    """Tests for is_http_url."""

    @pytest.mark.parametrize(
        "url",
        ["http://example.com", "https://example.com/path?q=1#frag", "https://localhost:8080"],
    )
    def test_valid(self, url: str) -> None:
        assert is_http_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com",
            "javascript:alert('test')",
            "data:text/html,<h1>Test</h1>",
            "https://",
            "example.com",
            "",
        ],
    )
    def test_invalid(self, url: str) -> None:
        assert is_http_url(url) is False


class TestScrapeRequest:
    """Tests for ScrapeRequest validation."""

    def test_strips_whitespace(self) -> None:
        assert ScrapeRequest(url="  https://example.com/a  ").url == "https://example.com/a"

    @pytest.mark.parametrize("url", ["file:///etc/passwd", "not a url", ""])
    def test_rejects(self, url: str) -> None:
        with pytest.raises(ValidationError):
            ScrapeRequest(url=url)


class TestCrawlResponse:
    """Tests for CrawlResponse defaults."""

    def test_defaults(self) -> None:
        response = CrawlResponse(operation="status", success=False, error="nope")

        assert response.crawl_id is None
        assert response.data == []
        assert response.exclude_paths is None
