"""Pytest configuration and fixtures for pulse-fetch tests."""

from __future__ import annotations

import io
import json
from typing import Any
from unittest.mock import Mock

import pypdf
import pytest
import requests

from pulse_fetch import metrics


@pytest.fixture(autouse=True)
def fresh_metrics() -> None:
    """Start every test with empty global metrics."""
    metrics.reset_metrics()


@pytest.fixture
def sample_html() -> str:
    """Sample HTML for testing."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="A sample page for testing">
        <meta property="og:title" content="Sample Page">
        <title>Test Page Title</title>
        <script>console.log('should be stripped');</script>
        <style>.test { color: red; }</style>
    </head>
    <body>
        <h1>Main Heading</h1>
        <p>This is a <strong>sample</strong> paragraph with <em>formatting</em>.</p>
        <h2>Subheading</h2>
        <ul>
            <li><a href="https://example.com">Example Link</a></li>
            <li><a href="/relative" title="Relative Link">Relative</a></li>
        </ul>
        <noscript>No JavaScript content</noscript>
    </body>
    </html>
    """


@pytest.fixture
def pdf_bytes() -> bytes:
    """A one-page PDF with document info."""
    writer = pypdf.PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Title": "Quarterly Report", "/Author": "Docs Team"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def make_response(
    status_code: int = 200,
    body: Any = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
    content: bytes | None = None,
    reason: str = "OK",
) -> Mock:
    """Build a mock requests.Response.

    ``body`` is served from .json(); ``text`` defaults to its JSON encoding.
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.headers = headers or {}

    if text is None:
        text = json.dumps(body) if body is not None else ""
    response.text = text
    response.content = content if content is not None else text.encode("utf-8")

    if body is not None:
        response.json.return_value = body
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")

    return response


@pytest.fixture
def response_factory():
    """Factory fixture for mock HTTP responses."""
    return make_response
