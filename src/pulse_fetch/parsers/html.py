"""HTML parser: converts pages to Markdown with page metadata."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup
from markdownify import markdownify

from pulse_fetch.parsers.base import ContentParser, ParsedContent
from pulse_fetch.utils import decode_bytes

logger = logging.getLogger(__name__)

DEFAULT_STRIP_TAGS = ["script", "style", "noscript", "meta", "link"]

_BLANK_LINES = re.compile(r"\n{3,}")


def html_to_markdown(html: str, strip_tags: list[str] | None = None) -> str:
    """Convert HTML to markdown format.

    Args:
        html: The HTML content to convert
        strip_tags: List of HTML tags to strip (default: script, style, noscript, meta, link)

    Returns:
        Markdown formatted text
    """
    soup = BeautifulSoup(html, "lxml")

    tags_to_strip = strip_tags if strip_tags is not None else DEFAULT_STRIP_TAGS
    for tag in tags_to_strip:
        for element in soup.find_all(tag):
            element.decompose()

    # Title is reported as metadata, keep it out of the body text
    if soup.title:
        soup.title.decompose()

    markdown = markdownify(str(soup), heading_style="ATX")
    return _BLANK_LINES.sub("\n\n", markdown).strip()


def extract_metadata(html: str) -> dict[str, str]:
    """Extract metadata from HTML (title, description, etc.).

    Args:
        html: The HTML content to process

    Returns:
        Dictionary containing metadata
    """
    soup = BeautifulSoup(html, "lxml")
    metadata: dict[str, str] = {}

    if soup.title and soup.title.string:
        metadata["title"] = soup.title.string.strip()

    html_tag = soup.find("html")
    if html_tag is not None and html_tag.get("lang"):
        metadata["language"] = html_tag["lang"]

    for meta in soup.find_all("meta"):
        name = meta.get("name") or meta.get("property")
        content = meta.get("content")

        if name and content:
            metadata[name] = content

    return metadata


class HTMLParser(ContentParser):
    """Parser for HTML and XHTML documents."""

    name = "html"

    def can_handle(self, content_type: str) -> bool:
        """Accept HTML and XHTML media types."""
        return content_type in ("text/html", "application/xhtml+xml")

    def parse(self, raw: bytes | str, content_type: str) -> ParsedContent:
        """Convert an HTML page to Markdown and collect its metadata.

        Args:
            raw: Page body as bytes or decoded text
            content_type: Declared Content-Type, used for the charset

        Returns:
            ParsedContent with Markdown text, or the raw markup with
            ``parse_error`` if conversion fails
        """
        html = decode_bytes(raw, content_type) if isinstance(raw, bytes) else raw

        try:
            markdown = html_to_markdown(html)
            page_metadata = extract_metadata(html)
        except Exception as e:
            logger.warning(f"HTML parsing failed, returning raw markup: {e}")
            return ParsedContent(
                content=html,
                metadata={"parser": self.name, "fallback": True, "parse_error": str(e)},
            )

        metadata: dict[str, object] = {"parser": self.name, **page_metadata}
        return ParsedContent(content=markdown, metadata=metadata)
