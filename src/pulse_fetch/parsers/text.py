"""Plain-text and fallback parsers."""

from __future__ import annotations

from pulse_fetch.parsers.base import ContentParser, ParsedContent
from pulse_fetch.utils import charset_from_content_type, decode_bytes

TEXT_APPLICATION_TYPES = (
    "application/json",
    "application/xml",
    "application/javascript",
    "application/x-yaml",
)

BINARY_TYPE_PREFIXES = (
    "application/octet-stream",
    "application/zip",
    "image/",
    "audio/",
    "video/",
)


def _as_text(raw: bytes | str, content_type: str) -> str:
    if isinstance(raw, bytes):
        return decode_bytes(raw, content_type)
    return raw


class TextParser(ContentParser):
    """Pass-through parser for textual formats."""

    name = "text"

    def can_handle(self, content_type: str) -> bool:
        """Accept text/*, JSON, XML, JavaScript and YAML media types."""
        return (
            content_type.startswith("text/")
            or content_type in TEXT_APPLICATION_TYPES
            or content_type.endswith("+json")
            or content_type.endswith("+xml")
        )

    def parse(self, raw: bytes | str, content_type: str) -> ParsedContent:
        """Return the body unchanged, decoding bytes with the declared charset.

        Args:
            raw: Body as bytes or decoded text
            content_type: Declared Content-Type

        Returns:
            ParsedContent with the text, its length and any declared charset
        """
        text = _as_text(raw, content_type)
        metadata = {"parser": self.name, "length": len(text)}
        charset = charset_from_content_type(content_type)
        if charset:
            metadata["charset"] = charset
        return ParsedContent(content=text, metadata=metadata)


class FallbackParser(ContentParser):
    """Best-effort decode for content types no other parser claims."""

    name = "fallback"

    def can_handle(self, content_type: str) -> bool:
        """Accept every media type."""
        return True

    def needs_binary(self, content_type: str) -> bool:
        """Binary formats must be read as bytes even though nothing parses them."""
        return content_type.startswith(BINARY_TYPE_PREFIXES)

    def parse(self, raw: bytes | str, content_type: str) -> ParsedContent:
        """Decode the body as text, replacing undecodable bytes.

        Args:
            raw: Body as bytes or decoded text
            content_type: Declared Content-Type

        Returns:
            ParsedContent flagged with ``fallback`` in its metadata
        """
        return ParsedContent(
            content=_as_text(raw, content_type),
            metadata={"parser": self.name, "content_type": content_type, "fallback": True},
        )
