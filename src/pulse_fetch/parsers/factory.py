"""Content-type routing to the registered parsers."""

from __future__ import annotations

import logging

from pulse_fetch.parsers.base import ContentParser, ParsedContent
from pulse_fetch.parsers.html import HTMLParser
from pulse_fetch.parsers.pdf import PDFParser
from pulse_fetch.parsers.text import FallbackParser, TextParser
from pulse_fetch.utils import DEFAULT_CONTENT_TYPE, decode_bytes, media_type

logger = logging.getLogger(__name__)


class ContentParserFactory:
    """Routes raw payloads to a parser based on the declared content type.

    Parsers are consulted in registration order; the fallback parser always
    comes last and accepts anything.
    """

    def __init__(self, parsers: list[ContentParser] | None = None) -> None:
        """Initialize the factory.

        Args:
            parsers: Parsers to consult before the fallback
                     (default: HTML, PDF, plain text)
        """
        if parsers is None:
            parsers = [HTMLParser(), PDFParser(), TextParser()]
        self.fallback = FallbackParser()
        self.parsers: list[ContentParser] = [*parsers, self.fallback]

    def get_parser(self, content_type: str | None) -> ContentParser:
        """Find the first parser that handles a content type."""
        kind = media_type(content_type)
        for parser in self.parsers:
            if parser.can_handle(kind):
                return parser
        return self.fallback

    def requires_binary_handling(self, content_type: str | None) -> bool:
        """Check whether a response body must be read as bytes.

        Must be asked before the body is read, since a response stream can
        be consumed either as text or as bytes but not both.
        """
        kind = media_type(content_type)
        parser = self.get_parser(kind)
        if parser is self.fallback:
            return self.fallback.needs_binary(kind)
        return parser.requires_binary

    def parse(self, raw: bytes | str, content_type: str | None) -> ParsedContent:
        """Parse a payload with the parser registered for its content type.

        Never raises: a failing parser degrades to a plain decode.

        Args:
            raw: Response body as bytes or text
            content_type: Declared Content-Type (default: text/plain)

        Returns:
            ParsedContent with normalized text and metadata
        """
        content_type = content_type or DEFAULT_CONTENT_TYPE
        parser = self.get_parser(content_type)

        try:
            parsed = parser.parse(raw, content_type)
        except Exception as e:
            logger.warning(f"{parser.name} parser failed for {content_type}: {e}")
            text = decode_bytes(raw, content_type) if isinstance(raw, bytes) else raw
            return ParsedContent(
                content=text,
                metadata={"parser": parser.name, "fallback": True, "parse_error": str(e)},
            )

        if parsed.content is None:
            parsed.content = ""
        return parsed


# Shared default instance; parsers hold no state
default_parser_factory = ContentParserFactory()
