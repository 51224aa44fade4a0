"""Content parsers that normalize HTML, PDF and text payloads."""

from pulse_fetch.parsers.base import ContentParser, ParsedContent
from pulse_fetch.parsers.factory import ContentParserFactory, default_parser_factory
from pulse_fetch.parsers.html import HTMLParser
from pulse_fetch.parsers.pdf import PDFParser
from pulse_fetch.parsers.text import FallbackParser, TextParser

__all__ = [
    "ContentParser",
    "ParsedContent",
    "ContentParserFactory",
    "default_parser_factory",
    "HTMLParser",
    "PDFParser",
    "TextParser",
    "FallbackParser",
]
