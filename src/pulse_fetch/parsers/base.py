"""Base parser interface for content normalization."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ParsedContent:
    """Normalized text and metadata produced by a parser."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


class ContentParser(ABC):
    """Abstract base class for content-type specific parsers."""

    # Short name recorded in metadata as "parser"
    name: str = "base"

    #: Whether the raw payload must be read as bytes instead of text
    requires_binary: bool = False

    @abstractmethod
    def can_handle(self, content_type: str) -> bool:
        """Check if this parser handles the given media type.

        Args:
            content_type: Lower-cased media type without parameters

        Returns:
            True if this parser should be used
        """
        pass

    @abstractmethod
    def parse(self, raw: bytes | str, content_type: str) -> ParsedContent:
        """Convert a raw payload into normalized content.

        Args:
            raw: Response body as bytes or decoded text
            content_type: Full Content-Type value as declared by the server

        Returns:
            ParsedContent with the normalized text and metadata
        """
        pass
