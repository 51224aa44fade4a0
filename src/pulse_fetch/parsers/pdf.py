"""PDF parser backed by pypdf."""

from __future__ import annotations

import io
import logging

import pypdf

from pulse_fetch.parsers.base import ContentParser, ParsedContent
from pulse_fetch.utils import decode_bytes

logger = logging.getLogger(__name__)

# Document info keys copied into metadata, pypdf attribute -> metadata key
_INFO_FIELDS = {
    "title": "title",
    "author": "author",
    "subject": "subject",
    "creator": "creator",
    "producer": "producer",
}


def extract_pdf_text(data: bytes) -> tuple[str, dict[str, object]]:
    """Return the text of every page and the document info of a PDF.

    Raises:
        pypdf.errors.PdfReadError: If the payload is not a readable PDF
    """
    reader = pypdf.PdfReader(io.BytesIO(data))

    pages: list[str] = []
    for page in reader.pages:
        text = page.extract_text() or ""
        if text.strip():
            pages.append(text.strip())

    metadata: dict[str, object] = {"pages": len(reader.pages)}
    info = reader.metadata
    if info is not None:
        for attr, key in _INFO_FIELDS.items():
            value = getattr(info, attr, None)
            if value:
                metadata[key] = str(value)

    return "\n\n".join(pages), metadata


class PDFParser(ContentParser):
    """Parser for ``application/pdf`` payloads."""

    name = "pdf"
    requires_binary = True

    def can_handle(self, content_type: str) -> bool:
        """Accept application/pdf."""
        return content_type == "application/pdf"

    def parse(self, raw: bytes | str, content_type: str) -> ParsedContent:
        """Extract the text of every page and the document info.

        Args:
            raw: PDF payload, normally bytes
            content_type: Declared Content-Type

        Returns:
            ParsedContent with page text joined by blank lines, or a lossy
            decode with ``parse_error`` if the PDF cannot be read
        """
        data = raw.encode("latin-1", errors="replace") if isinstance(raw, str) else raw

        try:
            text, info = extract_pdf_text(data)
        except Exception as e:
            logger.warning(f"PDF parsing failed, falling back to lossy text decode: {e}")
            return ParsedContent(
                content=decode_bytes(data),
                metadata={"parser": self.name, "fallback": True, "parse_error": str(e)},
            )

        return ParsedContent(content=text, metadata={"parser": self.name, **info})
