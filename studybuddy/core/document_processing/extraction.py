"""
PDF text extraction.

Turns raw uploaded PDF bytes into plain text plus a page count using pypdf.
Pages whose text cannot be extracted are skipped; a document that yields
no text at all is rejected.

Dependencies: pypdf
System role: Extraction stage of document ingestion pipeline
"""

import io
import logging
from typing import Protocol

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from studybuddy.core.document_processing.models import ExtractedText
from studybuddy.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    """Anything that can turn raw document bytes into text."""

    def extract(self, raw_bytes: bytes) -> ExtractedText: ...


class PdfTextExtractor:
    """Extract text and page count from PDF bytes."""

    def extract(self, raw_bytes: bytes) -> ExtractedText:
        """
        Extract text from every page of a PDF.

        Args:
            raw_bytes: PDF file contents

        Returns:
            ExtractedText: Page texts joined by newlines, and the page count

        Raises:
            ExtractionError: Empty input, unreadable PDF, or no extractable text
        """
        if not raw_bytes:
            raise ExtractionError("Document is empty")

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
            pages = list(reader.pages)
        except (PyPdfError, ValueError, OSError) as e:
            raise ExtractionError(
                f"Failed to load PDF document: {e}",
                details={"byte_size": len(raw_bytes)},
            ) from e

        parts: list[str] = []
        for page_number, page in enumerate(pages, start=1):
            try:
                page_text = page.extract_text() or ""
            except (PyPdfError, ValueError, KeyError) as e:
                logger.warning(
                    f"{__name__}:extract - Skipping unreadable page",
                    extra={"page": page_number, "error": str(e)},
                )
                continue
            parts.append(page_text)

        text = "\n".join(parts).strip()
        if not text:
            raise ExtractionError(
                "PDF document contains no extractable text",
                details={"page_count": len(pages)},
            )

        return ExtractedText(text=text, page_count=len(pages))
