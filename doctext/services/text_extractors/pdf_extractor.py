"""
PDF Text Extractor.

Extracts text from PDF files using pypdf, with pdfplumber and pypdf's
layout mode as fallbacks. Scanned PDFs are rejected, not OCRed.
"""
import io
from typing import List, Optional

import pdfplumber
from pypdf import PdfReader

from .base import BaseTextExtractor, ExtractionMethod
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class PDFExtractor(BaseTextExtractor):
    """Extractor for PDF files."""

    def __init__(self):
        super().__init__("pdf", "PDF")

    def methods(self) -> List[ExtractionMethod]:
        return [
            ExtractionMethod("pypdf", self._extract_plain),
            ExtractionMethod("pdfplumber", self._extract_text_flow),
            ExtractionMethod("pypdf-layout", self._extract_layout),
        ]

    def get_error_message(self) -> str:
        return "PDF has no extractable text (likely scanned or image-only)"

    def page_count(self, file_bytes: bytes) -> Optional[int]:
        try:
            return len(PdfReader(io.BytesIO(file_bytes)).pages)
        except Exception:
            return None

    def _extract_plain(self, file_bytes: bytes) -> str:
        reader = PdfReader(io.BytesIO(file_bytes))
        text_content = ""

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_content += page_text + "\n"

        return text_content

    def _extract_text_flow(self, file_bytes: bytes) -> str:
        # Follows the content stream order and merges nearby glyphs into words
        with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
            pages = [page.extract_text(use_text_flow=True) or "" for page in pdf.pages]
        return "\n".join(pages)

    def _extract_layout(self, file_bytes: bytes) -> str:
        reader = PdfReader(io.BytesIO(file_bytes))
        pages = [page.extract_text(extraction_mode="layout") or "" for page in reader.pages]
        return "\n".join(pages)
