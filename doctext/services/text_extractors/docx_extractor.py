"""
DOCX Text Extractor.

Extracts text from zip-based Word files (.docx, .docm, .dotx, .dotm) using
python-docx, with docx2txt and a mammoth HTML rendering as fallbacks.
"""
import html
import io
import re
from typing import List

import docx2txt
import mammoth
from docx import Document as DocxDocument

from .base import BaseTextExtractor, ExtractionMethod
from ...core.logging_config import get_logger

logger = get_logger(__name__)

_TAGS = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


class DOCXExtractor(BaseTextExtractor):
    """Extractor for DOCX files."""

    def __init__(self):
        super().__init__("docx", "Word")

    def methods(self) -> List[ExtractionMethod]:
        return [
            ExtractionMethod("python-docx", self._extract_document),
            ExtractionMethod("docx2txt", self._extract_docx2txt),
            ExtractionMethod("mammoth-html", self._extract_html),
        ]

    def get_error_message(self) -> str:
        return "Word document has no extractable text"

    def _extract_document(self, file_bytes: bytes) -> str:
        doc = DocxDocument(io.BytesIO(file_bytes))
        lines = [p.text for p in doc.paragraphs if p.text.strip()]

        # One line per table row, non-empty cells separated by pipes
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

        return "\n".join(lines)

    def _extract_docx2txt(self, file_bytes: bytes) -> str:
        # Also reads headers, footers and text boxes that python-docx skips
        return docx2txt.process(io.BytesIO(file_bytes)) or ""

    def _extract_html(self, file_bytes: bytes) -> str:
        result = mammoth.convert_to_html(io.BytesIO(file_bytes))
        markup = result.value or ""
        text = html.unescape(_TAGS.sub(" ", markup))
        return _WHITESPACE.sub(" ", text).strip()
