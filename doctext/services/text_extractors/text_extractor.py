"""
Plain Text Extractor.

Decodes text-like files (TXT, MD, JSON, CSV) as UTF-8.
"""
from typing import List

from .base import BaseTextExtractor, ExtractionMethod
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class TextExtractor(BaseTextExtractor):
    """Extractor for plain text files."""

    def __init__(self):
        super().__init__("text", "Text")

    def methods(self) -> List[ExtractionMethod]:
        return [ExtractionMethod("utf-8", self._decode)]

    def get_error_message(self) -> str:
        return "Text file is empty"

    def _decode(self, file_bytes: bytes) -> str:
        return file_bytes.decode("utf-8", errors="replace")
