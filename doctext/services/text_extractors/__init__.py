"""
Text Extractors Module - Modular file format handlers.

This module provides a plug-and-play architecture for text extraction
from document buffers using the Strategy pattern: the classifier picks a
FormatCategory, the factory routes it to an extractor, and each extractor
walks its own ordered fallback chain of extraction methods.

To add support for a new file format:
1. Create a new extractor class inheriting from BaseTextExtractor
2. Implement methods() returning its ExtractionMethods in priority order
3. Register it in TextExtractorFactory
"""
from .base import BaseTextExtractor, ExtractionMethod
from .classifier import classify, sniff_format
from .doc_extractor import DOCExtractor, RawScanOptions
from .docx_extractor import DOCXExtractor
from .factory import TextExtractorFactory, extract_text, validate_extraction_result
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor
from .xls_extractor import XLSExtractor
from .xlsx_extractor import XLSXExtractor

__all__ = [
    "BaseTextExtractor",
    "DOCExtractor",
    "DOCXExtractor",
    "ExtractionMethod",
    "PDFExtractor",
    "RawScanOptions",
    "TextExtractor",
    "TextExtractorFactory",
    "XLSExtractor",
    "XLSXExtractor",
    "classify",
    "extract_text",
    "sniff_format",
    "validate_extraction_result",
]
