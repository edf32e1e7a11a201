"""
Text Extractor Factory.

Routes a classified buffer to the extractor for its FormatCategory.
This is the entry point consumed by the controller layer.
"""
from typing import Dict, List, Optional

from .base import BaseTextExtractor
from .classifier import SUPPORTED_EXTENSIONS, classify, get_extension
from .doc_extractor import DOCExtractor
from .docx_extractor import DOCXExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor
from .xls_extractor import XLSExtractor
from .xlsx_extractor import XLSXExtractor
from ...api.exceptions import ExtractionExhaustedError, UnsupportedFormatError
from ...core.config import DIAGNOSTIC_SAMPLE_CHARS
from ...core.logging_config import get_logger
from ...domain.value_objects import ExtractionResult, FormatCategory
from ...utils.text_validity import is_valid_text

logger = get_logger(__name__)


class TextExtractorFactory:
    """
    Registry of extractors keyed by FormatCategory.

    Extractors are stateless, so one instance per category is shared by
    every call, including concurrent ones.
    """

    _extractors: Dict[FormatCategory, BaseTextExtractor] = {}
    _initialized = False

    @classmethod
    def _initialize(cls):
        """Initialize default extractors."""
        if cls._initialized:
            return

        cls.register(FormatCategory.PDF, PDFExtractor(), skip_init=True)
        cls.register(FormatCategory.MODERN_WORD, DOCXExtractor(), skip_init=True)
        cls.register(FormatCategory.LEGACY_WORD, DOCExtractor(), skip_init=True)
        cls.register(FormatCategory.MODERN_EXCEL, XLSXExtractor(), skip_init=True)
        cls.register(FormatCategory.LEGACY_EXCEL, XLSExtractor(), skip_init=True)
        cls.register(FormatCategory.PLAIN_TEXT, TextExtractor(), skip_init=True)

        cls._initialized = True
        logger.debug(f"TextExtractorFactory initialized with {len(cls._extractors)} extractors")

    @classmethod
    def register(cls, category: FormatCategory, extractor: BaseTextExtractor, skip_init: bool = False):
        """
        Register a text extractor for a format category.

        Args:
            category: Category routed to the extractor
            extractor: Text extractor instance to register
            skip_init: If True, skip initialization check (used internally)
        """
        if not skip_init:
            cls._initialize()

        if category in cls._extractors:
            logger.warning(f"Overriding existing extractor for {category.value}")

        cls._extractors[category] = extractor

    @classmethod
    def get_extractor(cls, category: FormatCategory) -> Optional[BaseTextExtractor]:
        """
        Get extractor for a format category.

        Returns:
            Text extractor instance or None for Image and Unsupported
        """
        cls._initialize()
        return cls._extractors.get(category)

    @classmethod
    def get_supported_extensions(cls) -> List[str]:
        """
        Get list of supported file extensions.

        Returns:
            Sorted list of extensions without the leading dot
        """
        return sorted(SUPPORTED_EXTENSIONS)

    @classmethod
    def extract_text(cls, file_bytes: bytes, mime_type: str, file_name: str) -> ExtractionResult:
        """
        Extract text from a buffer using the extractor its format calls for.

        Args:
            file_bytes: File content as bytes
            mime_type: MIME type declared by the storage provider
            file_name: File name declared by the storage provider

        Returns:
            ExtractionResult whose text passed the validity judge

        Raises:
            UnsupportedFormatError: If the format has no extraction strategy
            ExtractionExhaustedError: If every method for the format failed
        """
        category = classify(file_bytes, mime_type, file_name)
        file_ext = get_extension(file_name)

        if category == FormatCategory.IMAGE:
            logger.info(f"Image file is not vectorizable without OCR: {file_name}")
            raise UnsupportedFormatError(
                f"Image file '{file_name}' cannot be vectorized without OCR",
                extension=file_ext,
                supported_extensions=SUPPORTED_EXTENSIONS,
            )

        extractor = cls.get_extractor(category)
        if extractor is None:
            shown_ext = f".{file_ext}" if file_ext else "(none)"
            error_message = (
                f"File format '{shown_ext}' ({mime_type or 'unknown MIME type'}) "
                f"is not supported for text extraction. "
                f"Supported extensions: {', '.join(cls.get_supported_extensions())}"
            )
            logger.warning(f"Unsupported file format attempted: {file_name} (extension: {shown_ext})")
            raise UnsupportedFormatError(
                error_message,
                extension=file_ext,
                supported_extensions=SUPPORTED_EXTENSIONS,
            )

        try:
            result = extractor.extract(file_bytes)
        except ExtractionExhaustedError as e:
            logger.info(
                f"No extractable text in {file_name} ({extractor.format_name}): {e.reason}; "
                f"pages={e.page_count}, sample={e.sample[:80]!r}"
            )
            raise

        logger.info(
            f"Successfully extracted {len(result.page_content)} characters "
            f"from {file_name} ({extractor.format_name})"
        )
        return result


def extract_text(file_bytes: bytes, mime_type: str, file_name: str) -> ExtractionResult:
    """Module-level shortcut for ``TextExtractorFactory.extract_text``."""
    return TextExtractorFactory.extract_text(file_bytes, mime_type, file_name)


def validate_extraction_result(result: ExtractionResult) -> None:
    """
    Check a result built outside the extraction path.

    Raises:
        ExtractionExhaustedError: If the result's text fails the validity judge
    """
    if not is_valid_text(result.page_content or ""):
        raise ExtractionExhaustedError(
            "Could not extract text from the file",
            format_name=result.file_type,
            sample=(result.page_content or "")[:DIAGNOSTIC_SAMPLE_CHARS],
        )
