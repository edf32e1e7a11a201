"""Plain-text extraction from PDF, Word, Excel and text buffers for vectorization."""

__version__ = "1.0.0"

from .api.exceptions import (
    ExtractionExhaustedError,
    TextExtractionError,
    UnsupportedFormatError,
)
from .domain.value_objects import ExtractionResult, FormatCategory
from .services.text_extractors import classify, extract_text, validate_extraction_result
from .utils import is_valid_text, normalize_text

__all__ = [
    "__version__",
    "ExtractionExhaustedError",
    "ExtractionResult",
    "FormatCategory",
    "TextExtractionError",
    "UnsupportedFormatError",
    "classify",
    "extract_text",
    "is_valid_text",
    "normalize_text",
    "validate_extraction_result",
]
