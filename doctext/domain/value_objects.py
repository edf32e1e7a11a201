"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FormatCategory(str, Enum):
    """Document kind a buffer is classified as; selects the extraction strategy."""
    PDF = "pdf"
    MODERN_WORD = "modern_word"
    LEGACY_WORD = "legacy_word"
    MODERN_EXCEL = "modern_excel"
    LEGACY_EXCEL = "legacy_excel"
    PLAIN_TEXT = "plain_text"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class DetectedFormat:
    """
    Format derived from the buffer contents alone.
    
    Both fields are empty strings when sniffing could not recognize the buffer.
    """
    mime_type: str = ""
    extension: str = ""
    
    @property
    def is_unknown(self) -> bool:
        return not self.mime_type and not self.extension


@dataclass(frozen=True)
class FormatSignals:
    """
    Boolean evidence gathered once from declared hints and sniffed content.
    
    The classifier matches these against a fixed priority table instead of
    substring-matching a concatenation of hint strings.
    """
    extension: str
    is_pdf: bool = False
    is_ole_container: bool = False
    is_zip_container: bool = False
    sniffed_extension: str = ""
    is_wordprocessing_markup: bool = False
    is_msword: bool = False
    is_spreadsheet_markup: bool = False
    is_ms_excel: bool = False
    is_image: bool = False
    is_text: bool = False
    is_denied: bool = False


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized text of one document plus the format tag used for labeling."""
    page_content: str
    file_type: str


class AttemptState(str, Enum):
    """Lifecycle of a single extraction method within a fallback chain."""
    NOT_TRIED = "not_tried"
    ATTEMPTED_INVALID = "attempted_invalid"
    ATTEMPTED_ERROR = "attempted_error"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class MethodAttempt:
    """Record of what one extraction method produced."""
    method: str
    state: AttemptState = AttemptState.NOT_TRIED
    text: str = ""
    raw_length: int = 0
    error: Optional[str] = None
    
    @property
    def succeeded(self) -> bool:
        return self.state == AttemptState.SUCCEEDED
