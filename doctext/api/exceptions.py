"""
Custom exceptions for text extraction.
Separates extraction outcomes from HTTP exceptions.

Every ``TextExtractionError`` means the file is not vectorizable. Both
subclasses are deterministic for a given buffer, so callers must not retry them.
"""
from typing import Iterable, List, Optional, Sequence

from fastapi import HTTPException, status

from ..domain.value_objects import AttemptState, MethodAttempt


class TextExtractionError(Exception):
    """Base exception: the file cannot be turned into usable text."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnsupportedFormatError(TextExtractionError):
    """Raised when a buffer is classified into a category with no extraction strategy."""

    def __init__(
        self,
        reason: str,
        extension: str = "",
        supported_extensions: Iterable[str] = (),
    ):
        super().__init__(reason)
        self.extension = extension
        self.supported_extensions: List[str] = sorted(supported_extensions)


class ExtractionExhaustedError(TextExtractionError):
    """
    Raised when every fallback method of a strategy ran without valid text.

    Carries the attempt log, the page count when the format knows one, and a
    truncated sample of the longest raw output for logging.
    """

    def __init__(
        self,
        reason: str,
        format_name: str = "",
        attempts: Sequence[MethodAttempt] = (),
        page_count: Optional[int] = None,
        sample: str = "",
    ):
        super().__init__(reason)
        self.format_name = format_name
        self.attempts: List[MethodAttempt] = list(attempts)
        self.page_count = page_count
        self.sample = sample

    @property
    def last_error(self) -> Optional[str]:
        """Message of the last method that raised, if any did."""
        for attempt in reversed(self.attempts):
            if attempt.state == AttemptState.ATTEMPTED_ERROR:
                return attempt.error
        return None


class UnsupportedContainerError(Exception):
    """
    Raised by an extraction method that has no way to read this container type.

    Only ever recorded as a failed attempt; the next method in the chain runs.
    """
    pass


def is_retryable(e: Exception) -> bool:
    """Extraction failures are deterministic given the same buffer."""
    return not isinstance(e, TextExtractionError)


def handle_extraction_exception(e: Exception) -> HTTPException:
    """
    Convert extraction exceptions to HTTP exceptions.
    This keeps extraction logic clean of HTTP concerns.
    """
    if isinstance(e, UnsupportedFormatError):
        return HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))
    elif isinstance(e, ExtractionExhaustedError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    elif isinstance(e, TextExtractionError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
