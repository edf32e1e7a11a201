"""
Base Text Extractor Interface.

Every strategy inherits from BaseTextExtractor and declares an ordered
list of extraction methods. The base class runs them as a fallback chain:
each method's output is normalized and judged, the first valid text wins,
and exhaustion raises ExtractionExhaustedError.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, NamedTuple, Optional

from ...api.exceptions import ExtractionExhaustedError
from ...core.config import DIAGNOSTIC_SAMPLE_CHARS
from ...core.logging_config import get_logger
from ...domain.value_objects import AttemptState, ExtractionResult, MethodAttempt
from ...utils.text_normalizer import normalize_text
from ...utils.text_validity import is_valid_text

logger = get_logger(__name__)


class ExtractionMethod(NamedTuple):
    """A named way of turning a buffer into raw text."""
    name: str
    extract: Callable[[bytes], str]


class BaseTextExtractor(ABC):
    """
    Abstract base class for text extractors.

    Subclasses are stateless: every method receives the original buffer and
    builds its own parser objects, so a failed attempt leaves nothing behind
    for the next one.
    """

    def __init__(self, file_type: str, format_name: str):
        """
        Initialize the extractor.

        Args:
            file_type: Format tag attached to results (e.g., 'pdf', 'docx')
            format_name: Human-readable format name (e.g., 'PDF', 'Word')
        """
        self.file_type = file_type
        self.format_name = format_name

    @abstractmethod
    def methods(self) -> List[ExtractionMethod]:
        """
        Extraction methods in priority order.

        Returns:
            Ordered list of methods to try
        """
        pass

    def get_error_message(self) -> str:
        """
        Get the reason reported when every method failed.

        Returns:
            Human-readable reason
        """
        return f"{self.format_name} file has no extractable text"

    def page_count(self, file_bytes: bytes) -> Optional[int]:
        """
        Page count reported with exhaustion errors, when the format has pages.

        Override in paged formats. Must not raise.
        """
        return None

    def attempt(self, method: ExtractionMethod, file_bytes: bytes) -> MethodAttempt:
        """
        Run one method and judge its output.

        Backend exceptions are recorded, never propagated.
        """
        try:
            raw = method.extract(file_bytes) or ""
        except Exception as e:
            logger.warning(f"{self.format_name} method '{method.name}' failed: {e}")
            return MethodAttempt(
                method=method.name,
                state=AttemptState.ATTEMPTED_ERROR,
                error=f"{type(e).__name__}: {e}",
            )

        text = normalize_text(str(raw))
        if not is_valid_text(text):
            logger.debug(
                f"{self.format_name} method '{method.name}' returned no valid text "
                f"({len(raw)} raw characters)"
            )
            return MethodAttempt(
                method=method.name,
                state=AttemptState.ATTEMPTED_INVALID,
                text=text,
                raw_length=len(raw),
            )

        return MethodAttempt(
            method=method.name,
            state=AttemptState.SUCCEEDED,
            text=text,
            raw_length=len(raw),
        )

    def run_methods(self, file_bytes: bytes) -> List[MethodAttempt]:
        """
        Walk the fallback chain and report every method's state.

        Methods after the first success are reported as NOT_TRIED.
        """
        attempts: List[MethodAttempt] = []
        succeeded = False
        for method in self.methods():
            if succeeded:
                attempts.append(MethodAttempt(method=method.name))
                continue
            result = self.attempt(method, file_bytes)
            attempts.append(result)
            succeeded = result.succeeded
        return attempts

    def extract(self, file_bytes: bytes) -> ExtractionResult:
        """
        Extract validated, normalized text from file bytes.

        Args:
            file_bytes: Raw file content as bytes

        Returns:
            ExtractionResult with the first valid text

        Raises:
            ExtractionExhaustedError: If no method produced valid text
        """
        attempts = self.run_methods(file_bytes)
        for result in attempts:
            if result.succeeded:
                logger.debug(f"{self.format_name} text extracted with '{result.method}'")
                return ExtractionResult(page_content=result.text, file_type=self.file_type)

        reason = self.get_error_message()
        errors = [a.error for a in attempts if a.state == AttemptState.ATTEMPTED_ERROR]
        if errors and attempts[-1].state == AttemptState.ATTEMPTED_ERROR:
            reason = f"{reason} ({errors[-1]})"

        longest = max((a.text for a in attempts), key=len, default="")
        raise ExtractionExhaustedError(
            reason,
            format_name=self.format_name,
            attempts=attempts,
            page_count=self.page_count(file_bytes),
            sample=longest[:DIAGNOSTIC_SAMPLE_CHARS],
        )
