"""
Text validity judge.

Extraction backends sometimes succeed while returning nothing useful:
repeated page markers, a single repeated glyph, whitespace. This module
decides whether normalized text is real content worth indexing.
"""
import re
from typing import List

from ..core.logging_config import get_logger

logger = get_logger(__name__)

# "-- 1 of 3 --", "2 page 9", "- 4 página 10 -"
PAGINATION_PATTERN = re.compile(
    r"-*\s*\d+\s*(?:of|page|página)\s*\d+\s*-*",
    re.IGNORECASE,
)
_SINGLE_MARKER = re.compile(
    r"\s*" + PAGINATION_PATTERN.pattern + r"\s*",
    re.IGNORECASE,
)
_CONTENT_CHARS = re.compile(r"[A-Za-z0-9À-ɏ]")
_WORDS = re.compile(r"[A-Za-zÀ-ɏ]{2,}")

MAX_PAGINATION_FRACTION = 0.8
UNCONDITIONAL_LENGTH = 500
MIN_CONTENT_CHARS = 10
MEDIUM_LENGTH = 100
MEDIUM_CONTENT_CHARS = 20
MIN_WORDS = 3
MIN_DISTINCT_WORDS = 3


def strip_pagination(text: str) -> str:
    """Remove every pagination marker from text."""
    return PAGINATION_PATTERN.sub(" ", text)


def pagination_fraction(text: str) -> float:
    """Fraction of the text length covered by pagination markers."""
    if not text:
        return 0.0
    covered = sum(m.end() - m.start() for m in PAGINATION_PATTERN.finditer(text))
    return covered / len(text)


def _words(text: str) -> List[str]:
    return _WORDS.findall(text)


def is_valid_text(text: str) -> bool:
    """
    Decide whether normalized text constitutes genuinely extracted content.
    
    Args:
        text: Normalized text
        
    Returns:
        True if the text should be accepted
    """
    if not text or not text.strip():
        return False
    
    if _SINGLE_MARKER.fullmatch(text):
        return False
    
    remainder = text
    if PAGINATION_PATTERN.search(text):
        fraction = pagination_fraction(text)
        if fraction > MAX_PAGINATION_FRACTION:
            logger.debug(f"Rejecting text: {fraction:.0%} pagination markers")
            return False
        remainder = strip_pagination(text)
    remainder = remainder.strip()
    
    if len(remainder) >= UNCONDITIONAL_LENGTH:
        return True
    
    content_chars = len(_CONTENT_CHARS.findall(remainder))
    if content_chars < MIN_CONTENT_CHARS:
        return False
    if len(remainder) >= MEDIUM_LENGTH and content_chars >= MEDIUM_CONTENT_CHARS:
        return True
    
    words = _words(remainder)
    if len(words) < MIN_WORDS:
        return False
    return len({word.lower() for word in words}) >= MIN_DISTINCT_WORDS
