"""
Text normalization applied to the output of every extraction method.
Pure function, no I/O.
"""
import re

_NULL_CHARS = re.compile(r"\x00")
_LINE_BREAKS = re.compile(r"\r\n?")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_BLANK_LINE_RUNS = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """
    Canonicalize extracted text.
    
    Removes null characters, converts CRLF and bare CR to LF, collapses runs
    of non-newline whitespace to a single space, collapses three or more
    consecutive newlines to exactly two and trims the result.
    
    ``normalize_text(normalize_text(s)) == normalize_text(s)`` for every ``s``.
    
    Args:
        text: Raw text produced by an extraction backend
        
    Returns:
        Normalized text (possibly empty)
    """
    if not text:
        return ""
    text = _NULL_CHARS.sub("", text)
    text = _LINE_BREAKS.sub("\n", text)
    text = _INLINE_WHITESPACE.sub(" ", text)
    text = _BLANK_LINE_RUNS.sub("\n\n", text)
    return text.strip()
