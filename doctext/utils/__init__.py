"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .text_normalizer import normalize_text
from .text_validity import is_valid_text, pagination_fraction, strip_pagination

__all__ = [
    "is_valid_text",
    "normalize_text",
    "pagination_fraction",
    "strip_pagination",
]
