"""
Utility Functions

Helper functions used throughout the package.

Modules:
    text: Whitespace and line-ending normalization
"""

from reedfeed.utils.text import (
    collapse_blank_lines,
    normalize_newlines,
    normalize_whitespace,
    strip_extension,
)

__all__ = [
    "collapse_blank_lines",
    "normalize_newlines",
    "normalize_whitespace",
    "strip_extension",
]
