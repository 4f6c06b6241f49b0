"""
Text Processing Utilities

Functions for whitespace normalization shared by the PDF, EPUB and chunking
paths.
"""

from __future__ import annotations

import re

_BLANK_RUN = re.compile(r"\n{3,}")


def normalize_whitespace(text: str) -> str:
    """Collapse all whitespace (including newlines) to single spaces."""
    return " ".join(text.split())


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse_blank_lines(text: str) -> str:
    """
    Collapse runs of blank lines so paragraphs are separated by exactly one.

    Args:
        text: Text with ``\\n`` line endings

    Returns:
        Text where 3+ consecutive newlines become 2
    """
    return _BLANK_RUN.sub("\n\n", text)


def strip_extension(filename: str) -> str:
    """Strip the last suffix: "My Book.epub" -> "My Book"."""
    return re.sub(r"\.[^./\\]+$", "", filename)
