"""
Sentence Splitting

Punctuation-and-capitalization sentence boundaries for Latin-script text.

A boundary is ". ! ?" followed by whitespace and then an uppercase letter or
an opening quote. The punctuation stays with the preceding sentence and the
whitespace is dropped.
"""

from __future__ import annotations

import re

from reedfeed.utils.text import collapse_blank_lines, normalize_newlines

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z\"'“‘])")
_PARAGRAPH_BOUNDARY = re.compile(r"\n{2,}")


def normalize_text(text: str) -> str:
    """Normalize line endings, collapse 3+ blank lines to 2, and trim."""
    return collapse_blank_lines(normalize_newlines(text)).strip()


def split_sentences(text: str) -> list[str]:
    """
    Split text into trimmed, non-empty sentences.

    Args:
        text: A block of plain text

    Returns:
        Sentences in order ([] for blank input)
    """
    normalized = normalize_text(text)
    return [piece.strip() for piece in _SENTENCE_BOUNDARY.split(normalized) if piece.strip()]


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines."""
    return [
        piece.strip()
        for piece in _PARAGRAPH_BOUNDARY.split(normalize_newlines(text))
        if piece.strip()
    ]


def split_lines(text: str) -> list[str]:
    """Split on single newlines."""
    return [line.strip() for line in normalize_newlines(text).split("\n") if line.strip()]


def split_with_fallback(text: str) -> list[str]:
    """
    Sentences, or paragraphs when no sentence was found, or lines.

    The fallbacks only matter for degenerate input; any text with a
    non-whitespace character yields at least one sentence.
    """
    return split_sentences(text) or split_paragraphs(text) or split_lines(text)
