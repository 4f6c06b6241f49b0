"""
Document Chunking

Turns normalized markdown or plain text into reading-sized chunks.

Modules:
    sentences: Sentence splitting with paragraph/line fallbacks
    assembler: Heading-aware, length-bounded chunk packing

Key Features:
    - "# " / "## " headings are always their own chunk
    - Chunks aim for at least MIN_CHARS and never exceed HARD_MAX characters
    - Oversized sentences are hard-wrapped with an ellipsis marker
"""

from reedfeed.ingestion.chunking.assembler import ELLIPSIS, HARD_MAX, MIN_CHARS, chunk
from reedfeed.ingestion.chunking.sentences import (
    split_lines,
    split_paragraphs,
    split_sentences,
    split_with_fallback,
)

__all__ = [
    "ELLIPSIS",
    "HARD_MAX",
    "MIN_CHARS",
    "chunk",
    "split_lines",
    "split_paragraphs",
    "split_sentences",
    "split_with_fallback",
]
