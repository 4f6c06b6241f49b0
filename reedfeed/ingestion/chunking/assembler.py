"""
Chunk Assembler

Splits normalized text into reading-sized chunks.

Algorithm:
    1. Split text into units: "# " and "## " heading lines are atomic units;
       the non-heading lines between them are joined with spaces into one
       unit each
    2. Emit heading units verbatim
    3. Split body units into sentences and pack them greedily from a work
       queue, keeping each chunk at most ``hard_max`` characters and trying
       to reach ``min_chars``
    4. Hard-split sentences longer than ``hard_max`` at a space, marking the
       cut with an ellipsis and pushing the remainder back onto the queue

Example:
    >>> chunk("# Title\\nSome text here.")
    ['# Title', 'Some text here.']
"""

from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass

from reedfeed.ingestion.chunking.sentences import split_with_fallback
from reedfeed.utils.text import normalize_newlines

logger = logging.getLogger(__name__)

MIN_CHARS = 80
HARD_MAX = 600
ELLIPSIS = "…"

_HEADING_PATTERN = re.compile(r"^#{1,2}\s+.+")


@dataclass
class _Unit:
    """A heading line or a run of body text between headings."""

    text: str
    is_heading: bool = False


def chunk(text: str, *, min_chars: int = MIN_CHARS, hard_max: int = HARD_MAX) -> list[str]:
    """
    Split text into an ordered list of chunks.

    Args:
        text: Markdown or plain text
        min_chars: Keep adding sentences until a chunk reaches this length
        hard_max: No chunk is longer than this

    Returns:
        Chunks in reading order ([] for blank input)
    """
    if hard_max <= len(ELLIPSIS):
        raise ValueError(f"hard_max must be greater than {len(ELLIPSIS)}")

    chunks: list[str] = []
    for unit in _split_units(text):
        if unit.is_heading:
            chunks.append(unit.text)
        else:
            chunks.extend(
                _pack(split_with_fallback(unit.text), min_chars=min_chars, hard_max=hard_max)
            )

    logger.debug(f"Assembled {len(chunks)} chunks from {len(text)} characters")
    return chunks


def _split_units(text: str) -> list[_Unit]:
    """Separate heading lines from the body text around them."""
    units: list[_Unit] = []
    pending: list[str] = []

    def flush_body() -> None:
        """Save accumulated body lines as one unit."""
        if pending:
            units.append(_Unit(" ".join(pending)))
            pending.clear()

    for line in normalize_newlines(text).split("\n"):
        stripped = line.strip()
        if _HEADING_PATTERN.match(stripped):
            flush_body()
            units.append(_Unit(stripped, is_heading=True))
        elif stripped:
            pending.append(stripped)

    flush_body()
    return units


def _pack(sentences: list[str], *, min_chars: int, hard_max: int) -> list[str]:
    """Greedily pack sentences into chunks of at most ``hard_max`` characters."""
    queue: deque[str] = deque(sentences)
    chunks: list[str] = []

    while queue:
        group = [queue.popleft()]
        length = len(group[0])

        if length <= hard_max:
            while queue and length < min_chars and length + 1 + len(queue[0]) <= hard_max:
                sentence = queue.popleft()
                group.append(sentence)
                length += 1 + len(sentence)

            # One more sentence if it fits, so short tails don't become chunks
            if queue and length + 1 + len(queue[0]) <= hard_max:
                sentence = queue.popleft()
                group.append(sentence)
                length += 1 + len(sentence)

        while length > hard_max and len(group) > 1:
            sentence = group.pop()
            queue.appendleft(sentence)
            length -= 1 + len(sentence)

        if length > hard_max:
            head, tail = _hard_split(group[0], min_chars=min_chars, hard_max=hard_max)
            chunks.append(head + ELLIPSIS)
            queue.appendleft(tail)
            continue

        chunks.append(" ".join(group))

    return chunks


def _hard_split(sentence: str, *, min_chars: int, hard_max: int) -> tuple[str, str]:
    """
    Cut an oversized sentence in two.

    The cut is at the last space that leaves room for the ellipsis, or at the
    raw limit when there is no space at or after ``min_chars``.
    """
    limit = hard_max - len(ELLIPSIS)
    cut = sentence.rfind(" ", 0, limit + 1)
    if cut < max(min_chars, 1):
        cut = limit
    return sentence[:cut].rstrip(), sentence[cut:].strip()
