"""
Repeated Line Detection

Finds running headers and footers: short lines in the top or bottom zone
of a page that recur on many pages.

A line that crosses the repeat threshold is removed everywhere in the
document by exact (lowercase) text, including occurrences outside the
zones. That also removes a short refrain that happens to repeat in the
zones; the removal set is logged at DEBUG level so this stays visible.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence

from reedfeed.types import PageLayout

logger = logging.getLogger(__name__)

MAX_BOILERPLATE_CHARS = 80

_PAGE_NUMBER_PATTERN = re.compile(r"^\d{1,4}$")


def is_page_number(text: str) -> bool:
    """Standalone page numbers ("7", "214") are always dropped."""
    return bool(_PAGE_NUMBER_PATTERN.match(text.strip()))


def count_zone_lines(
    pages: Sequence[PageLayout],
    *,
    header_zone_pct: float = 0.10,
    footer_zone_pct: float = 0.12,
) -> Counter[str]:
    """
    Count lowercase texts of short lines found in header/footer zones.

    A line is in the header zone when ``y >= height * (1 - header_zone_pct)``
    and in the footer zone when ``y <= height * footer_zone_pct``.
    """
    counts: Counter[str] = Counter()

    for page in pages:
        height = page.effective_height
        if height <= 0:
            continue
        header_cutoff = height * (1.0 - header_zone_pct)
        footer_cutoff = height * footer_zone_pct

        for line in page.lines:
            if len(line.text) > MAX_BOILERPLATE_CHARS:
                continue
            if line.y >= header_cutoff or line.y <= footer_cutoff:
                counts[line.text.lower()] += 1

    return counts


def find_repeated_lines(
    pages: Sequence[PageLayout],
    *,
    header_zone_pct: float = 0.10,
    footer_zone_pct: float = 0.12,
    min_count: int = 3,
) -> frozenset[str]:
    """
    Return the lowercase texts to remove document-wide.

    Args:
        pages: All pages in document order
        header_zone_pct: Top fraction of the page treated as header
        footer_zone_pct: Bottom fraction of the page treated as footer
        min_count: Zone occurrences needed to qualify as boilerplate

    Returns:
        Frozen set of lowercase line texts
    """
    counts = count_zone_lines(
        pages, header_zone_pct=header_zone_pct, footer_zone_pct=footer_zone_pct
    )
    repeated = frozenset(text for text, count in counts.items() if count >= min_count)
    if repeated:
        logger.debug(f"Removing {len(repeated)} repeated header/footer lines: {sorted(repeated)}")
    return repeated
