"""
Paragraph Reconstruction

Turns page-ordered lines into markdown paragraphs.

Algorithm:
    1. Pass 1 - gather layout statistics (typical line gap, body font size)
       and the set of repeated header/footer lines over all pages
    2. Pass 2 - fold every line into a ReconstructionState:
       - drop boilerplate and standalone page numbers
       - emit headings as "# ..." lines with blank-line padding
       - repair words split by a hyphen at the end of a line
       - start a new paragraph when the vertical gap (or a gap plus
         sentence-ending punctuation) says so, otherwise join the line
    3. Post-pass - collapse blank runs and trim

Both passes work on an in-memory list of PageLayout objects; nothing is
emitted before the whole document's statistics are known.
"""

from __future__ import annotations

import logging
import re
import statistics
from collections.abc import Collection, Sequence
from dataclasses import dataclass, replace

from reedfeed.ingestion.pdf.repeats import find_repeated_lines, is_page_number
from reedfeed.types import LayoutStats, Line, PageLayout, ReconstructOptions

logger = logging.getLogger(__name__)

STATS_SAMPLE_PAGES = 5
DEFAULT_LINE_GAP = 12.0
MAX_USABLE_GAP = 80.0
SENTENCE_BREAK_FACTOR = 1.25
MAX_CAPS_HEADING_CHARS = 40
MAX_FONT_HEADING_CHARS = 80

_CHAPTER_PATTERNS = [
    re.compile(r"^chapter\s+\d+", re.IGNORECASE),
    re.compile(r"^ch\.\s*\d+", re.IGNORECASE),
    re.compile(r"^(prologue|epilogue)\b", re.IGNORECASE),
]
_HYPHEN_END = re.compile(r"[^\W\d_]-$")
_TERMINAL_PUNCTUATION = re.compile(r"[.!?][\"'”’)\]]?$")


# -----------------------------------------------------------------------------
# Pass 1: statistics
# -----------------------------------------------------------------------------


def compute_layout_stats(
    pages: Sequence[PageLayout],
    *,
    paragraph_gap_factor: float = 1.8,
    sample_pages: int = STATS_SAMPLE_PAGES,
) -> LayoutStats:
    """
    Estimate the typical line gap and body font size from the first pages.

    Gaps of 0 (same band) and gaps of MAX_USABLE_GAP or more (section
    breaks, figures) are excluded. Falls back to DEFAULT_LINE_GAP when no
    usable gap exists.
    """
    gaps: list[float] = []
    font_sizes: list[float] = []

    for page in pages[:sample_pages]:
        for upper, lower in zip(page.lines, page.lines[1:]):
            gap = abs(upper.y - lower.y)
            if 0 < gap < MAX_USABLE_GAP:
                gaps.append(gap)
        font_sizes.extend(line.font_size for line in page.lines if line.font_size > 0)

    typical = statistics.median(gaps) if gaps else DEFAULT_LINE_GAP
    body_size = statistics.median(font_sizes) if font_sizes else 0.0

    logger.debug(
        f"Layout stats: typical_line_gap={typical:.2f} from {len(gaps)} gaps, "
        f"body_font_size={body_size:.2f}"
    )
    return LayoutStats(
        typical_line_gap=typical,
        paragraph_gap=typical * paragraph_gap_factor,
        body_font_size=body_size,
    )


# -----------------------------------------------------------------------------
# Heading and break decisions
# -----------------------------------------------------------------------------


def looks_like_chapter_heading(text: str) -> bool:
    """
    Chapter markers and short all-caps lines.

    Matches "Chapter 3", "Ch. 12", "Prologue", "EPILOGUE", or any line of at
    most 40 characters with at least 6 letters of which more than 80% are
    uppercase ("THE LONG WINTER").
    """
    text = text.strip()
    if any(pattern.match(text) for pattern in _CHAPTER_PATTERNS):
        return True
    if len(text) > MAX_CAPS_HEADING_CHARS:
        return False

    letters = [char for char in text if char.isalpha()]
    if len(letters) < 6:
        return False
    uppercase = sum(1 for char in letters if char.isupper())
    return uppercase / len(letters) > 0.8


def is_heading(line: Line, stats: LayoutStats, heading_font_ratio: float) -> bool:
    """A line is a heading by its wording or by being set in a larger font."""
    if looks_like_chapter_heading(line.text):
        return True
    if heading_font_ratio <= 0 or stats.body_font_size <= 0:
        return False
    return (
        line.font_size >= stats.body_font_size * heading_font_ratio
        and len(line.text) <= MAX_FONT_HEADING_CHARS
        and any(char.isalpha() for char in line.text)
    )


def should_break_paragraph(
    previous_text: str,
    line: Line,
    y_gap: float,
    stats: LayoutStats,
) -> bool:
    """Decide whether ``line`` starts a new paragraph after ``previous_text``."""
    if y_gap >= stats.paragraph_gap:
        return True
    if (
        y_gap >= stats.typical_line_gap * SENTENCE_BREAK_FACTOR
        and _TERMINAL_PUNCTUATION.search(previous_text)
    ):
        return True
    return looks_like_chapter_heading(line.text)


def is_hyphen_wrap(previous_text: str, text: str) -> bool:
    """True when ``previous_text`` ends in "letter-" and ``text`` starts lowercase."""
    return bool(_HYPHEN_END.search(previous_text)) and text[:1].islower()


# -----------------------------------------------------------------------------
# Pass 2: fold
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ReconstructionState:
    """
    State threaded through the reconstruction fold.

    Attributes:
        lines: Finished output lines; "" marks a paragraph break
        paragraph: Text of the paragraph still being built ("" when none)
        prev_y: ``y`` of the last emitted line on the current page
        carry_gap: Gap assumed for the first line of a page (used when
            paragraphs may continue across pages)

    Each step returns a new state and never modifies its input.
    """

    lines: tuple[str, ...] = ()
    paragraph: str = ""
    prev_y: float | None = None
    carry_gap: float = 0.0

    @property
    def output(self) -> tuple[str, ...]:
        """All lines so far, including the open paragraph."""
        if self.paragraph:
            return self.lines + (self.paragraph,)
        return self.lines


def _with_blank(state: ReconstructionState) -> tuple[str, ...]:
    """Close the open paragraph and make sure the output ends in a blank line."""
    lines = state.output
    if lines and lines[-1] != "":
        lines += ("",)
    return lines


def start_page(
    state: ReconstructionState,
    stats: LayoutStats,
    *,
    join_across_pages: bool = False,
) -> ReconstructionState:
    """Reset per-page state at a page boundary."""
    if join_across_pages:
        return replace(
            state,
            prev_y=None,
            carry_gap=stats.typical_line_gap * SENTENCE_BREAK_FACTOR,
        )
    return ReconstructionState(lines=_with_blank(state))


def apply_line(
    state: ReconstructionState,
    line: Line,
    *,
    stats: LayoutStats,
    removed: Collection[str] = frozenset(),
    heading_font_ratio: float = 0.0,
) -> ReconstructionState:
    """Fold one line into the state."""
    text = line.text
    if text.lower() in removed or is_page_number(text):
        return state

    if is_heading(line, stats, heading_font_ratio):
        return ReconstructionState(lines=_with_blank(state) + (f"# {text}", ""), prev_y=line.y)

    y_gap = abs(state.prev_y - line.y) if state.prev_y is not None else state.carry_gap
    current = state.paragraph

    if not current:
        return replace(state, paragraph=text, prev_y=line.y, carry_gap=0.0)
    if is_hyphen_wrap(current, text):
        paragraph = current[:-1] + text
    elif should_break_paragraph(current, line, y_gap, stats):
        return ReconstructionState(
            lines=state.lines + (current, ""),
            paragraph=text,
            prev_y=line.y,
        )
    else:
        paragraph = f"{current} {text}"

    return replace(state, paragraph=paragraph, prev_y=line.y, carry_gap=0.0)


def finalize(lines: Sequence[str]) -> str:
    """Collapse blank runs, trim, and return text with one trailing newline."""
    output: list[str] = []
    for line in lines:
        if line == "" and (not output or output[-1] == ""):
            continue
        output.append(line)
    while output and output[-1] == "":
        output.pop()

    if not output:
        return ""
    return "\n".join(output) + "\n"


def reconstruct_pages(
    pages: Sequence[PageLayout],
    options: ReconstructOptions | None = None,
) -> str:
    """
    Reconstruct markdown from page layouts.

    Args:
        pages: All pages in document order
        options: Reconstruction options (defaults when None)

    Returns:
        Markdown text with "# " headings and blank-line separated
        paragraphs, ending in a single newline ("" for an empty document)
    """
    options = options or ReconstructOptions()

    stats = compute_layout_stats(pages, paragraph_gap_factor=options.paragraph_gap_factor)
    removed = find_repeated_lines(
        pages,
        header_zone_pct=options.header_zone_pct,
        footer_zone_pct=options.footer_zone_pct,
        min_count=options.repeated_line_min_count,
    )

    state = ReconstructionState()
    for page in pages:
        state = start_page(state, stats, join_across_pages=options.join_across_pages)
        for line in page.lines:
            state = apply_line(
                state,
                line,
                stats=stats,
                removed=removed,
                heading_font_ratio=options.heading_font_ratio,
            )

    markdown = finalize(state.output)
    logger.debug(f"Reconstructed {len(pages)} pages into {len(markdown)} characters")
    return markdown
