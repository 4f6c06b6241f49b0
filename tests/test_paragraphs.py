"""Tests for paragraph reconstruction."""

import pytest

from reedfeed.ingestion.pdf.paragraphs import (
    ReconstructionState,
    apply_line,
    compute_layout_stats,
    finalize,
    is_heading,
    is_hyphen_wrap,
    looks_like_chapter_heading,
    reconstruct_pages,
    should_break_paragraph,
    start_page,
)
from reedfeed.types import LayoutStats, Line, PageLayout, ReconstructOptions


def _page(number: int, lines: list[tuple], height: float = 800) -> PageLayout:
    """Lines are ``(y, text)`` or ``(y, text, font_size)``."""
    return PageLayout(
        number=number,
        height=height,
        lines=[
            Line(y=entry[0], text=entry[1], font_size=entry[2] if len(entry) > 2 else 0)
            for entry in lines
        ],
    )


STATS = LayoutStats(typical_line_gap=14, paragraph_gap=25.2)


class TestComputeLayoutStats:
    """Tests for the statistics pass."""

    def test_median_gap(self):
        """Typical gap is the median gap between consecutive lines."""
        pages = [_page(1, [(700, "a"), (686, "b"), (672, "c")])]
        stats = compute_layout_stats(pages)

        assert stats.typical_line_gap == pytest.approx(14)
        assert stats.paragraph_gap == pytest.approx(25.2)

    def test_default_without_gaps(self):
        """Single-line pages fall back to a 12pt gap."""
        stats = compute_layout_stats([_page(1, [(700, "only")])])

        assert stats.typical_line_gap == 12
        assert stats.paragraph_gap == pytest.approx(21.6)
        assert stats.body_font_size == 0

    def test_large_gaps_excluded(self):
        """Gaps of 80 or more are section breaks, not line spacing."""
        pages = [_page(1, [(700, "a"), (600, "b"), (586, "c")])]
        assert compute_layout_stats(pages).typical_line_gap == pytest.approx(14)

    def test_only_first_pages_sampled(self):
        """Pages after the sample window do not affect the statistics."""
        pages = [_page(n, [(700, "a"), (690, "b")]) for n in range(1, 6)]
        pages.append(_page(6, [(700, "a"), (670, "b"), (640, "c"), (610, "d")]))

        assert compute_layout_stats(pages).typical_line_gap == pytest.approx(10)

    def test_custom_factor(self):
        """The paragraph gap scales with the configured factor."""
        pages = [_page(1, [(700, "a"), (690, "b")])]
        stats = compute_layout_stats(pages, paragraph_gap_factor=2.5)

        assert stats.paragraph_gap == pytest.approx(25)

    def test_body_font_size(self):
        """Body font size is the median line font size."""
        pages = [_page(1, [(700, "A", 18), (680, "b", 11), (666, "c", 11)])]
        assert compute_layout_stats(pages).body_font_size == 11


class TestHeadingDetection:
    """Tests for heading heuristics."""

    @pytest.mark.parametrize(
        "text",
        ["Chapter 3", "CHAPTER 12: The End", "Ch. 4", "ch.7", "Prologue", "EPILOGUE",
         "THE LONG WINTER"],
    )
    def test_chapter_headings(self, text):
        """Chapter markers and short all-caps lines are headings."""
        assert looks_like_chapter_heading(text)

    @pytest.mark.parametrize(
        "text",
        ["A normal sentence.", "NASA", "Prologues are short", "Chapters", "",
         "THIS IS A VERY LONG UPPERCASE LINE THAT GOES ON"],
    )
    def test_not_headings(self, text):
        """Ordinary lines, short acronyms and long caps lines are not."""
        assert not looks_like_chapter_heading(text)

    def test_font_size_heading(self):
        """A line much larger than body text is a heading."""
        stats = LayoutStats(body_font_size=11)
        line = Line(y=700, text="A Quiet Beginning", font_size=18)

        assert is_heading(line, stats, 1.35)
        assert not is_heading(line, stats, 0)

    def test_font_size_heading_needs_letters(self):
        """Large numerals are not headings."""
        stats = LayoutStats(body_font_size=11)
        assert not is_heading(Line(y=700, text="2024", font_size=30), stats, 1.35)

    def test_font_size_unknown(self):
        """Without a body font size only wording counts."""
        line = Line(y=700, text="A Quiet Beginning", font_size=18)
        assert not is_heading(line, LayoutStats(), 1.35)


class TestParagraphBreaks:
    """Tests for paragraph break decisions."""

    def test_large_gap_breaks(self):
        """A gap at or above the paragraph gap always breaks."""
        assert should_break_paragraph("no end", Line(y=0, text="next"), 26, STATS)

    def test_moderate_gap_after_sentence_breaks(self):
        """A moderate gap after sentence-ending punctuation breaks."""
        assert should_break_paragraph("It ended.", Line(y=0, text="next"), 18, STATS)
        assert should_break_paragraph('"Go," he said."', Line(y=0, text="next"), 18, STATS)

    def test_moderate_gap_mid_sentence_joins(self):
        """A moderate gap without terminal punctuation does not break."""
        assert not should_break_paragraph("and then", Line(y=0, text="next"), 18, STATS)

    def test_normal_gap_joins(self):
        """Normal line spacing never breaks, even after a period."""
        assert not should_break_paragraph("It ended.", Line(y=0, text="next"), 14, STATS)

    def test_chapter_line_breaks(self):
        """A chapter marker breaks regardless of spacing."""
        assert should_break_paragraph("text", Line(y=0, text="Chapter 2"), 14, STATS)


class TestHyphenWrap:
    """Tests for hyphenated line ends."""

    def test_letter_hyphen_then_lowercase(self):
        assert is_hyphen_wrap("hyphen-", "ated word")

    def test_uppercase_continuation(self):
        assert not is_hyphen_wrap("Jean-", "Paul")

    def test_digit_before_hyphen(self):
        assert not is_hyphen_wrap("1990-", "onwards")

    def test_spaced_dash(self):
        assert not is_hyphen_wrap("well -", "known")


class TestApplyLine:
    """Tests for folding single lines."""

    def test_removed_line_is_skipped(self):
        """Lines in the removal set leave the state untouched."""
        state = ReconstructionState()
        result = apply_line(state, Line(y=700, text="Running Title"), stats=STATS,
                            removed={"running title"})

        assert result is state
        assert result.output == ()

    def test_page_number_is_skipped(self):
        """Standalone page numbers are always dropped."""
        state = ReconstructionState()
        assert apply_line(state, Line(y=40, text="42"), stats=STATS).output == ()

    def test_state_is_replaced(self):
        """Each step returns a new state and leaves its input unchanged."""
        state = ReconstructionState()
        result = apply_line(state, Line(y=700, text="Hello"), stats=STATS)

        assert result is not state
        assert result.prev_y == 700
        assert result.output == ("Hello",)
        assert state.output == ()
        assert state.prev_y is None

    def test_earlier_states_survive_later_steps(self):
        """Folding further lines never changes states already produced."""
        first = apply_line(ReconstructionState(), Line(y=700, text="It ended."), stats=STATS)
        joined = apply_line(first, Line(y=686, text="More words"), stats=STATS)
        broken = apply_line(first, Line(y=650, text="New start"), stats=STATS)
        heading = apply_line(first, Line(y=630, text="Chapter 2"), stats=STATS)

        assert first.output == ("It ended.",)
        assert joined.output == ("It ended. More words",)
        assert broken.output == ("It ended.", "", "New start")
        assert heading.output == ("It ended.", "", "# Chapter 2", "")

    def test_hyphen_repair(self):
        first = apply_line(ReconstructionState(), Line(y=700, text="hyphen-"), stats=STATS)
        second = apply_line(first, Line(y=686, text="ated word"), stats=STATS)

        assert second.output == ("hyphenated word",)
        assert first.output == ("hyphen-",)


class TestStartPage:
    """Tests for page boundaries."""

    def test_page_break_closes_paragraph(self):
        state = apply_line(ReconstructionState(), Line(y=700, text="Text"), stats=STATS)
        result = start_page(state, STATS)

        assert result.output == ("Text", "")
        assert result.prev_y is None
        assert state.output == ("Text",)

    def test_join_across_pages_keeps_paragraph_open(self):
        state = apply_line(ReconstructionState(), Line(y=700, text="Text"), stats=STATS)
        result = start_page(state, STATS, join_across_pages=True)

        assert result.output == ("Text",)
        assert result.carry_gap == pytest.approx(17.5)
        assert result.prev_y is None


class TestFinalize:
    """Tests for the post-pass."""

    def test_collapses_blank_runs(self):
        assert finalize(["", "", "a", "", "", "b", ""]) == "a\n\nb\n"

    def test_empty(self):
        assert finalize([]) == ""
        assert finalize(["", ""]) == ""


class TestReconstructPages:
    """End-to-end reconstruction over page layouts."""

    def test_hyphen_merge(self):
        """A word split across lines is rejoined without the hyphen."""
        pages = [_page(1, [(700, "hyphen-"), (686, "ated word")])]
        assert reconstruct_pages(pages) == "hyphenated word\n"

    def test_lines_joined_into_paragraph(self):
        """Consecutive lines at normal spacing form one paragraph."""
        pages = [_page(1, [(700, "The quick brown"), (686, "fox jumps over"), (672, "the dog.")])]
        assert reconstruct_pages(pages) == "The quick brown fox jumps over the dog.\n"

    def test_gap_starts_paragraph(self):
        """A large vertical gap starts a new paragraph."""
        pages = [
            _page(1, [
                (700, "First line of text"),
                (686, "continues here"),
                (672, "more text"),
                (630, "New paragraph starts."),
            ])
        ]
        assert reconstruct_pages(pages) == (
            "First line of text continues here more text\n\nNew paragraph starts.\n"
        )

    def test_chapter_heading(self):
        """Chapter markers become "# " headings."""
        pages = [_page(1, [(700, "Chapter 1"), (686, "It was a dark night.")])]
        assert reconstruct_pages(pages) == "# Chapter 1\n\nIt was a dark night.\n"

    def test_font_size_heading(self):
        """Large-font lines become headings unless disabled."""
        pages = [
            _page(1, [
                (700, "A Quiet Beginning", 18),
                (680, "The morning was grey.", 11),
                (666, "Nobody spoke.", 11),
                (652, "Then the rain came.", 11),
            ])
        ]
        assert reconstruct_pages(pages) == (
            "# A Quiet Beginning\n\nThe morning was grey. Nobody spoke. Then the rain came.\n"
        )
        assert reconstruct_pages(pages, ReconstructOptions(heading_font_ratio=0)) == (
            "A Quiet Beginning The morning was grey. Nobody spoke. Then the rain came.\n"
        )

    def test_page_boundary_is_paragraph_break(self):
        """Each page starts a new paragraph by default."""
        pages = [_page(1, [(700, "End of page one")]), _page(2, [(700, "start of page two")])]
        assert reconstruct_pages(pages) == "End of page one\n\nstart of page two\n"

    def test_join_across_pages(self):
        """With join_across_pages, unfinished paragraphs continue."""
        options = ReconstructOptions(join_across_pages=True)

        hyphenated = [_page(1, [(700, "The story contin-")]), _page(2, [(700, "ues here.")])]
        assert reconstruct_pages(hyphenated, options) == "The story continues here.\n"

        running = [_page(1, [(700, "The story goes")]), _page(2, [(700, "on and on")])]
        assert reconstruct_pages(running, options) == "The story goes on and on\n"

        finished = [_page(1, [(700, "Sentence ends.")]), _page(2, [(700, "New one starts.")])]
        assert reconstruct_pages(finished, options) == "Sentence ends.\n\nNew one starts.\n"

    def test_repeated_header_and_page_numbers_removed(self):
        """Running headers and page numbers vanish; a one-off header stays."""
        pages = []
        for n in range(1, 5):
            lines = [(780, "The Book Title")]
            if n == 1:
                lines.append((760, "Unique header"))
            lines.append((400, f"Body text on page {n}."))
            lines.append((40, str(n + 10)))
            pages.append(_page(n, lines))

        assert reconstruct_pages(pages) == (
            "Unique header\n\n"
            "Body text on page 1.\n\n"
            "Body text on page 2.\n\n"
            "Body text on page 3.\n\n"
            "Body text on page 4.\n"
        )

    def test_repeated_line_removed_everywhere(self):
        """A repeated header is also removed where it appears mid-page."""
        pages = [_page(n, [(780, "Running"), (400, f"Page {n} body.")]) for n in range(1, 4)]
        pages.append(_page(4, [(400, "Running"), (386, "Last body.")]))

        result = reconstruct_pages(pages)
        assert "Running" not in result
        assert "Last body." in result

    def test_empty_document(self):
        """No pages, or only boilerplate, gives an empty string."""
        assert reconstruct_pages([]) == ""
        assert reconstruct_pages([_page(1, [(40, "1")])]) == ""
