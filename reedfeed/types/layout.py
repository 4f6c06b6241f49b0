"""
Page Layout Types

Positioned text as it comes out of a PDF page, and the lines assembled
from it.

Coordinates follow PDF user space: larger ``y`` is higher on the page, so
top-to-bottom order is descending ``y``.

Models:
    - TextRun: One positioned glyph run from the text extractor
    - Line: One assembled row of text on a page
    - PageLayout: The ordered lines of one page plus its height
    - LayoutStats: Document-wide statistics gathered before reconstruction
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TextRun(BaseModel):
    """
    A positioned glyph run.

    Attributes:
        text: Raw text of the run (may contain stray whitespace)
        x: Horizontal position of the run's origin
        y: Vertical position of the run's baseline
        font_size: Font size in points
    """

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    font_size: float = 0.0


class Line(BaseModel):
    """
    One assembled row of text on a page.

    ``text`` is whitespace-normalized and never empty. ``font_size`` is the
    largest font size among the runs that make up the line.
    """

    model_config = ConfigDict(frozen=True)

    y: float
    x_min: float = 0.0
    font_size: float = 0.0
    text: str

    @field_validator("text")
    @classmethod
    def _normalize_text(cls, value: str) -> str:
        normalized = " ".join(value.split())
        if not normalized:
            raise ValueError("line text must not be empty")
        return normalized


class PageLayout(BaseModel):
    """
    The lines of a single page, ordered top-to-bottom.

    Attributes:
        number: 1-based page number in document order
        height: Page height in the same units as line ``y`` values
        lines: Lines sorted by descending ``y``
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=1)
    height: float = 0.0
    lines: list[Line] = Field(default_factory=list)

    @property
    def effective_height(self) -> float:
        """Page height, falling back to the highest line when unknown."""
        if self.height > 0:
            return self.height
        return max((line.y for line in self.lines), default=0.0)


class LayoutStats(BaseModel):
    """
    Statistics from the first reconstruction pass.

    Attributes:
        typical_line_gap: Median vertical distance between consecutive lines
        paragraph_gap: Gap at or above which a new paragraph always starts
        body_font_size: Median line font size (0 when unknown)
    """

    model_config = ConfigDict(frozen=True)

    typical_line_gap: float = 12.0
    paragraph_gap: float = 21.6
    body_font_size: float = 0.0
