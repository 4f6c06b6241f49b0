"""Options for PDF reconstruction."""

from pydantic import BaseModel, ConfigDict, Field


class ReconstructOptions(BaseModel):
    """
    Tuning knobs for ``reconstruct()``.

    All values have defaults that work for typical single-column books.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_pages: int | None = Field(
        default=None, ge=1, description="Only read this many pages (None = all)"
    )
    y_step: float = Field(
        default=2.0, gt=0, description="Vertical quantization step for line grouping"
    )
    header_zone_pct: float = Field(
        default=0.10, ge=0.0, le=1.0, description="Top fraction of the page treated as header"
    )
    footer_zone_pct: float = Field(
        default=0.12, ge=0.0, le=1.0, description="Bottom fraction of the page treated as footer"
    )
    repeated_line_min_count: int = Field(
        default=3, ge=1, description="Zone occurrences before a line counts as boilerplate"
    )
    paragraph_gap_factor: float = Field(
        default=1.8, gt=0, description="Multiple of the typical line gap that forces a break"
    )
    heading_font_ratio: float = Field(
        default=1.35,
        ge=0.0,
        description="Lines this much larger than body text become headings (0 disables)",
    )
    join_across_pages: bool = Field(
        default=False,
        description="Let an unfinished paragraph continue onto the next page",
    )
