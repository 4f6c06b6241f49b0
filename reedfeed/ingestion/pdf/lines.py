"""
Line Assembly

Groups the positioned text runs of one page into lines.

Runs whose baselines fall into the same quantized vertical band are one
line. Quantizing absorbs the sub-point jitter PDF producers introduce when
a line is written as several runs (kerning, font switches, ligatures).
"""

from __future__ import annotations

from collections.abc import Iterable

from reedfeed.types import Line, PageLayout, TextRun
from reedfeed.utils.text import normalize_whitespace


def quantize(y: float, step: float) -> float:
    """Snap ``y`` to the nearest multiple of ``step``."""
    return round(y / step) * step


def assemble_lines(runs: Iterable[TextRun], *, y_step: float = 2.0) -> list[Line]:
    """
    Assemble one page's runs into lines ordered top-to-bottom.

    Args:
        runs: Text runs of a single page, in any order
        y_step: Vertical quantization step

    Returns:
        Lines sorted by descending ``y``. Empty input gives an empty list.
    """
    # band -> (first raw y, [(x, text, font_size), ...])
    bands: dict[float, tuple[float, list[tuple[float, str, float]]]] = {}

    for run in runs:
        text = normalize_whitespace(run.text)
        if not text:
            continue
        key = quantize(run.y, y_step)
        if key not in bands:
            bands[key] = (run.y, [])
        bands[key][1].append((run.x, text, run.font_size))

    lines: list[Line] = []
    for raw_y, parts in bands.values():
        parts.sort(key=lambda part: part[0])
        lines.append(
            Line(
                y=raw_y,
                x_min=parts[0][0],
                font_size=max(part[2] for part in parts),
                text=" ".join(part[1] for part in parts),
            )
        )

    lines.sort(key=lambda line: line.y, reverse=True)
    return lines


def layout_page(
    number: int,
    runs: Iterable[TextRun],
    *,
    height: float = 0.0,
    y_step: float = 2.0,
) -> PageLayout:
    """Build the ``PageLayout`` for one page from its raw runs."""
    return PageLayout(number=number, height=height, lines=assemble_lines(runs, y_step=y_step))
