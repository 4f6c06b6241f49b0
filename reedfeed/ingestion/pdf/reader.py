"""
PDF to Markdown Reconstructor

Reads positioned text runs from a PDF with PyMuPDF and rebuilds paragraphs
and headings from the layout.

Pages are pulled one at a time in document order. PyMuPDF reports span
origins with y growing downwards; runs are flipped into PDF user space
(y growing upwards) so top-to-bottom order is descending ``y``.

Example:
    >>> markdown = reconstruct(Path("book.pdf").read_bytes())
    >>> markdown = reconstruct(data, max_pages=20, paragraph_gap_factor=2.0)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import fitz

from reedfeed.errors import ExtractionError
from reedfeed.ingestion.pdf.lines import layout_page
from reedfeed.ingestion.pdf.paragraphs import reconstruct_pages
from reedfeed.types import PageLayout, ReconstructOptions, TextRun

logger = logging.getLogger(__name__)


def _open_document(raw_bytes: bytes) -> fitz.Document:
    try:
        document = fitz.open(stream=raw_bytes, filetype="pdf")
    except (fitz.FileDataError, ValueError, RuntimeError) as exc:
        raise ExtractionError(
            "Unable to open PDF document. The file may be corrupted or unsupported."
        ) from exc

    if document.needs_pass:
        document.close()
        raise ExtractionError("PDF document is encrypted")
    return document


def _page_runs(page: fitz.Page) -> list[TextRun]:
    height = page.rect.height
    raw = page.get_text("dict")
    runs: list[TextRun] = []

    for block in raw.get("blocks", []):
        # type 1 is an image block
        if block.get("type", 0) != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text.strip():
                    continue
                x, y = span.get("origin", (0.0, 0.0))
                runs.append(
                    TextRun(
                        text=text,
                        x=float(x),
                        y=float(height - y),
                        font_size=float(span.get("size", 0.0) or 0.0),
                    )
                )
    return runs


def iter_page_runs(
    raw_bytes: bytes,
    *,
    max_pages: int | None = None,
) -> Iterator[tuple[float, list[TextRun]]]:
    """
    Yield ``(page_height, runs)`` for each page in document order.

    Raises:
        ExtractionError: If PyMuPDF cannot open the byte stream
    """
    document = _open_document(raw_bytes)
    try:
        page_count = document.page_count
        if max_pages is not None:
            page_count = min(page_count, max_pages)
        logger.debug(f"Reading {page_count} of {document.page_count} PDF pages")

        for index in range(page_count):
            page = document.load_page(index)
            yield page.rect.height, _page_runs(page)
    finally:
        document.close()


def load_pages(raw_bytes: bytes, options: ReconstructOptions | None = None) -> list[PageLayout]:
    """Read every page and assemble its lines."""
    options = options or ReconstructOptions()
    return [
        layout_page(number, runs, height=height, y_step=options.y_step)
        for number, (height, runs) in enumerate(
            iter_page_runs(raw_bytes, max_pages=options.max_pages), start=1
        )
    ]


def reconstruct(
    raw_bytes: bytes,
    options: ReconstructOptions | None = None,
    **overrides: Any,
) -> str:
    """
    Convert PDF bytes to markdown.

    Args:
        raw_bytes: Contents of a PDF file
        options: Reconstruction options (defaults when None)
        **overrides: Individual option overrides, e.g. ``max_pages=10``

    Returns:
        Markdown string with "# " headings and blank-line separated paragraphs

    Raises:
        ExtractionError: If the bytes are not a readable PDF
    """
    options = options or ReconstructOptions()
    if overrides:
        options = ReconstructOptions(**{**options.model_dump(), **overrides})

    pages = load_pages(raw_bytes, options)
    return reconstruct_pages(pages, options)
