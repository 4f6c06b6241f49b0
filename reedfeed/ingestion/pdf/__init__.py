"""
PDF Reconstruction

Rebuilds paragraph-correct markdown from the positioned text of a PDF.

Modules:
    lines: Group positioned runs into lines (vertical quantization)
    repeats: Detect running headers/footers and page numbers
    paragraphs: Two-pass paragraph and heading reconstruction
    reader: PyMuPDF adapter and the reconstruct() entry point
"""

from reedfeed.ingestion.pdf.lines import assemble_lines, layout_page
from reedfeed.ingestion.pdf.paragraphs import (
    compute_layout_stats,
    looks_like_chapter_heading,
    reconstruct_pages,
)
from reedfeed.ingestion.pdf.reader import iter_page_runs, load_pages, reconstruct
from reedfeed.ingestion.pdf.repeats import find_repeated_lines, is_page_number

__all__ = [
    "assemble_lines",
    "compute_layout_stats",
    "find_repeated_lines",
    "is_page_number",
    "iter_page_runs",
    "layout_page",
    "load_pages",
    "looks_like_chapter_heading",
    "reconstruct",
    "reconstruct_pages",
]
