"""
Type Definitions

Pydantic models for all data structures.

Layout Models (PDF reconstruction):
    - TextRun, Line, PageLayout - Positioned text and assembled lines
    - LayoutStats - Pass-1 statistics (typical line gap, body font size)
    - ReconstructOptions - Tuning knobs for reconstruct()

Session Models:
    - Session - Title, chunks and reading position of an imported document
"""

from reedfeed.types.layout import LayoutStats, Line, PageLayout, TextRun
from reedfeed.types.options import ReconstructOptions
from reedfeed.types.session import Session

__all__ = [
    # Layout Models
    "TextRun",
    "Line",
    "PageLayout",
    "LayoutStats",
    "ReconstructOptions",
    # Session Models
    "Session",
]
