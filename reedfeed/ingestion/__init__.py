"""
Ingestion Pipeline

Transforms raw document bytes into ordered reading chunks.

Phases:
    1. Extraction - bytes to markdown/plain text
       - pdf: layout reconstruction from positioned text (PyMuPDF)
       - epub: spine documents serialized to markdown
       - plain text: decoded as-is
    2. Chunking - text to length-bounded chunks (chunking.chunk)

Each phase is a plain function over in-memory data; no state is shared
between documents.
"""

from reedfeed.ingestion.chunking import chunk
from reedfeed.ingestion.epub import extract
from reedfeed.ingestion.pdf import reconstruct

__all__ = ["chunk", "extract", "reconstruct"]
