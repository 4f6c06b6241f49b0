"""
EPUB Extraction

Modules:
    package: Container/OPF reading and the extract() entry point
    serializer: XHTML to markdown serialization by element kind
"""

from reedfeed.ingestion.epub.package import extract, spine_document_to_markdown
from reedfeed.ingestion.epub.serializer import (
    ElementKind,
    classify,
    normalize_markdown,
    serialize_document,
    serialize_node,
)

__all__ = [
    "ElementKind",
    "classify",
    "extract",
    "normalize_markdown",
    "serialize_document",
    "serialize_node",
    "spine_document_to_markdown",
]
