"""
reedfeed - Read Anything One Bite at a Time

Turns PDFs, EPUBs and plain text into an ordered list of reading-sized
chunks, reconstructing paragraphs and headings along the way.

Example:
    >>> from reedfeed import import_file
    >>> session = import_file("book.pdf")
    >>> print(session.current())

    >>> from reedfeed import chunk
    >>> chunk("# Title\\nSome text here.")
    ['# Title', 'Some text here.']

Main Entry Points:
    reconstruct: PDF bytes -> markdown
    extract: EPUB bytes -> markdown
    chunk: text -> ordered chunks
    import_file / import_bytes / import_text: document -> Session
    ReaderConfig: Configuration management
"""

__version__ = "0.1.0"


# Public API - lazy imports so `import reedfeed` stays cheap
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "ReaderConfig":
        from reedfeed.config.settings import ReaderConfig
        return ReaderConfig

    if name == "reconstruct":
        from reedfeed.ingestion.pdf import reconstruct
        return reconstruct

    if name == "extract":
        from reedfeed.ingestion.epub import extract
        return extract

    if name == "chunk":
        from reedfeed.ingestion.chunking import chunk
        return chunk

    # Convenience functions
    if name in ("extract_text", "import_file", "import_bytes", "import_text"):
        from reedfeed.api import importer
        return getattr(importer, name)

    # Types and errors
    if name in ("Session", "TextRun", "Line", "PageLayout", "ReconstructOptions"):
        from reedfeed import types
        return getattr(types, name)

    if name in (
        "ReedfeedError", "InvalidFormat", "ExtractionError", "EmptyDocument", "CorruptSession"
    ):
        from reedfeed import errors
        return getattr(errors, name)

    raise AttributeError(f"module 'reedfeed' has no attribute {name!r}")


__all__ = [
    # Main entry points
    "reconstruct",
    "extract",
    "chunk",
    "ReaderConfig",

    # Convenience functions
    "extract_text",
    "import_file",
    "import_bytes",
    "import_text",

    # Types
    "Session",
    "TextRun",
    "Line",
    "PageLayout",
    "ReconstructOptions",

    # Errors
    "ReedfeedError",
    "InvalidFormat",
    "ExtractionError",
    "EmptyDocument",
    "CorruptSession",

    # Version
    "__version__",
]
