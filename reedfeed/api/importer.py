"""
Document Import

Top-level functions that take a file (or pasted text) all the way to a
reading session: pick the extraction path from the file name, extract
text, chunk it, and wrap the chunks in a Session at position 0.

Example:
    >>> from reedfeed import import_file
    >>> session = import_file("moby-dick.epub")
    >>> session.title, len(session.chunks)
    ('moby-dick', 2417)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from reedfeed.errors import EmptyDocument
from reedfeed.ingestion.chunking import chunk
from reedfeed.ingestion.epub import extract
from reedfeed.ingestion.pdf import reconstruct
from reedfeed.types import Session
from reedfeed.utils.text import strip_extension

if TYPE_CHECKING:
    from reedfeed.config.settings import ReaderConfig

logger = logging.getLogger(__name__)

PASTED_TEXT_TITLE = "Pasted text"


def _resolve_config(config: "ReaderConfig | None") -> "ReaderConfig":
    if config is None:
        from reedfeed.config import ReaderConfig

        config = ReaderConfig()
    return config


def decode_text(data: bytes) -> str:
    """Decode plain text as UTF-8, dropping a BOM and replacing bad bytes."""
    return data.decode("utf-8-sig", errors="replace")


def extract_text(
    data: bytes,
    filename: str,
    config: "ReaderConfig | None" = None,
) -> str:
    """
    Extract markdown or plain text from document bytes.

    ``.pdf`` goes through layout reconstruction, ``.epub`` through spine
    serialization; anything else is decoded as UTF-8 text.

    Raises:
        ExtractionError: If a PDF cannot be opened
        InvalidFormat: If an EPUB's container or package document is broken
    """
    suffix = Path(filename).suffix.lower()

    if suffix == ".pdf":
        config = _resolve_config(config)
        return reconstruct(data, config.reconstruct_options())
    if suffix == ".epub":
        return extract(data)
    return decode_text(data)


def import_text(
    text: str,
    title: str = PASTED_TEXT_TITLE,
    config: "ReaderConfig | None" = None,
) -> Session:
    """
    Chunk already-extracted text into a new session.

    Raises:
        EmptyDocument: If the text has nothing to read
    """
    if not text.strip():
        raise EmptyDocument("no readable text")

    config = _resolve_config(config)
    chunks = chunk(text, min_chars=config.min_chars, hard_max=config.hard_max)
    if not chunks:
        raise EmptyDocument("no readable text")

    logger.info(f"Imported {title!r}: {len(chunks)} chunks")
    return Session(title=title, chunks=chunks, position=0)


def import_bytes(
    data: bytes,
    filename: str,
    config: "ReaderConfig | None" = None,
) -> Session:
    """Extract and chunk a document given its bytes and file name."""
    config = _resolve_config(config)
    text = extract_text(data, filename, config)
    return import_text(text, title=strip_extension(Path(filename).name), config=config)


def import_file(
    path: str | Path,
    config: "ReaderConfig | None" = None,
) -> Session:
    """
    Extract and chunk a document from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return import_bytes(path.read_bytes(), path.name, config)
