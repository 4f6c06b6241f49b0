"""
Error Types

Exceptions raised by the ingestion entry points and the session store.

Hierarchy:
    ReedfeedError
    ├── InvalidFormat    - container/package structure is malformed (EPUB)
    ├── ExtractionError  - the paged-document parser rejected the bytes (PDF)
    ├── EmptyDocument    - extraction succeeded but produced no readable text
    └── CorruptSession   - the stored session file is not valid JSON or not a session

The first three are fatal for the document being imported. Callers are
expected to report them once and let the user try another file.
"""


class ReedfeedError(Exception):
    """Base class for all reedfeed errors."""


class InvalidFormat(ReedfeedError, ValueError):
    """
    Raised when a container or package document is missing or unreadable.

    Attributes:
        artifact: Short description of the missing piece
            (e.g. "missing container descriptor")
    """

    def __init__(self, artifact: str) -> None:
        super().__init__(artifact)
        self.artifact = artifact


class ExtractionError(ReedfeedError):
    """Raised when the PDF parser cannot open the byte stream."""


class EmptyDocument(ReedfeedError):
    """Raised when an imported document contains no readable text."""


class CorruptSession(ReedfeedError):
    """Raised when the stored session file cannot be read back."""
