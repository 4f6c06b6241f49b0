"""
Public API Layer

User-facing functions that turn documents into reading sessions.

Modules:
    importer: extract_text, import_file, import_bytes, import_text
"""

from reedfeed.api.importer import extract_text, import_bytes, import_file, import_text

__all__ = ["extract_text", "import_bytes", "import_file", "import_text"]
