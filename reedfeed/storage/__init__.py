"""
Session Storage

Persistence for the current reading session.

Modules:
    base: SessionStore abstract interface (save/load/clear)
    json_store: JSON file implementation guarded by a file lock
"""

from reedfeed.storage.base import SessionStore
from reedfeed.storage.json_store import JsonSessionStore

__all__ = ["JsonSessionStore", "SessionStore"]
