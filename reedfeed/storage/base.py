"""
Abstract Session Store Interface

Defines the contract for persisting the current reading session.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reedfeed.types import Session


class SessionStore(ABC):
    """
    Abstract interface for session stores.

    A store holds at most one session in a single fixed slot. ``save``
    replaces whatever is there; sessions are never merged.

    Lifecycle:
        store = JsonSessionStore(path)
        store.save(session)
        session = store.load()
        store.clear()
    """

    @abstractmethod
    def save(self, session: "Session") -> None:
        """Store ``session``, replacing any previous one."""
        ...

    @abstractmethod
    def load(self) -> "Session | None":
        """Return the stored session, or None when there is none."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Delete the stored session (no-op when empty)."""
        ...
