"""
JSON Session Store

Keeps the current session in a small JSON file.

File layout:
    {
      "schema_version": "1.0.0",
      "sessions": {"current": {"title": ..., "chunks": [...], "position": 0}}
    }

Writes go through a temporary file and an atomic rename, guarded by a
FileLock (``<file>.lock``) so two processes never interleave writes.

A file that is not valid JSON, or whose slot is not a valid session, makes
``load`` raise CorruptSession. ``save`` and ``clear`` overwrite such a file.
"""

import json
import logging
from pathlib import Path
from typing import Any

from filelock import FileLock
from pydantic import ValidationError

from reedfeed.errors import CorruptSession
from reedfeed.storage.base import SessionStore
from reedfeed.types import Session

logger = logging.getLogger(__name__)


class JsonSessionStore(SessionStore):
    """File-backed session store with a single fixed slot."""

    SCHEMA_VERSION = "1.0.0"
    SLOT = "current"

    def __init__(self, path: Path | str, *, lock_timeout: float = 30) -> None:
        self._path = Path(path).expanduser()
        self._lock = FileLock(str(self._path) + ".lock", timeout=lock_timeout)

    @property
    def path(self) -> Path:
        return self._path

    def _empty(self) -> dict[str, Any]:
        return {"schema_version": self.SCHEMA_VERSION, "sessions": {}}

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return self._empty()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptSession(f"session file {self._path} is not valid JSON") from exc
        if not isinstance(data, dict) or not isinstance(data.get("sessions", {}), dict):
            raise CorruptSession(f"session file {self._path} has an unexpected layout")
        return data

    def _read_or_reset(self) -> dict[str, Any]:
        try:
            return self._read()
        except CorruptSession as exc:
            logger.warning(f"{exc}; starting a fresh session file")
            return self._empty()

    def _write(self, data: dict[str, Any]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self._path)

    def save(self, session: Session) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            data = self._read_or_reset()
            data.setdefault("sessions", {})[self.SLOT] = session.model_dump()
            data["schema_version"] = self.SCHEMA_VERSION
            self._write(data)
        logger.debug(f"Saved session {session.title!r} at position {session.position}")

    def load(self) -> Session | None:
        """
        Return the stored session, or None when there is none.

        Raises:
            CorruptSession: If the file or its slot cannot be parsed
        """
        if not self._path.exists():
            return None
        with self._lock:
            data = self._read()
        stored = data.get("sessions", {}).get(self.SLOT)
        if stored is None:
            return None
        try:
            return Session.model_validate(stored)
        except ValidationError as exc:
            raise CorruptSession(f"session file {self._path} holds an invalid session") from exc

    def clear(self) -> None:
        if not self._path.exists():
            return
        with self._lock:
            data = self._read_or_reset()
            data.get("sessions", {}).pop(self.SLOT, None)
            self._write(data)
        logger.debug("Cleared stored session")
