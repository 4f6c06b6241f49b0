"""
Reading Session

A session is what the presentation layer persists between runs: the chunks
of the imported document and the index of the chunk being read.
"""

from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    A reading session for one imported document.

    Attributes:
        title: Display title (usually the file name without extension)
        chunks: Ordered chunks in reading order
        position: Index of the current chunk (0-indexed)

    Sessions are replaced wholesale on every position change; use ``at()``
    to get the updated copy.
    """

    title: str
    chunks: list[str] = Field(default_factory=list)
    position: int = Field(default=0, ge=0)

    @property
    def is_finished(self) -> bool:
        return not self.chunks or self.position >= len(self.chunks) - 1

    def current(self) -> str | None:
        """Return the chunk at the current position, if any."""
        if 0 <= self.position < len(self.chunks):
            return self.chunks[self.position]
        return None

    def at(self, position: int) -> "Session":
        """Return a copy moved to ``position``, clamped to the chunk range."""
        last = max(len(self.chunks) - 1, 0)
        return self.model_copy(update={"position": min(max(position, 0), last)})
