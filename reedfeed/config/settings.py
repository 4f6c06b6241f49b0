"""
ReaderConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> config = ReaderConfig()

    >>> # Explicit configuration
    >>> config = ReaderConfig(min_chars=120, max_pages=50)

    >>> # From config file
    >>> config = ReaderConfig.from_file("./reedfeed.toml")

Environment Variables:
    REEDFEED_SESSION_PATH - Session file location
    REEDFEED_MAX_PAGES - Only read this many PDF pages
    REEDFEED_MIN_CHARS - Minimum chunk length target
    REEDFEED_HARD_MAX - Maximum chunk length
    REEDFEED_LOG_LEVEL - Logging level for the CLI
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

from reedfeed.types import ReconstructOptions

# TOML support: tomllib is built-in for Python 3.11+, use tomli for 3.10
try:
    import tomllib

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomllib.load(f))

except ImportError:
    import tomli

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomli.load(f))


class ReaderConfig:
    """Configuration for reedfeed."""

    # === Chunking Configuration ===

    min_chars: int = 80
    """Keep adding sentences until a chunk reaches this length"""

    hard_max: int = 600
    """Maximum chunk length; longer sentences are hard-wrapped"""

    # === PDF Configuration ===

    max_pages: int | None = None
    """Only read this many pages (None = all)"""

    y_step: float = 2.0
    """Vertical quantization step when grouping runs into lines"""

    header_zone_pct: float = 0.10
    """Top fraction of a page scanned for running headers"""

    footer_zone_pct: float = 0.12
    """Bottom fraction of a page scanned for running footers"""

    repeated_line_min_count: int = 3
    """Zone occurrences before a line is treated as boilerplate"""

    paragraph_gap_factor: float = 1.8
    """Multiple of the typical line gap that always starts a paragraph"""

    heading_font_ratio: float = 1.35
    """Lines this much larger than body text become headings (0 disables)"""

    join_across_pages: bool = False
    """Let an unfinished paragraph continue onto the next page"""

    # === Session Configuration ===

    session_path: Path = Path.home() / ".reedfeed" / "session.json"
    """Where the current reading session is stored"""

    # === Logging ===

    log_level: str = "WARNING"
    """Logging level used by the CLI"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self.session_path = Path(self.session_path).expanduser()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        import os

        if path := os.getenv("REEDFEED_SESSION_PATH"):
            self.session_path = Path(path)
        if pages := os.getenv("REEDFEED_MAX_PAGES"):
            self.max_pages = int(pages)
        if chars := os.getenv("REEDFEED_MIN_CHARS"):
            self.min_chars = int(chars)
        if chars := os.getenv("REEDFEED_HARD_MAX"):
            self.hard_max = int(chars)
        if level := os.getenv("REEDFEED_LOG_LEVEL"):
            self.log_level = level.upper()

    @classmethod
    def from_file(cls, path: str | Path) -> "ReaderConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened: keys in ``[pdf]`` and ``[chunking]``
        map directly to option names, ``[session] path`` maps to
        ``session_path``.

        Example TOML:
            [chunking]
            min_chars = 100
            hard_max = 500

            [pdf]
            max_pages = 40
            paragraph_gap_factor = 2.0

            [session]
            path = "~/books/session.json"

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        # Map section names to config key prefixes
        section_mapping = {
            "chunking": "",
            "pdf": "",
            "session": "session_",
            "logging": "log_",
        }

        flat_config: dict[str, Any] = {}
        for section, prefix in section_mapping.items():
            if section in data:
                for key, value in data[section].items():
                    flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "ReaderConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """Save configuration to a TOML file readable by ``from_file``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float | bool | None]] = {
            "chunking": {
                "min_chars": self.min_chars,
                "hard_max": self.hard_max,
            },
            "pdf": {
                "max_pages": self.max_pages,
                "y_step": self.y_step,
                "header_zone_pct": self.header_zone_pct,
                "footer_zone_pct": self.footer_zone_pct,
                "repeated_line_min_count": self.repeated_line_min_count,
                "paragraph_gap_factor": self.paragraph_gap_factor,
                "heading_font_ratio": self.heading_font_ratio,
                "join_across_pages": self.join_across_pages,
            },
            "session": {
                "path": str(self.session_path),
            },
            "logging": {
                "level": self.log_level,
            },
        }

        # Build TOML string manually; None values are left out
        lines = ["# reedfeed configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
                    lines.append(f'{key} = "{escaped}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "ReaderConfig":
        """Return new config with specified overrides."""
        new_config = ReaderConfig.__new__(ReaderConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        return new_config

    def reconstruct_options(self) -> ReconstructOptions:
        """PDF reconstruction options taken from this config."""
        return ReconstructOptions(
            max_pages=self.max_pages,
            y_step=self.y_step,
            header_zone_pct=self.header_zone_pct,
            footer_zone_pct=self.footer_zone_pct,
            repeated_line_min_count=self.repeated_line_min_count,
            paragraph_gap_factor=self.paragraph_gap_factor,
            heading_font_ratio=self.heading_font_ratio,
            join_across_pages=self.join_across_pages,
        )
