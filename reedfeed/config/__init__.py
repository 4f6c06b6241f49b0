"""
Configuration System

Manages configuration for reedfeed with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to ReaderConfig())
    2. Environment variables (REEDFEED_* prefix, .env loaded by the CLI)
    3. Built-in defaults

A TOML file can be loaded explicitly with ReaderConfig.from_file().

Modules:
    settings: ReaderConfig class
"""

from reedfeed.config.settings import ReaderConfig

__all__ = ["ReaderConfig"]
