"""Shared typed data models for sitecopy.

This package contains dataclasses and aliases used across engine modules to
avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    STABLE_ID_KEY,
    CleanPolicy,
    DiffEntry,
    DocumentPath,
    LocalizedValue,
    MissingLocaleRecord,
    SaveOutcome,
)

__all__ = [
    "STABLE_ID_KEY",
    "CleanPolicy",
    "DiffEntry",
    "DocumentPath",
    "LocalizedValue",
    "MissingLocaleRecord",
    "SaveOutcome",
]
