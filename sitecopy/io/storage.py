"""JSON file helpers for the command-line driver.

Responsibilities:
- Read persisted page documents from disk, treating a missing file as `{}`.
- Write payloads deterministically and expose a file-backed save writer for
  `EditingSession.save`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..document.envelope import with_meta_envelope
from ..models.datatypes import SaveOutcome


def read_json_document(path: Path) -> Any:
    """Load a JSON document; a missing file reads as an empty document.

    Raises:
        ValueError: If the file exists but is not valid JSON.
    """

    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"`{path}` is not valid JSON: {exc.msg} (line {exc.lineno}).") from exc


def dump_json(payload: Any, indent: int = 2) -> str:
    """Return deterministic JSON text with sorted keys and UTF-8 characters."""

    return json.dumps(payload, ensure_ascii=False, indent=indent or None, sort_keys=True)


def write_json_document(path: Path, payload: Any, indent: int = 2) -> Path:
    """Save a JSON payload and return the final path."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(payload, indent) + "\n", encoding="utf-8")
    return path


class FileSaveWriter:
    """Save writer that stores each payload in one JSON file."""

    def __init__(self, path: Path, indent: int = 2, stamp: bool = False) -> None:
        self.path = path
        self.indent = indent
        self.stamp = stamp

    def __call__(self, payload: Any) -> SaveOutcome:
        """Write `payload`, stamping it when requested, and report the outcome."""

        if self.stamp:
            payload = with_meta_envelope(payload)
        try:
            write_json_document(self.path, payload, self.indent)
        except OSError as exc:
            return SaveOutcome.error(f"Failed to write `{self.path}`: {exc}")
        return SaveOutcome.success(f"Saved `{self.path}`.")
