"""Core datatypes shared across sitecopy modules.

Responsibilities:
- Represent the small immutable records exchanged between the engine and its
  collaborators (save transport, history diff, locale coverage reports).
- Hold enums and reserved keys that several modules need, so that schema,
  document, and session modules never import each other in a cycle.

Key types:
- `CleanPolicy`, `SaveOutcome`, `DiffEntry`, and `MissingLocaleRecord`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


LocalizedValue = dict[str, str]
"""Mapping from locale code to text. Absent key = never edited, `""` = cleared."""

DocumentPath = tuple[str | int, ...]
"""Address of a node: `str` segments for record fields/map keys, `int` for list slots."""

STABLE_ID_KEY = "_id"
"""Reserved key carrying the editing-session identifier of a list record."""


class CleanPolicy(str, Enum):
    """Persistence policy applied to one localized text field.

    Attributes:
        DROP_EMPTY: Locale keys whose trimmed value is empty are not persisted.
        KEEP_EMPTY: Explicitly empty locale keys are persisted as `""` so that a
            cleared field is not refilled from a fallback on the next load.
    """

    DROP_EMPTY = "drop-empty"
    KEEP_EMPTY = "keep-empty"


@dataclass(frozen=True, slots=True)
class SaveOutcome:
    """Result signal returned by a save transport.

    Attributes:
        status: `success` or `error`.
        message: Human-readable passthrough text for the UI layer.
    """

    status: str
    message: str = ""

    @property
    def ok(self) -> bool:
        """Return whether the save succeeded."""

        return self.status == "success"

    @classmethod
    def success(cls, message: str = "") -> SaveOutcome:
        """Build a success outcome."""

        return cls(status="success", message=message)

    @classmethod
    def error(cls, message: str) -> SaveOutcome:
        """Build an error outcome."""

        return cls(status="error", message=message)


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """One JSON-pointer addressed change between two document versions.

    Attributes:
        op: `add`, `remove`, or `replace`.
        path: RFC 6901 JSON pointer of the changed node.
        before: Previous value (`remove`/`replace` only).
        after: Next value (`add`/`replace` only).
    """

    op: str
    path: str
    before: Any = None
    after: Any = None

    def as_dict(self) -> dict[str, Any]:
        """Return the entry in its persisted history shape."""

        payload: dict[str, Any] = {"op": self.op, "path": self.path}
        if self.op in {"remove", "replace"}:
            payload["before"] = self.before
        if self.op in {"add", "replace"}:
            payload["after"] = self.after
        return payload


@dataclass(frozen=True, slots=True)
class MissingLocaleRecord:
    """Localized field that has text but lacks some supported locales.

    Attributes:
        path: Dotted document path of the field.
        missing: Locale codes without non-empty text.
        value: Normalized record at the path.
    """

    path: str
    missing: tuple[str, ...]
    value: LocalizedValue
