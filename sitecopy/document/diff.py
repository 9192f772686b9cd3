"""JSON-pointer change lists between two document versions.

Used to record what a save changed. Lists are compared index by index, and
objects key by key in first-seen order. The document root is addressed as `/`.
"""

from __future__ import annotations

from typing import Any

from ..models.datatypes import DiffEntry

_ABSENT = object()


def json_pointer(segments: list[str]) -> str:
    """Build an RFC 6901 pointer, escaping `~` and `/` in each segment."""

    if not segments:
        return "/"
    escaped = (segment.replace("~", "~0").replace("/", "~1") for segment in segments)
    return "/" + "/".join(escaped)


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null"


def _collect(path: list[str], before: Any, after: Any, diffs: list[DiffEntry]) -> None:
    if before is _ABSENT and after is _ABSENT:
        return
    if before is _ABSENT:
        diffs.append(DiffEntry(op="add", path=json_pointer(path), after=after))
        return
    if after is _ABSENT:
        diffs.append(DiffEntry(op="remove", path=json_pointer(path), before=before))
        return

    if _json_type(before) != _json_type(after):
        diffs.append(DiffEntry(op="replace", path=json_pointer(path), before=before, after=after))
        return

    if isinstance(before, list):
        for index in range(max(len(before), len(after))):
            _collect(
                path + [str(index)],
                before[index] if index < len(before) else _ABSENT,
                after[index] if index < len(after) else _ABSENT,
                diffs,
            )
        return

    if isinstance(before, dict):
        keys = list(dict.fromkeys([*before.keys(), *after.keys()]))
        for key in keys:
            _collect(path + [str(key)], before.get(key, _ABSENT), after.get(key, _ABSENT), diffs)
        return

    if before != after:
        diffs.append(DiffEntry(op="replace", path=json_pointer(path), before=before, after=after))


def diff_json_values(before: Any, after: Any) -> list[DiffEntry]:
    """Return the changes turning `before` into `after`.

    A `before` of `None` means there was no previous version, so the whole
    `after` value is reported as one `add` at `/`.
    """

    diffs: list[DiffEntry] = []
    _collect([], _ABSENT if before is None else before, after, diffs)
    return diffs
