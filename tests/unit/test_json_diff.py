"""Unit tests for JSON-pointer change lists."""

from __future__ import annotations

from sitecopy.document.diff import diff_json_values, json_pointer
from sitecopy.models.datatypes import DiffEntry


def test_json_pointer_escapes_segments() -> None:
    """Pointer segments should escape `~` before `/`."""

    assert json_pointer([]) == "/"
    assert json_pointer(["a/b~c", "0"]) == "/a~1b~0c/0"


def test_diff_without_previous_version_adds_root() -> None:
    """A missing previous version should be reported as one root `add`."""

    assert diff_json_values(None, {"a": 1}) == [DiffEntry(op="add", path="/", after={"a": 1})]


def test_diff_reports_nested_changes_in_first_seen_order() -> None:
    """Object keys and list slots should be compared recursively."""

    before = {"title": {"en": "A"}, "items": [1, 2, 3], "gone": True}
    after = {"title": {"en": "B", "zh-TW": "乙"}, "items": [1, 5], "new": None}

    entries = diff_json_values(before, after)

    assert [entry.as_dict() for entry in entries] == [
        {"op": "replace", "path": "/title/en", "before": "A", "after": "B"},
        {"op": "add", "path": "/title/zh-TW", "after": "乙"},
        {"op": "replace", "path": "/items/1", "before": 2, "after": 5},
        {"op": "remove", "path": "/items/2", "before": 3},
        {"op": "remove", "path": "/gone", "before": True},
        {"op": "add", "path": "/new", "after": None},
    ]


def test_diff_treats_type_changes_as_replace() -> None:
    """Changing a value's JSON type should replace it wholesale."""

    entries = diff_json_values({"x": 1, "y": [], "z": 1}, {"x": True, "y": {}, "z": 1.0})

    assert entries == [
        DiffEntry(op="replace", path="/x", before=1, after=True),
        DiffEntry(op="replace", path="/y", before=[], after={}),
    ]


def test_diff_of_equal_values_is_empty() -> None:
    """Equal documents should produce no entries."""

    assert diff_json_values({"a": [1, {"b": "c"}]}, {"a": [1, {"b": "c"}]}) == []
