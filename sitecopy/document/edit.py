"""Copy-on-write editing helpers.

Every helper returns a new root and leaves its input untouched. Only the
containers along the edited path are copied; untouched subtrees are shared
between the old and new roots, so callers must treat documents as immutable.

Paths are tuples of `str` (record field or map key) and `int` (list index).
"""

from __future__ import annotations

from typing import Any, Callable

from ..config import LocaleSettings
from ..models.datatypes import STABLE_ID_KEY, DocumentPath
from ..schema.fields import Nested, OrderedList
from .ids import create_id
from .localized import ensure_record, set_text
from .normalizer import DocumentNormalizer


def format_path(path: DocumentPath) -> str:
    """Render a path as dotted text, e.g. `sections.0.heading`."""

    return ".".join(str(segment) for segment in path)


def get_in(root: Any, path: DocumentPath, default: Any = None) -> Any:
    """Return the value at `path`, or `default` when any segment is missing."""

    current = root
    for segment in path:
        if isinstance(segment, int) and isinstance(current, list):
            if not -len(current) <= segment < len(current):
                return default
            current = current[segment]
        elif isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            return default
    return current


def _copy_container(value: Any, segment: str | int) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return [] if isinstance(segment, int) else {}


def update_in(root: Any, path: DocumentPath, update: Callable[[Any], Any]) -> Any:
    """Return a new root where the value at `path` is replaced by `update(value)`.

    Missing record containers along the path are created. List segments must
    address an existing element.

    Raises:
        IndexError: If a list index along the path is out of range.
    """

    if not path:
        return update(root)

    segment, rest = path[0], path[1:]
    container = _copy_container(root, segment)
    if isinstance(container, list):
        if not isinstance(segment, int):
            raise IndexError(f"List segment must be an integer, got `{segment!r}`.")
        if not -len(container) <= segment < len(container):
            raise IndexError(f"List index {segment} out of range for length {len(container)}.")
        current = container[segment]
    else:
        current = container.get(segment)
    container[segment] = update_in(current, rest, update)
    return container


def set_in(root: Any, path: DocumentPath, value: Any) -> Any:
    """Return a new root with `value` stored at `path`."""

    return update_in(root, path, lambda _current: value)


def set_localized_text(root: Any, path: DocumentPath, text: str, locale: str, locales: LocaleSettings) -> Any:
    """Return a new root with one locale of the record at `path` set to `text`."""

    return update_in(root, path, lambda current: set_text(ensure_record(current, locales), text, locale))


def insert_item(root: Any, path: DocumentPath, item: Any, index: int | None = None) -> Any:
    """Return a new root with `item` inserted into the list at `path`.

    `index=None` appends.
    """

    def _insert(current: Any) -> list[Any]:
        items = list(current) if isinstance(current, list) else []
        items.insert(len(items) if index is None else index, item)
        return items

    return update_in(root, path, _insert)


def remove_item(root: Any, path: DocumentPath, index: int) -> Any:
    """Return a new root without the element at `index` of the list at `path`."""

    def _remove(current: Any) -> list[Any]:
        items = list(current) if isinstance(current, list) else []
        if not -len(items) <= index < len(items):
            raise IndexError(f"List index {index} out of range for length {len(items)}.")
        del items[index]
        return items

    return update_in(root, path, _remove)


def move_item(root: Any, path: DocumentPath, source: int, target: int) -> Any:
    """Return a new root where one list element moved from `source` to `target`."""

    def _move(current: Any) -> list[Any]:
        items = list(current) if isinstance(current, list) else []
        if not 0 <= source < len(items) or not 0 <= target < len(items):
            raise IndexError(f"Cannot move {source} -> {target} in list of length {len(items)}.")
        items.insert(target, items.pop(source))
        return items

    return update_in(root, path, _move)


def new_list_item(kind: OrderedList, locales: LocaleSettings) -> Any:
    """Return a default-valued element for a list, with a fresh unique id."""

    item = DocumentNormalizer(locales).normalize_value(None, kind.item)
    if isinstance(kind.item, Nested):
        return {STABLE_ID_KEY: create_id(kind.id_prefix), **item}
    return item


def set_override_text(overrides: Any, path: DocumentPath, locale: str, text: str) -> Any:
    """Return a new override map with `locale` at `path` set to `text`.

    An empty `text` is kept as `""` so the merger can clear that locale.
    """

    def _set(current: Any) -> dict[str, str]:
        record = dict(current) if isinstance(current, dict) else {}
        record[locale] = text
        return record

    return _update_override(overrides if isinstance(overrides, dict) else {}, path, _set)


def _update_override(root: dict[Any, Any], path: DocumentPath, update: Callable[[Any], Any]) -> dict[Any, Any]:
    """Copy-on-write update where every container is a mapping, list keys included."""

    if not path:
        return update(root)
    segment, rest = path[0], path[1:]
    container = dict(root)
    current = container.get(segment)
    container[segment] = _update_override(current if isinstance(current, dict) else {}, rest, update)
    return container
