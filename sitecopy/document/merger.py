"""Recombination of serialized documents with locale overrides.

Responsibilities:
- Overlay non-default-locale entries from an override map onto a freshly
  serialized document; default-locale text always comes from the document.
- Align list overrides by index or by content seed id, using the element keys
  reported by the serializer when list filters dropped elements.
- Report overrides whose target no longer exists instead of failing.

The merger never mutates its inputs and is idempotent: merging the same
override map twice yields the same payload as merging it once.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping, Sequence

from ..config import LocaleSettings, OverrideAlignment
from ..models.datatypes import CleanPolicy, DocumentPath
from ..parsing import ensure_mapping
from ..schema.fields import FieldKind, KeyedMap, LocalizedText, Nested, OrderedList, PageSchema, resolve_root
from .ids import list_alignment_keys
from .localized import ensure_record

UnmatchedOverrideHandler = Callable[[DocumentPath], None]

_SKIP = object()


class OverrideMerger:
    """Schema-driven override merger.

    Args:
        locales: Supported locale set; the default locale is never overlaid.
        alignment: List alignment strategy used when the overrides were
            extracted.
        on_unmatched: Called with the path of every override entry that has
            no matching element in the serialized document.
    """

    def __init__(
        self,
        locales: LocaleSettings,
        alignment: OverrideAlignment = OverrideAlignment.POSITION,
        on_unmatched: UnmatchedOverrideHandler | None = None,
    ) -> None:
        self._locales = locales
        self._alignment = alignment
        self._on_unmatched = on_unmatched

    def merge(
        self,
        serialized: Any,
        overrides: Mapping[Any, Any],
        schema: PageSchema | FieldKind,
        list_keys: Mapping[DocumentPath, Sequence[str | int]] | None = None,
    ) -> Any:
        """Return `serialized` with `overrides` merged in.

        `list_keys` maps serialized list paths to the override key of each
        element, as returned by `DocumentSerializer.serialize_with_keys`. Lists
        without an entry are keyed from their own elements.
        """

        merged = copy.deepcopy(serialized)
        if not isinstance(overrides, Mapping) or not overrides:
            return merged
        result = self._merge_value(merged, overrides, resolve_root(schema), (), list_keys or {})
        return merged if result is _SKIP else result

    def _merge_value(
        self, target: Any, override: Any, kind: FieldKind, path: DocumentPath, list_keys: Mapping[Any, Any]
    ) -> Any:
        if isinstance(kind, LocalizedText):
            return self._merge_localized(target, override, kind)
        if not isinstance(override, Mapping):
            return _SKIP if target is None else target
        if isinstance(kind, Nested):
            return self._merge_nested(target, override, kind, path, list_keys)
        if isinstance(kind, OrderedList):
            return self._merge_list(target, override, kind, path, list_keys)
        if isinstance(kind, KeyedMap):
            return self._merge_keyed_map(target, override, kind, path, list_keys)
        return _SKIP if target is None else target

    def _merge_localized(self, target: Any, override: Any, kind: LocalizedText) -> Any:
        if isinstance(target, Mapping):
            record = dict(target)
        else:
            record = ensure_record(target, self._locales)

        for code, text in ensure_mapping(override).items():
            if code == self._locales.default_locale or not self._locales.is_supported(code):
                continue
            if not isinstance(text, str):
                continue
            trimmed = text.strip()
            if trimmed:
                record[code] = trimmed
            elif kind.policy is CleanPolicy.KEEP_EMPTY:
                record[code] = ""
            else:
                record.pop(code, None)

        if target is None and not record:
            return _SKIP
        return record

    def _merge_nested(
        self, target: Any, override: Mapping[Any, Any], kind: Nested, path: DocumentPath, list_keys: Mapping[Any, Any]
    ) -> Any:
        record = target if isinstance(target, dict) else {}
        for name, sub_override in override.items():
            sub_kind = kind.fields.get(name)
            if sub_kind is None:
                continue
            merged = self._merge_value(record.get(name), sub_override, sub_kind, path + (name,), list_keys)
            if merged is not _SKIP:
                record[name] = merged
        if target is None and not record:
            return _SKIP
        return record

    def _merge_list(
        self, target: Any, override: Mapping[Any, Any], kind: OrderedList, path: DocumentPath, list_keys: Mapping[Any, Any]
    ) -> Any:
        if not isinstance(target, list):
            for key in override:
                self._report(path + (key,))
            return _SKIP if target is None else target

        keys = list(list_keys.get(path, ()))
        if len(keys) != len(target):
            keys = list_alignment_keys(kind, target, self._locales, self._alignment)
        positions = {key: index for index, key in enumerate(keys)}
        for key, sub_override in override.items():
            index = positions.get(self._coerce_list_key(key))
            if index is None:
                self._report(path + (key,))
                continue
            merged = self._merge_value(target[index], sub_override, kind.item, path + (index,), list_keys)
            if merged is not _SKIP:
                target[index] = merged
        return target

    def _merge_keyed_map(
        self, target: Any, override: Mapping[Any, Any], kind: KeyedMap, path: DocumentPath, list_keys: Mapping[Any, Any]
    ) -> Any:
        if not isinstance(target, dict):
            for key in override:
                self._report(path + (key,))
            return _SKIP if target is None else target

        for key, sub_override in override.items():
            if key in kind.passthrough_keys:
                continue
            if key not in target:
                self._report(path + (key,))
                continue
            merged = self._merge_value(target[key], sub_override, kind.value, path + (key,), list_keys)
            if merged is not _SKIP:
                target[key] = merged
        return target

    def _coerce_list_key(self, key: Any) -> Any:
        """Accept string indices for positional overrides read back from JSON."""

        if self._alignment is OverrideAlignment.POSITION and isinstance(key, str) and key.isdigit():
            return int(key)
        return key

    def _report(self, path: DocumentPath) -> None:
        if self._on_unmatched is not None:
            self._on_unmatched(path)


def merge(
    serialized: Any,
    overrides: Mapping[Any, Any],
    schema: PageSchema | FieldKind,
    locales: LocaleSettings,
    alignment: OverrideAlignment = OverrideAlignment.POSITION,
    on_unmatched: UnmatchedOverrideHandler | None = None,
    list_keys: Mapping[DocumentPath, Sequence[str | int]] | None = None,
) -> Any:
    """Merge an override map into a serialized document."""

    return OverrideMerger(locales, alignment, on_unmatched).merge(serialized, overrides, schema, list_keys)
