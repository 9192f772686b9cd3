"""Editing document to persisted JSON serialization.

Responsibilities:
- Reduce locale records through each field's clean policy.
- Drop stable ids and every key the schema does not declare.
- Apply list filters (`keep_if`, `skip_empty`, `max_items`) and empty-value
  omission flags.
- Report the override key of every kept list element, computed over the
  unfiltered list, so dropped elements never shift later translations.

Serialization is deterministic: equal documents always produce equal output.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from ..config import LocaleSettings, OverrideAlignment
from ..errors import SchemaError
from ..models.datatypes import CleanPolicy, DocumentPath
from ..parsing import ensure_list, ensure_mapping, ensure_number, ensure_string, parse_permissive_boolean
from ..schema.fields import (
    Boolean,
    FieldKind,
    KeyedMap,
    LocalizedText,
    Nested,
    Number,
    OrderedList,
    PageSchema,
    Passthrough,
    PlainText,
    resolve_root,
)
from .ids import list_alignment_keys
from .localized import clean_for_persist, ensure_record, has_text

ListKeys = dict[DocumentPath, list[str | int]]

_OMIT = object()


def has_content(value: object) -> bool:
    """Return whether a serialized value carries anything worth persisting.

    Strings need non-blank text; containers need one element with content;
    numbers and booleans always count.
    """

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Mapping):
        return any(has_content(item) for item in value.values())
    if isinstance(value, list | tuple):
        return any(has_content(item) for item in value)
    return True


class DocumentSerializer:
    """Schema-driven serializer bound to one locale configuration.

    Args:
        locales: Supported locale set.
        alignment: List alignment strategy used to compute the override keys
            reported by `serialize_with_keys`.
    """

    def __init__(
        self,
        locales: LocaleSettings,
        alignment: OverrideAlignment = OverrideAlignment.POSITION,
    ) -> None:
        self._locales = locales
        self._alignment = alignment

    def serialize(self, document: object, schema: PageSchema | FieldKind) -> Any:
        """Return the persisted form of an editing document."""

        serialized, _ = self.serialize_with_keys(document, schema)
        return serialized

    def serialize_with_keys(self, document: object, schema: PageSchema | FieldKind) -> tuple[Any, ListKeys]:
        """Return the persisted form plus the override keys of its lists.

        The key map is indexed by the path of each serialized list; its value
        holds, per kept element, the key that element had in the unfiltered
        editing-document list. `OverrideMerger` aligns overrides on it.
        """

        list_keys: ListKeys = {}
        serialized = self._serialize_value(document, resolve_root(schema), (), list_keys)
        return ({} if serialized is _OMIT else serialized), list_keys

    def _serialize_value(self, value: object, kind: FieldKind, path: DocumentPath, list_keys: ListKeys) -> Any:
        if isinstance(kind, LocalizedText):
            return self._serialize_localized(value, kind)
        if isinstance(kind, PlainText):
            text = ensure_string(value, kind.default).strip()
            if kind.omit_empty and not text:
                return _OMIT
            return text
        if isinstance(kind, Number):
            return ensure_number(value, kind.default)
        if isinstance(kind, Boolean):
            parsed = parse_permissive_boolean(value)
            return kind.default if parsed is None else parsed
        if isinstance(kind, Passthrough):
            return _OMIT if value is None else copy.deepcopy(value)
        if isinstance(kind, Nested):
            return self._serialize_nested(value, kind, path, list_keys)
        if isinstance(kind, OrderedList):
            return self._serialize_list(value, kind, path, list_keys)
        if isinstance(kind, KeyedMap):
            return self._serialize_keyed_map(value, kind, path, list_keys)
        raise SchemaError(f"Unsupported field kind `{type(kind).__name__}`.")

    def _serialize_localized(self, value: object, kind: LocalizedText) -> Any:
        """Keep the default locale, plus explicit clears under keep-empty.

        Non-default text reaches the payload through the override merge.
        Cleared non-default entries are not overrides, so a keep-empty field
        persists them from the document as `""`.
        """

        record = ensure_record(value, self._locales)
        if kind.omit_empty and not has_text(record):
            return _OMIT
        default_locale = self._locales.default_locale
        keep_empty = kind.policy is CleanPolicy.KEEP_EMPTY
        persisted = {
            code: text
            for code, text in record.items()
            if code == default_locale or (keep_empty and not text.strip())
        }
        return clean_for_persist(persisted, kind.policy, self._locales, kind.required)

    def _serialize_nested(self, value: object, kind: Nested, path: DocumentPath, list_keys: ListKeys) -> Any:
        source = ensure_mapping(value)
        serialized: dict[str, Any] = {}
        for name, sub_kind in kind.fields.items():
            item = self._serialize_value(source.get(name), sub_kind, path + (name,), list_keys)
            if item is not _OMIT:
                serialized[name] = item
        if kind.omit_empty and not self._has_document_content(value, kind):
            return _OMIT
        return serialized

    def _serialize_list(self, value: object, kind: OrderedList, path: DocumentPath, list_keys: ListKeys) -> Any:
        elements = ensure_list(value)
        source_keys = list_alignment_keys(kind, elements, self._locales, self._alignment)
        serialized: list[Any] = []
        kept_keys: list[str | int] = []
        for element, key in zip(elements, source_keys):
            element_keys: ListKeys = {}
            item = self._serialize_value(element, kind.item, path + (len(serialized),), element_keys)
            if item is _OMIT:
                continue
            if kind.keep_if and not self._passes_keep_if(element, item, kind):
                continue
            if kind.skip_empty and not self._has_document_content(element, kind.item):
                continue
            serialized.append(item)
            kept_keys.append(key)
            list_keys.update(element_keys)
        if kind.max_items is not None:
            serialized = serialized[: kind.max_items]
            kept_keys = kept_keys[: kind.max_items]
        if kind.omit_empty and not serialized:
            return _OMIT
        list_keys[path] = kept_keys
        return serialized

    def _serialize_keyed_map(
        self, value: object, kind: KeyedMap, path: DocumentPath, list_keys: ListKeys
    ) -> dict[str, Any]:
        serialized: dict[str, Any] = {}
        for key, entry in ensure_mapping(value).items():
            if not isinstance(key, str):
                continue
            if key in kind.passthrough_keys:
                item = _OMIT if entry is None else copy.deepcopy(entry)
            else:
                item = self._serialize_value(entry, kind.value, path + (key,), list_keys)
            if item is not _OMIT:
                serialized[key] = item
        return serialized

    def _passes_keep_if(self, element: object, item: Mapping[str, Any], kind: OrderedList) -> bool:
        """Return whether one of the `keep_if` fields of a record has content.

        Localized fields are judged on the full document record, since the
        serialized form only carries the default locale.
        """

        source = ensure_mapping(element)
        for name in kind.keep_if or ():
            sub_kind = kind.item.fields[name]
            if isinstance(sub_kind, LocalizedText):
                if has_text(ensure_record(source.get(name), self._locales)):
                    return True
            elif has_content(item.get(name)):
                return True
        return False

    def _has_document_content(self, value: object, kind: FieldKind) -> bool:
        """Return whether an editing-document value carries text in any locale."""

        if isinstance(kind, LocalizedText):
            return has_text(ensure_record(value, self._locales))
        if isinstance(kind, PlainText):
            return bool(ensure_string(value).strip())
        if isinstance(kind, Number | Boolean):
            return True
        if isinstance(kind, Nested):
            source = ensure_mapping(value)
            return any(
                self._has_document_content(source.get(name), sub_kind)
                for name, sub_kind in kind.fields.items()
            )
        if isinstance(kind, OrderedList):
            return any(self._has_document_content(item, kind.item) for item in ensure_list(value))
        if isinstance(kind, KeyedMap):
            return any(
                self._has_document_content(entry, kind.value)
                for key, entry in ensure_mapping(value).items()
                if key not in kind.passthrough_keys
            )
        return has_content(value)


def serialize(document: object, schema: PageSchema | FieldKind, locales: LocaleSettings) -> Any:
    """Serialize an editing document into persistable JSON."""

    return DocumentSerializer(locales).serialize(document, schema)
