"""Locale coverage reporting for localized leaves."""

from __future__ import annotations

from typing import Any

from ..config import LocaleSettings
from ..models.datatypes import DocumentPath, MissingLocaleRecord
from ..parsing import ensure_list, ensure_mapping
from ..schema.fields import FieldKind, KeyedMap, LocalizedText, Nested, OrderedList, PageSchema, resolve_root
from .edit import format_path
from .localized import ensure_record, has_text, missing_locales


def collect_missing_locales(
    document: Any,
    schema: PageSchema | FieldKind,
    locales: LocaleSettings,
    required: tuple[str, ...] | None = None,
) -> list[MissingLocaleRecord]:
    """Return localized fields that have text but lack some required locales.

    Fields without text in any locale are not reported: they are empty, not
    partially translated. Works on raw JSON and on editing documents alike.
    """

    records: list[MissingLocaleRecord] = []
    _walk(document, resolve_root(schema), (), locales, required, records)
    return records


def _walk(
    value: Any,
    kind: FieldKind,
    path: DocumentPath,
    locales: LocaleSettings,
    required: tuple[str, ...] | None,
    records: list[MissingLocaleRecord],
) -> None:
    if isinstance(kind, LocalizedText):
        record = ensure_record(value, locales)
        if not has_text(record):
            return
        missing = missing_locales(record, locales, required)
        if missing:
            records.append(MissingLocaleRecord(path=format_path(path), missing=missing, value=record))
        return
    if isinstance(kind, Nested):
        source = ensure_mapping(value)
        for name, sub_kind in kind.fields.items():
            _walk(source.get(name), sub_kind, path + (name,), locales, required, records)
        return
    if isinstance(kind, OrderedList):
        for index, item in enumerate(ensure_list(value)):
            _walk(item, kind.item, path + (index,), locales, required, records)
        return
    if isinstance(kind, KeyedMap):
        for key, entry in ensure_mapping(value).items():
            if isinstance(key, str) and key not in kind.passthrough_keys:
                _walk(entry, kind.value, path + (key,), locales, required, records)


def format_missing_locale_record(record: MissingLocaleRecord) -> str:
    """Render one record as `path: missing en, zh-TW`."""

    return f"{record.path}: missing {', '.join(record.missing)}"
