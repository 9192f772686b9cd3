"""Persisted JSON to editing document normalization.

Responsibilities:
- Walk untrusted JSON in lockstep with a page schema and produce a fully
  default-valued editing document.
- Lift legacy plain-string leaves into locale records.
- Assign a stable `_id` to every record element of an ordered list.

Normalization is total: any JSON value (including `None`) normalizes without
raising, degrading malformed parts to their defaults.
"""

from __future__ import annotations

import copy
from typing import Any

from ..config import LocaleSettings
from ..errors import SchemaError
from ..models.datatypes import STABLE_ID_KEY
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
from .ids import StableIdAssigner, item_seed
from .localized import ensure_record


class DocumentNormalizer:
    """Schema-driven normalizer bound to one locale configuration."""

    def __init__(self, locales: LocaleSettings) -> None:
        self._locales = locales

    def normalize(self, raw: object, schema: PageSchema | FieldKind) -> Any:
        """Return the editing document for `raw` under `schema`."""

        return self.normalize_value(raw, resolve_root(schema))

    def normalize_value(self, raw: object, kind: FieldKind) -> Any:
        """Normalize one value according to its field kind."""

        if isinstance(kind, LocalizedText):
            return ensure_record(raw, self._locales)
        if isinstance(kind, PlainText):
            return ensure_string(raw, kind.default)
        if isinstance(kind, Number):
            return ensure_number(raw, kind.default)
        if isinstance(kind, Boolean):
            parsed = parse_permissive_boolean(raw)
            return kind.default if parsed is None else parsed
        if isinstance(kind, Passthrough):
            return copy.deepcopy(raw)
        if isinstance(kind, Nested):
            return self._normalize_nested(raw, kind)
        if isinstance(kind, OrderedList):
            return self._normalize_list(raw, kind)
        if isinstance(kind, KeyedMap):
            return self._normalize_keyed_map(raw, kind)
        raise SchemaError(f"Unsupported field kind `{type(kind).__name__}`.")

    def _normalize_nested(self, raw: object, kind: Nested) -> dict[str, Any]:
        source = ensure_mapping(raw)
        return {
            name: self.normalize_value(source.get(name), sub_kind)
            for name, sub_kind in kind.fields.items()
        }

    def _normalize_list(self, raw: object, kind: OrderedList) -> list[Any]:
        items = ensure_list(raw)
        if not isinstance(kind.item, Nested):
            return [self.normalize_value(item, kind.item) for item in items]

        assigner = StableIdAssigner(kind.id_prefix)
        normalized_items: list[dict[str, Any]] = []
        for index, item in enumerate(items):
            record = self._normalize_nested(item, kind.item)
            stable_id = assigner.assign(item_seed(kind, record, self._locales), index)
            normalized_items.append({STABLE_ID_KEY: stable_id, **record})
        return normalized_items

    def _normalize_keyed_map(self, raw: object, kind: KeyedMap) -> dict[str, Any]:
        source = ensure_mapping(raw)
        normalized: dict[str, Any] = {}
        for key, value in source.items():
            if not isinstance(key, str):
                continue
            if key in kind.passthrough_keys:
                normalized[key] = copy.deepcopy(value)
            else:
                normalized[key] = self.normalize_value(value, kind.value)
        return normalized


def normalize(raw: object, schema: PageSchema | FieldKind, locales: LocaleSettings) -> Any:
    """Normalize persisted JSON into an editing document."""

    return DocumentNormalizer(locales).normalize(raw, schema)
