"""Sparse extraction of non-default-locale text.

Responsibilities:
- Walk raw persisted JSON with the same schema the normalizer uses.
- Keep, per localized leaf, only trimmed non-empty entries of non-default
  locales.
- Omit every path whose subtree carries no such entry.

List elements are keyed by index under positional alignment and by content
seed id under seed alignment; keyed-map entries are keyed by their map key.
"""

from __future__ import annotations

from typing import Any

from ..config import LocaleSettings, OverrideAlignment
from ..parsing import ensure_list, ensure_mapping
from ..schema.fields import FieldKind, KeyedMap, LocalizedText, Nested, OrderedList, PageSchema, resolve_root
from .ids import list_alignment_keys
from .localized import non_default_entries


class OverrideExtractor:
    """Schema-driven override extractor."""

    def __init__(
        self,
        locales: LocaleSettings,
        alignment: OverrideAlignment = OverrideAlignment.POSITION,
    ) -> None:
        self._locales = locales
        self._alignment = alignment

    def extract(self, raw: object, schema: PageSchema | FieldKind) -> dict[Any, Any]:
        """Return the override map of `raw`; `{}` when nothing qualifies."""

        extracted = self._extract_value(raw, resolve_root(schema))
        return extracted if isinstance(extracted, dict) else {}

    def _extract_value(self, raw: object, kind: FieldKind) -> Any | None:
        if isinstance(kind, LocalizedText):
            entries = non_default_entries(ensure_mapping(raw), self._locales)
            return entries or None
        if isinstance(kind, Nested):
            source = ensure_mapping(raw)
            nested = {
                name: extracted
                for name, sub_kind in kind.fields.items()
                if (extracted := self._extract_value(source.get(name), sub_kind)) is not None
            }
            return nested or None
        if isinstance(kind, OrderedList):
            items = ensure_list(raw)
            keys = list_alignment_keys(kind, items, self._locales, self._alignment)
            by_key = {
                key: extracted
                for key, item in zip(keys, items)
                if (extracted := self._extract_value(item, kind.item)) is not None
            }
            return by_key or None
        if isinstance(kind, KeyedMap):
            by_entry = {
                key: extracted
                for key, value in ensure_mapping(raw).items()
                if isinstance(key, str)
                and key not in kind.passthrough_keys
                and (extracted := self._extract_value(value, kind.value)) is not None
            }
            return by_entry or None
        return None


def extract(
    raw: object,
    schema: PageSchema | FieldKind,
    locales: LocaleSettings,
    alignment: OverrideAlignment = OverrideAlignment.POSITION,
) -> dict[Any, Any]:
    """Extract the sparse override map from persisted JSON."""

    return OverrideExtractor(locales, alignment).extract(raw, schema)
