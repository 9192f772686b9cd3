"""Declarative field kinds describing one page document.

Responsibilities:
- Describe which leaves are localized text, plain scalars, records, ordered
  lists, dynamic-key maps, or opaque JSON.
- Validate descriptors at construction time so that a malformed descriptor
  fails fast instead of silently producing wrong documents.

Key types:
- `LocalizedText`, `PlainText`, `Number`, `Boolean`, `Passthrough`: leaves.
- `Nested`, `OrderedList`, `KeyedMap`: containers.
- `PageSchema`: one registered page type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from ..errors import SchemaError
from ..models.datatypes import STABLE_ID_KEY, CleanPolicy


@dataclass(frozen=True, slots=True)
class LocalizedText:
    """Per-locale text leaf.

    Attributes:
        policy: Clean policy applied when the record is persisted.
        required: Persist `{default_locale: ""}` instead of `{}` when empty.
        omit_empty: Omit the key entirely when no locale carries text.
    """

    policy: CleanPolicy = CleanPolicy.DROP_EMPTY
    required: bool = False
    omit_empty: bool = False


@dataclass(frozen=True, slots=True)
class PlainText:
    """Locale-independent string leaf (hrefs, slugs, image paths)."""

    default: str = ""
    omit_empty: bool = False


@dataclass(frozen=True, slots=True)
class Number:
    """Numeric leaf."""

    default: int | float = 0


@dataclass(frozen=True, slots=True)
class Boolean:
    """Boolean leaf parsed permissively."""

    default: bool = False


@dataclass(frozen=True, slots=True)
class Passthrough:
    """Opaque JSON value copied verbatim (`_meta`, unmodelled groups)."""


@dataclass(frozen=True, slots=True)
class Nested:
    """Record with a fixed set of named fields.

    Attributes:
        fields: Ordered field name to kind mapping.
        omit_empty: Omit the record when none of its serialized fields has content.
    """

    fields: Mapping[str, FieldKind]
    omit_empty: bool = False

    def __post_init__(self) -> None:
        """Validate field names and kinds."""

        if not isinstance(self.fields, Mapping) or not self.fields:
            raise SchemaError("`Nested.fields` must be a non-empty mapping.")
        for name, kind in self.fields.items():
            if not isinstance(name, str) or not name:
                raise SchemaError(f"Invalid field name `{name!r}` in `Nested`.")
            if name == STABLE_ID_KEY:
                raise SchemaError(f"Field name `{STABLE_ID_KEY}` is reserved for stable ids.")
            if not is_field_kind(kind):
                raise SchemaError(f"Field `{name}` has unsupported kind `{type(kind).__name__}`.")

    def first_localized_field(self) -> str | None:
        """Return the first declared localized field name, if any."""

        for name, kind in self.fields.items():
            if isinstance(kind, LocalizedText):
                return name
        return None


@dataclass(frozen=True, slots=True)
class OrderedList:
    """Ordered collection whose elements share one kind.

    Attributes:
        item: Kind of every element.
        id_prefix: Prefix for stable ids assigned to record elements.
        seed_fields: Record fields tried in order as the stable id seed.
        keep_if: Record fields of which at least one must be non-empty for
            the element to be persisted.
        max_items: Upper bound applied after filtering.
        skip_empty: Drop scalar or localized elements without content.
        omit_empty: Omit the list key when the serialized list is empty.
    """

    item: FieldKind
    id_prefix: str = "item"
    seed_fields: tuple[str, ...] = ()
    keep_if: tuple[str, ...] | None = None
    max_items: int | None = None
    skip_empty: bool = False
    omit_empty: bool = False

    def __post_init__(self) -> None:
        """Validate item kind and record-only options."""

        if not is_field_kind(self.item):
            raise SchemaError("`OrderedList.item` must be a field kind.")
        if not self.id_prefix or not isinstance(self.id_prefix, str):
            raise SchemaError("`OrderedList.id_prefix` must be a non-empty string.")
        if self.max_items is not None and self.max_items < 0:
            raise SchemaError("`OrderedList.max_items` must be zero or positive.")

        record_options = tuple(self.seed_fields) + tuple(self.keep_if or ())
        if not record_options:
            return
        if not isinstance(self.item, Nested):
            raise SchemaError("`seed_fields` and `keep_if` require a `Nested` item kind.")
        unknown = [name for name in record_options if name not in self.item.fields]
        if unknown:
            raise SchemaError(f"Unknown record field(s) in list options: {', '.join(unknown)}.")

    @property
    def has_records(self) -> bool:
        """Return whether elements are records carrying stable ids."""

        return isinstance(self.item, Nested)


@dataclass(frozen=True, slots=True)
class KeyedMap:
    """Object keyed by dynamic strings, e.g. product slug to product detail.

    Attributes:
        value: Kind of every entry.
        passthrough_keys: Keys copied verbatim instead of normalized as entries.
    """

    value: FieldKind
    passthrough_keys: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate the entry kind."""

        if not is_field_kind(self.value):
            raise SchemaError("`KeyedMap.value` must be a field kind.")


FieldKind = Union[
    LocalizedText,
    PlainText,
    Number,
    Boolean,
    Passthrough,
    Nested,
    OrderedList,
    KeyedMap,
]

_FIELD_KIND_TYPES = (
    LocalizedText,
    PlainText,
    Number,
    Boolean,
    Passthrough,
    Nested,
    OrderedList,
    KeyedMap,
)


def is_field_kind(value: object) -> bool:
    """Return whether a value is one of the supported field kinds."""

    return isinstance(value, _FIELD_KIND_TYPES)


@dataclass(frozen=True, slots=True)
class PageSchema:
    """Descriptor for one editable page type.

    Attributes:
        key: Registry key, also the persisted config key.
        root: Root record or map.
        title: Human-readable page label.
    """

    key: str
    root: Nested | KeyedMap
    title: str = ""

    def __post_init__(self) -> None:
        """Validate page key and root kind."""

        if not isinstance(self.key, str) or not self.key.strip():
            raise SchemaError("`PageSchema.key` must be a non-empty string.")
        if not isinstance(self.root, Nested | KeyedMap):
            raise SchemaError(f"Page `{self.key}` root must be `Nested` or `KeyedMap`.")


def resolve_root(schema: PageSchema | FieldKind) -> FieldKind:
    """Return the root field kind of a page schema or a bare kind."""

    if isinstance(schema, PageSchema):
        return schema.root
    if not is_field_kind(schema):
        raise SchemaError(f"Unsupported schema object `{type(schema).__name__}`.")
    return schema
