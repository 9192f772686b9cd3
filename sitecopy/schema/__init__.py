"""Page schema descriptors.

This package declares field kinds and the registered page types walked by the
generic document engine.
"""

from .fields import (
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
    is_field_kind,
    resolve_root,
)
from .pages import PAGE_SCHEMAS, get_page_schema

__all__ = [
    "Boolean",
    "FieldKind",
    "KeyedMap",
    "LocalizedText",
    "Nested",
    "Number",
    "OrderedList",
    "PAGE_SCHEMAS",
    "PageSchema",
    "Passthrough",
    "PlainText",
    "get_page_schema",
    "is_field_kind",
    "resolve_root",
]
