"""Localized document engine.

Normalization, override extraction, serialization, merge, and dirty tracking
for per-locale page documents.
"""

from .diff import diff_json_values
from .dirty import BaselineSnapshot, DirtyState, DirtyTracker, canonical_json, is_dirty
from .envelope import with_meta_envelope
from .extractor import OverrideExtractor, extract
from .ids import StableIdAssigner, create_id, make_stable_id, normalize_seed
from .localized import (
    clean_for_persist,
    complete_record,
    ensure_record,
    get_text,
    has_text,
    missing_locales,
    set_text,
)
from .merger import OverrideMerger, merge
from .normalizer import DocumentNormalizer, normalize
from .serializer import DocumentSerializer, serialize
from .validation import collect_missing_locales, format_missing_locale_record

__all__ = [
    "BaselineSnapshot",
    "DirtyState",
    "DirtyTracker",
    "DocumentNormalizer",
    "DocumentSerializer",
    "OverrideExtractor",
    "OverrideMerger",
    "StableIdAssigner",
    "canonical_json",
    "clean_for_persist",
    "collect_missing_locales",
    "complete_record",
    "create_id",
    "diff_json_values",
    "ensure_record",
    "extract",
    "format_missing_locale_record",
    "get_text",
    "has_text",
    "is_dirty",
    "make_stable_id",
    "merge",
    "missing_locales",
    "normalize",
    "normalize_seed",
    "serialize",
    "set_text",
    "with_meta_envelope",
]
