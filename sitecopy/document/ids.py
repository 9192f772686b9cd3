"""Stable identifiers for list elements.

Responsibilities:
- Derive deterministic ids from content seeds (slug, href, label) with a
  positional fallback, so that re-normalizing an unchanged list keeps ids.
- Create session-unique ids for items added while editing.
- Compute per-element alignment keys shared by the extractor, merger, and
  editing session.
"""

from __future__ import annotations

import re
import secrets
import string
import time
import unicodedata
from typing import Any, Mapping, Sequence

from ..config import LocaleSettings, OverrideAlignment
from ..schema.fields import Nested, OrderedList
from .localized import ensure_record

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_RANDOM_PART_LENGTH = 6


def normalize_seed(seed: object) -> str:
    """Return an ASCII alphanumeric seed with single-hyphen separators.

    Accents are folded to ASCII first; letter case is preserved.
    """

    if not isinstance(seed, str):
        return ""
    normalized = unicodedata.normalize("NFKD", seed.strip())
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    collapsed = re.sub(r"[^A-Za-z0-9]+", "-", ascii_only)
    return collapsed.strip("-")


def make_stable_id(prefix: str, seed: object, index: int) -> str:
    """Return `{prefix}-{seed}`, or `{prefix}-{index}` when the seed is empty."""

    base = normalize_seed(seed)
    return f"{prefix}-{base or index}"


class StableIdAssigner:
    """Assign stable ids within one list during one normalization pass."""

    def __init__(self, prefix: str) -> None:
        """Initialize an assigner for a single list."""

        self._prefix = prefix
        self._issued: set[str] = set()

    def assign(self, seed: object, index: int) -> str:
        """Return the id for the element at `index`.

        Two elements with the same seed would collide, so the later one gets
        `-{index}` appended until the id is unique within the list.
        """

        candidate = make_stable_id(self._prefix, seed, index)
        while candidate in self._issued:
            candidate = f"{candidate}-{index}"
        self._issued.add(candidate)
        return candidate


def _to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""

    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def create_id(prefix: str) -> str:
    """Return a session-unique id for a freshly created list element."""

    random_part = "".join(
        secrets.choice(_BASE36_ALPHABET) for _ in range(_RANDOM_PART_LENGTH)
    )
    timestamp_part = _to_base36(time.time_ns() // 1_000_000)
    return f"{prefix}-{random_part}-{timestamp_part}"


def item_seed(kind: OrderedList, item: object, locales: LocaleSettings) -> str:
    """Return the content seed of one list element.

    The first declared seed field with usable text wins; localized seed fields
    contribute their default-locale text. Without seed fields, the element's
    first localized field is used. Non-record elements have no seed.
    """

    if not isinstance(kind.item, Nested) or not isinstance(item, Mapping):
        return ""

    for name in kind.seed_fields:
        seed = _seed_text(item.get(name), locales)
        if normalize_seed(seed):
            return seed

    label_field = kind.item.first_localized_field()
    if label_field is None:
        return ""
    return _seed_text(item.get(label_field), locales)


def _seed_text(value: object, locales: LocaleSettings) -> str:
    if isinstance(value, Mapping):
        text = ensure_record(value, locales).get(locales.default_locale, "")
        return text.strip()
    if isinstance(value, str):
        return value.strip()
    return ""


def list_alignment_keys(
    kind: OrderedList,
    items: Sequence[Any],
    locales: LocaleSettings,
    alignment: OverrideAlignment,
) -> list[str | int]:
    """Return the override key for every element of a list.

    Positional alignment returns indices. Seed alignment returns stable ids
    for record elements and falls back to indices for scalar elements, which
    have no content seed.
    """

    if alignment is OverrideAlignment.POSITION or not kind.has_records:
        return list(range(len(items)))
    assigner = StableIdAssigner(kind.id_prefix)
    return [
        assigner.assign(item_seed(kind, item, locales), index)
        for index, item in enumerate(items)
    ]
