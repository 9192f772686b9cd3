"""Shared coercion helpers for untrusted JSON and configuration values.

Every helper here is total: malformed input degrades to a default value
instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Mapping


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def ensure_string(value: object, default: str = "") -> str:
    """Return `value` when it is a string, otherwise `default`."""

    return value if isinstance(value, str) else default


def ensure_number(value: object, default: int | float = 0) -> int | float:
    """Coerce a JSON scalar into a finite number.

    Booleans are not numbers here; numeric strings are parsed, everything else
    falls back to `default`.
    """

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else default

    text = normalize_optional_string(value) if isinstance(value, str) else None
    if text is None:
        return default
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) else default


def ensure_mapping(value: object) -> Mapping[str, Any]:
    """Return `value` when it is a mapping, otherwise an empty mapping."""

    return value if isinstance(value, Mapping) else {}


def ensure_list(value: object) -> list[Any]:
    """Return `value` as a list when it is a JSON array, otherwise `[]`."""

    if isinstance(value, list | tuple):
        return list(value)
    return []
