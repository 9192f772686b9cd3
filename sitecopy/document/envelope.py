"""Metadata envelope added to payloads on the write side."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Mapping

META_KEY = "_meta"


def format_timestamp(moment: datetime) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and `Z` suffix."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def with_meta_envelope(
    payload: Mapping[str, Any],
    updated_at: datetime | None = None,
    schema: str | None = None,
) -> dict[str, Any]:
    """Return a copy of `payload` with `_meta.updatedAt` and optional `_meta.schema`.

    Existing `_meta` keys are preserved. `updated_at` defaults to now.
    """

    stamped = copy.deepcopy(dict(payload))
    previous = stamped.get(META_KEY)
    meta = dict(previous) if isinstance(previous, Mapping) else {}
    meta["updatedAt"] = format_timestamp(updated_at or datetime.now(timezone.utc))
    if schema is not None:
        meta["schema"] = schema
    stamped[META_KEY] = meta
    return stamped
