"""Unit tests for the write-side `_meta` envelope."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sitecopy.document.envelope import format_timestamp, with_meta_envelope


def test_format_timestamp_uses_utc_milliseconds() -> None:
    """Timestamps should be UTC with millisecond precision and a `Z` suffix."""

    moment = datetime(2024, 1, 2, 11, 4, 5, 678_901, tzinfo=timezone(timedelta(hours=8)))

    assert format_timestamp(moment) == "2024-01-02T03:04:05.678Z"
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


def test_with_meta_envelope_preserves_existing_meta_and_input() -> None:
    """Stamping should keep other `_meta` keys and never mutate the payload."""

    payload = {"title": {"zh-CN": "标题"}, "_meta": {"owner": "web"}}
    moment = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

    stamped = with_meta_envelope(payload, moment, schema="footer")

    assert stamped == {
        "title": {"zh-CN": "标题"},
        "_meta": {"owner": "web", "updatedAt": "2024-05-06T07:08:09.000Z", "schema": "footer"},
    }
    assert payload == {"title": {"zh-CN": "标题"}, "_meta": {"owner": "web"}}


def test_with_meta_envelope_defaults_to_now() -> None:
    """Without an explicit time the envelope should carry a fresh timestamp."""

    stamped = with_meta_envelope({"_meta": "not a mapping"})

    assert set(stamped["_meta"]) == {"updatedAt"}
    assert stamped["_meta"]["updatedAt"].endswith("Z")
