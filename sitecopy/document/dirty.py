"""Dirty tracking against the last saved baseline.

Responsibilities:
- Canonicalize JSON values so comparison is independent of key order.
- Hold the baseline snapshot of one editing session.
- Expose the two-state clean/dirty machine used to gate saves and warn on
  navigation away.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json
from typing import Any


def canonical_json(value: Any) -> str:
    """Return a key-order independent JSON string for `value`."""

    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class BaselineSnapshot:
    """Canonical JSON of the payload captured at load or last successful save."""

    canonical: str

    @classmethod
    def capture(cls, value: Any) -> BaselineSnapshot:
        """Snapshot a JSON value."""

        return cls(canonical=canonical_json(value))

    def value(self) -> Any:
        """Return a fresh copy of the snapshotted JSON value."""

        return json.loads(self.canonical)

    def matches(self, current: Any) -> bool:
        """Return whether `current` equals the snapshot structurally."""

        return canonical_json(current) == self.canonical


def is_dirty(current: Any, baseline: Any) -> bool:
    """Return whether `current` differs from `baseline`.

    `baseline` may be a `BaselineSnapshot`, or any JSON value.
    """

    if isinstance(baseline, BaselineSnapshot):
        return not baseline.matches(current)
    return canonical_json(current) != canonical_json(baseline)


class DirtyState(str, Enum):
    """Editing session save state."""

    CLEAN = "clean"
    DIRTY = "dirty"


class DirtyTracker:
    """Track whether the live payload differs from the saved baseline.

    Transitions: `observe` moves between clean and dirty depending on the
    observed payload (an edit that restores the baseline values returns to
    clean), `mark_saved` resets the baseline and becomes clean, and `discard`
    becomes clean and hands back the baseline value to restore.
    """

    def __init__(self, baseline: Any) -> None:
        self._baseline = BaselineSnapshot.capture(baseline)
        self._state = DirtyState.CLEAN

    @property
    def state(self) -> DirtyState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is DirtyState.DIRTY

    @property
    def baseline(self) -> BaselineSnapshot:
        return self._baseline

    def observe(self, current: Any) -> DirtyState:
        """Recompute state after an edit."""

        self._state = DirtyState.CLEAN if self._baseline.matches(current) else DirtyState.DIRTY
        return self._state

    def mark_saved(self, current: Any) -> None:
        """Adopt `current` as the new baseline after a successful save."""

        self._baseline = BaselineSnapshot.capture(current)
        self._state = DirtyState.CLEAN

    def discard(self) -> Any:
        """Drop unsaved edits and return the baseline value to restore."""

        self._state = DirtyState.CLEAN
        return self._baseline.value()
