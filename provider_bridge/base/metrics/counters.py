"""Thread-safe in-memory counters for deliberate degradation paths.

A fallback (for example an unrecognized tool choice degrading to ``"auto"``)
is not an error, but it must stay observable. Each path increments a named
counter; callers read them through ``snapshot()``.
"""

from __future__ import annotations

from threading import RLock
from typing import Dict

TOOL_CHOICE_FALLBACKS = "tool_choice_fallbacks"


class FallbackCounters:
    """Named monotonically increasing counters guarded by an RLock."""

    __slots__ = ("_lock", "_counts")

    def __init__(self) -> None:
        self._lock = RLock()
        self._counts: Dict[str, int] = {}

    def increment(self, name: str, amount: int = 1) -> int:
        """Add ``amount`` to counter ``name`` and return the new value."""
        with self._lock:
            value = self._counts.get(name, 0) + amount
            self._counts[name] = value
            return value

    def get(self, name: str) -> int:
        with self._lock:
            return self._counts.get(name, 0)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


_COUNTERS = FallbackCounters()


def fallback_counters() -> FallbackCounters:
    """Return the process-wide fallback counters."""
    return _COUNTERS


__all__ = ["FallbackCounters", "TOOL_CHOICE_FALLBACKS", "fallback_counters"]
