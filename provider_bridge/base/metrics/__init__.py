"""In-memory counters for observable fallback paths."""

from .counters import TOOL_CHOICE_FALLBACKS, FallbackCounters, fallback_counters

__all__ = ["FallbackCounters", "TOOL_CHOICE_FALLBACKS", "fallback_counters"]
