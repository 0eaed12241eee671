"""
Token accounting for one response.

``total_tokens`` is never trusted from upstream: every constructor path and
``merge`` recompute it as ``prompt_tokens + completion_tokens``.

Supported field names
---------------------
OpenAI:     ``prompt_tokens`` / ``completion_tokens``
Anthropic:  ``input_tokens`` / ``output_tokens``
Gemini:     ``promptTokenCount`` / ``candidatesTokenCount``
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional

_PROMPT_FIELDS = ("prompt_tokens", "input_tokens", "promptTokenCount")
_COMPLETION_FIELDS = ("completion_tokens", "output_tokens", "candidatesTokenCount")


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce arbitrary value to a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def _first(raw: Any, names) -> Optional[int]:
    for name in names:
        if isinstance(raw, Mapping):
            val = raw.get(name)
        else:
            val = getattr(raw, name, None)
        coerced = _coerce_int(val)
        if coerced is not None:
            return coerced
    return None


@dataclass(frozen=True)
class UsageStats:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self) -> None:
        if self.prompt_tokens < 0 or self.completion_tokens < 0:
            raise ValueError("token counts must be non-negative")
        object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)

    @classmethod
    def of(cls, prompt_tokens: int = 0, completion_tokens: int = 0) -> "UsageStats":
        return cls(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["UsageStats"]:
        """Build usage from a provider payload; ``None`` when no counts exist."""
        if raw is None:
            return None
        if isinstance(raw, UsageStats):
            return raw
        prompt = _first(raw, _PROMPT_FIELDS)
        completion = _first(raw, _COMPLETION_FIELDS)
        if prompt is None and completion is None:
            return None
        return cls.of(prompt or 0, completion or 0)

    def merge(self, other: Optional["UsageStats"]) -> "UsageStats":
        """Field-wise sum with a recomputed total."""
        if other is None:
            return self
        return UsageStats.of(
            self.prompt_tokens + other.prompt_tokens,
            self.completion_tokens + other.completion_tokens,
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


__all__ = ["UsageStats"]
