"""
Canonical response produced by the aggregator.

Instances are immutable once returned: sequences are stored as tuples and
``metadata`` is a read-only mapping view.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .response_type import ResponseType
from .tool_call import ToolCall
from .tool_result import ToolResult
from .usage_stats import UsageStats


@dataclass(frozen=True)
class AggregatedResponse:
    """Normalized response.

    Attributes:
        content: Final textual content (never empty when no tool calls exist).
        tool_calls: Tool calls emitted by the model, deduplicated by id.
        tool_results: Results supplied for this response.
        usage: Token accounting, when the provider reported any.
        finish_reason: Last finish reason seen, or ``"incomplete"``.
        metadata: Read-only diagnostics (timing, tool counts, response type).
        finished: True when every emitted tool call id has a result.
    """

    content: str
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_results: Tuple[ToolResult, ...] = ()
    usage: Optional[UsageStats] = None
    finish_reason: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    finished: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "tool_calls", tuple(self.tool_calls))
        object.__setattr__(self, "tool_results", tuple(self.tool_results))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def response_type(self) -> ResponseType:
        stored = self.metadata.get("response_type")
        if stored is not None:
            return ResponseType(stored)
        return ResponseType.classify(
            bool(self.content), bool(self.tool_calls or self.tool_results)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls],
            "tool_results": [tr.to_dict() for tr in self.tool_results],
            "usage": self.usage.to_dict() if self.usage else None,
            "finish_reason": self.finish_reason,
            "metadata": dict(self.metadata),
            "finished": self.finished,
        }


__all__ = ["AggregatedResponse"]
