"""Running state for one streamed response.

The accumulator is created per stream and mutated only while chunks are
consumed; ``snapshot`` hands the merged state to the aggregator.

Tool call merge rules
---------------------
- A call carrying an ``id`` replaces any earlier call with the same id (last
  write wins) but keeps the position where that id was first seen.
- A fragment without an ``id`` but with an ``index`` extends the argument
  string of the call previously seen at that index (Anthropic
  ``input_json_delta`` and OpenAI argument deltas).
- A call with neither receives a synthetic ``call_<n>`` id.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..models import StreamChunk, ToolCall, UsageStats


def _join_arguments(current: Any, fragment: Any) -> Any:
    if fragment is None or fragment == "":
        return current
    if current is None or current == "":
        return fragment
    if isinstance(current, str) and isinstance(fragment, str):
        return current + fragment
    return fragment


class StreamAccumulator:
    """Accumulates content, usage, finish reason and tool calls in order."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._usage: Optional[UsageStats] = None
        self._finish_reason: Optional[str] = None
        self._calls: Dict[str, ToolCall] = {}
        self._order: List[str] = []
        self._by_index: Dict[int, str] = {}
        self.chunks = 0

    @property
    def finish_reason(self) -> Optional[str]:
        return self._finish_reason

    @property
    def content(self) -> str:
        return "".join(self._parts)

    def add(self, raw: Any) -> bool:
        """Merge one raw chunk; return False when it was nil or empty."""
        chunk = StreamChunk.from_raw(raw)
        if chunk is None:
            return False
        self.chunks += 1
        if chunk.content:
            self._parts.append(chunk.content)
        if chunk.usage is not None:
            self._usage = chunk.usage if self._usage is None else self._usage.merge(chunk.usage)
        if chunk.finish_reason is not None:
            self._finish_reason = chunk.finish_reason
        for call in chunk.tool_calls:
            self._add_call(call)
        return True

    def _add_call(self, call: ToolCall) -> None:
        if call.id is None and call.index is not None and call.index in self._by_index:
            call_id = self._by_index[call.index]
            current = self._calls[call_id]
            self._calls[call_id] = ToolCall(
                id=call_id,
                name=call.name or current.name,
                arguments=_join_arguments(current.arguments, call.arguments),
                index=current.index,
            )
            return
        call_id = call.id or f"call_{len(self._order)}"
        if call_id not in self._calls:
            self._order.append(call_id)
        stored = call if call.id else ToolCall(
            id=call_id, name=call.name, arguments=call.arguments, index=call.index
        )
        self._calls[call_id] = stored
        if call.index is not None:
            self._by_index[call.index] = call_id

    def tool_calls(self) -> Tuple[ToolCall, ...]:
        return tuple(self._calls[cid] for cid in self._order)

    def snapshot(self) -> Tuple[str, Tuple[ToolCall, ...], Optional[UsageStats], Optional[str]]:
        return self.content, self.tool_calls(), self._usage, self._finish_reason


__all__ = ["StreamAccumulator"]
