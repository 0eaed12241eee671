"""
Ephemeral streaming delta consumed by the response aggregator.

``StreamChunk.from_raw`` accepts already-normalized chunks as well as the
delta payloads emitted by OpenAI-compatible, Anthropic and Gemini streaming
endpoints. Part-sequence content keeps only its ``text`` parts. Payloads that
carry nothing the aggregator uses yield ``None``.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .content_part import text_of_content
from .tool_call import ToolCall
from .usage_stats import UsageStats


@dataclass(frozen=True)
class StreamChunk:
    content: Optional[str] = None
    role: Optional[str] = None
    tool_calls: Tuple[ToolCall, ...] = field(default_factory=tuple)
    finish_reason: Optional[str] = None
    usage: Optional[UsageStats] = None

    def __post_init__(self) -> None:
        if self.tool_calls is None:
            object.__setattr__(self, "tool_calls", ())
        elif not isinstance(self.tool_calls, tuple):
            object.__setattr__(
                self, "tool_calls", tuple(ToolCall.from_raw(tc) for tc in self.tool_calls)
            )

    def is_empty(self) -> bool:
        return (
            not self.content
            and not self.tool_calls
            and self.finish_reason is None
            and self.usage is None
        )

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["StreamChunk"]:
        """Normalize one upstream chunk; ``None`` for nil or empty chunks."""
        if raw is None:
            return None
        if isinstance(raw, StreamChunk):
            chunk = raw
        elif isinstance(raw, str):
            chunk = cls(content=raw)
        else:
            if not isinstance(raw, Mapping):
                dump = getattr(raw, "model_dump", None)
                if not callable(dump):
                    raise TypeError(f"unsupported stream chunk type: {type(raw).__name__}")
                raw = dump()
            chunk = _from_mapping(raw)
        return None if chunk.is_empty() else chunk


def _from_mapping(raw: Mapping) -> StreamChunk:
    if "choices" in raw:
        return _from_openai(raw)
    if "candidates" in raw or "usageMetadata" in raw:
        return _from_gemini(raw)
    if isinstance(raw.get("type"), str) and raw["type"].startswith(("message_", "content_block_")):
        return _from_anthropic(raw)
    return StreamChunk(
        content=text_of_content(raw.get("content")) or None,
        role=raw.get("role"),
        tool_calls=tuple(ToolCall.from_raw(tc) for tc in raw.get("tool_calls") or ()),
        finish_reason=raw.get("finish_reason"),
        usage=UsageStats.from_raw(raw.get("usage")),
    )


def _from_openai(raw: Mapping) -> StreamChunk:
    choices = raw.get("choices") or []
    choice = choices[0] if choices else {}
    delta = choice.get("delta") or choice.get("message") or {}
    return StreamChunk(
        content=text_of_content(delta.get("content")) or None,
        role=delta.get("role"),
        tool_calls=tuple(ToolCall.from_raw(tc) for tc in delta.get("tool_calls") or ()),
        finish_reason=choice.get("finish_reason"),
        usage=UsageStats.from_raw(raw.get("usage")),
    )


def _from_anthropic(raw: Mapping) -> StreamChunk:
    kind = raw["type"]
    if kind == "message_start":
        message = raw.get("message") or {}
        return StreamChunk(role=message.get("role"), usage=UsageStats.from_raw(message.get("usage")))
    if kind == "content_block_start":
        block = raw.get("content_block") or {}
        if block.get("type") == "tool_use":
            call = ToolCall(id=block.get("id"), name=block.get("name"), arguments="", index=raw.get("index"))
            return StreamChunk(tool_calls=(call,))
        return StreamChunk(content=block.get("text") or None)
    if kind == "content_block_delta":
        delta = raw.get("delta") or {}
        if delta.get("type") == "input_json_delta":
            call = ToolCall(id=None, arguments=delta.get("partial_json", ""), index=raw.get("index"))
            return StreamChunk(tool_calls=(call,))
        return StreamChunk(content=delta.get("text"))
    if kind == "message_delta":
        delta = raw.get("delta") or {}
        return StreamChunk(finish_reason=delta.get("stop_reason"), usage=UsageStats.from_raw(raw.get("usage")))
    return StreamChunk()


def _from_gemini(raw: Mapping) -> StreamChunk:
    candidates = raw.get("candidates") or []
    candidate = candidates[0] if candidates else {}
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, Mapping))
    calls = tuple(
        ToolCall(id=None, name=p["functionCall"].get("name"), arguments=p["functionCall"].get("args"))
        for p in parts
        if isinstance(p, Mapping) and isinstance(p.get("functionCall"), Mapping)
    )
    return StreamChunk(
        content=text or None,
        tool_calls=calls,
        finish_reason=candidate.get("finishReason"),
        usage=UsageStats.from_raw(raw.get("usageMetadata")),
    )


__all__ = ["StreamChunk"]
