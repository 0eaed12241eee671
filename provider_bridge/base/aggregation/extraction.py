"""
Extraction of content, tool calls, usage and finish reason from one complete
provider payload.

Supported shapes
----------------
- Normalized mapping: ``{"content", "tool_calls", "tool_results", "usage",
  "finish_reason"}``; ``content`` may be a string or a part sequence.
- OpenAI chat completion: ``choices[0].message`` plus top-level ``usage``.
- Anthropic message: ``content`` blocks (``text`` and ``tool_use``),
  ``stop_reason`` and ``usage``.
- Gemini ``generateContent``: ``candidates[0].content.parts`` with
  ``functionCall`` parts; call ids are synthesized because Gemini has none.
- Plain strings and pydantic-like objects exposing ``model_dump``.

Failure Modes
-------------
Payloads of any other type raise ``BridgeError(reason="serialization_error")``
so the facade can classify them.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..errors import BridgeError
from ..models import ToolCall, ToolResult, UsageStats, text_of_content


@dataclass(frozen=True)
class ExtractedPayload:
    """Intermediate view of a complete payload before aggregation."""

    content: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_results: Tuple[ToolResult, ...] = ()
    usage: Optional[UsageStats] = None
    finish_reason: Optional[str] = None


def extract_text(content: Any) -> str:
    """Return the textual content of a string, a single part or a part sequence.

    Strings are used verbatim. Parts keep only ``text`` entries, joined in
    order with no separator; other parts are dropped without error.
    """
    return text_of_content(content)


def _tool_use_blocks(content: Any) -> List[ToolCall]:
    if isinstance(content, str) or not isinstance(content, Sequence):
        return []
    return [
        ToolCall.from_raw(block)
        for block in content
        if isinstance(block, Mapping) and block.get("type") == "tool_use"
    ]


def _from_openai(raw: Mapping) -> ExtractedPayload:
    choices = raw.get("choices") or []
    choice = choices[0] if choices else {}
    message = choice.get("message") or {}
    return ExtractedPayload(
        content=extract_text(message.get("content")),
        tool_calls=tuple(ToolCall.from_raw(tc) for tc in message.get("tool_calls") or ()),
        usage=UsageStats.from_raw(raw.get("usage")),
        finish_reason=choice.get("finish_reason"),
    )


def _from_gemini(raw: Mapping) -> ExtractedPayload:
    candidates = raw.get("candidates") or []
    candidate = candidates[0] if candidates else {}
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, Mapping))
    calls: List[ToolCall] = []
    for part in parts:
        fn = part.get("functionCall") if isinstance(part, Mapping) else None
        if isinstance(fn, Mapping):
            calls.append(
                ToolCall(id=f"call_{len(calls)}", name=fn.get("name"), arguments=fn.get("args"))
            )
    return ExtractedPayload(
        content=text,
        tool_calls=tuple(calls),
        usage=UsageStats.from_raw(raw.get("usageMetadata")),
        finish_reason=candidate.get("finishReason"),
    )


def _from_mapping(raw: Mapping) -> ExtractedPayload:
    if "choices" in raw:
        return _from_openai(raw)
    if "candidates" in raw:
        return _from_gemini(raw)
    content = raw.get("content")
    calls = [ToolCall.from_raw(tc) for tc in raw.get("tool_calls") or ()]
    calls.extend(_tool_use_blocks(content))
    return ExtractedPayload(
        content=extract_text(content),
        tool_calls=tuple(calls),
        tool_results=tuple(ToolResult.from_raw(r) for r in raw.get("tool_results") or ()),
        usage=UsageStats.from_raw(raw.get("usage")),
        finish_reason=raw.get("finish_reason", raw.get("stop_reason")),
    )


def normalize_response(raw: Any) -> ExtractedPayload:
    """Coerce one complete provider payload into an :class:`ExtractedPayload`."""
    if raw is None:
        return ExtractedPayload()
    if isinstance(raw, str):
        return ExtractedPayload(content=raw)
    if not isinstance(raw, Mapping):
        dump = getattr(raw, "model_dump", None)
        if not callable(dump):
            raise BridgeError(
                reason="serialization_error",
                message=f"unsupported response payload: {type(raw).__name__}",
            )
        raw = dump()
    return _from_mapping(raw)


__all__ = ["ExtractedPayload", "extract_text", "normalize_response"]
