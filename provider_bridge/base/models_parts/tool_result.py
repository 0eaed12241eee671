"""
Result of executing one tool call.

Pairs with a :class:`ToolCall` through ``tool_call_id``; only results whose id
matches an emitted call count toward a response being finished.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolResult:
    """Tool execution outcome.

    Attributes:
        tool_call_id: Id of the call this result answers.
        content: Result payload rendered as a string.
        error: True when the tool failed.
        name: Tool name, used for user-facing rendering.
    """

    tool_call_id: str
    content: str
    error: bool = False
    name: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ToolResult":
        """Coerce a ``ToolResult`` or a result mapping.

        Mappings may flag failure with ``error: true`` or ``ok: false``.
        Non-string content is serialized to JSON.
        """
        if isinstance(raw, ToolResult):
            return raw
        if not isinstance(raw, Mapping):
            raise TypeError(f"cannot build a ToolResult from {type(raw).__name__}")
        content = raw.get("content", raw.get("result", ""))
        if content is None:
            content = ""
        if not isinstance(content, str):
            content = json.dumps(content, ensure_ascii=False, default=str)
        error = raw.get("error")
        if isinstance(error, bool):
            failed = error
        elif error is not None:
            failed = True
        else:
            failed = raw.get("ok") is False
        return cls(
            tool_call_id=str(raw.get("tool_call_id") or raw.get("id") or ""),
            content=content,
            error=failed,
            name=raw.get("name"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "tool_call_id": self.tool_call_id,
            "content": self.content,
            "error": self.error,
        }
        if self.name is not None:
            data["name"] = self.name
        return data


__all__ = ["ToolResult"]
