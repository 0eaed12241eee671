"""
Tool invocation emitted by a model.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCall:
    """A single tool call.

    Attributes:
        id: Provider-assigned call id; ``None`` only for stream fragments that
            continue an earlier call identified by ``index``.
        name: Tool name.
        arguments: Opaque arguments payload (JSON string or mapping).
        index: Stream position of the call, when the provider supplies one.
    """

    id: Optional[str]
    name: Optional[str] = None
    arguments: Any = None
    index: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ToolCall":
        """Coerce OpenAI, Anthropic, or already-normalized call shapes."""
        if isinstance(raw, ToolCall):
            return raw
        if not isinstance(raw, Mapping):
            dump = getattr(raw, "model_dump", None)
            if not callable(dump):
                raise TypeError(f"cannot build a ToolCall from {type(raw).__name__}")
            raw = dump()
        index = raw.get("index")
        index = index if isinstance(index, int) else None
        function = raw.get("function")
        if isinstance(function, Mapping):
            # OpenAI: {"id", "type": "function", "function": {"name", "arguments"}}
            return cls(
                id=raw.get("id"),
                name=function.get("name"),
                arguments=function.get("arguments"),
                index=index,
            )
        if raw.get("type") == "tool_use":
            return cls(id=raw.get("id"), name=raw.get("name"), arguments=raw.get("input"), index=index)
        arguments = raw.get("arguments", raw.get("args", raw.get("input")))
        return cls(id=raw.get("id"), name=raw.get("name"), arguments=arguments, index=index)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "arguments": self.arguments}
        if self.index is not None:
            data["index"] = self.index
        return data


__all__ = ["ToolCall"]
