"""
Message list conversion into provider request shapes.

- ``openai_function``: ``[{"role", "content"}, ...]`` with roles kept as given.
- ``anthropic_tool``: ``{"system": str | None, "messages": [...]}``; system
  messages are lifted out, tool messages become ``tool_result`` blocks.
- ``gemini_declaration``: ``{"system_instruction": ..., "contents": [...]}``;
  ``assistant`` turns use Gemini's ``model`` role and tool messages become
  ``function_response`` parts.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from ..models import ContentPart, Message
from .schema_format import ToolSchemaFormat

MessageInput = Union[Message, Dict[str, Any]]


def _part_block(part: ContentPart) -> Dict[str, Any]:
    if part.is_text:
        return {"type": "text", "text": part.text or ""}
    return {"type": part.type, **(part.data or {})}


def _openai(messages: List[Message]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for m in messages:
        content: Any = m.content if isinstance(m.content, str) else [_part_block(p) for p in m.content]
        entry: Dict[str, Any] = {"role": m.role, "content": content}
        if m.tool_call_id:
            entry["tool_call_id"] = m.tool_call_id
        out.append(entry)
    return out


def _anthropic(messages: List[Message]) -> Dict[str, Any]:
    system: List[str] = []
    turns: List[Dict[str, Any]] = []
    for m in messages:
        if m.role == "system":
            system.append(m.text())
            continue
        if m.role == "tool":
            block = {"type": "tool_result", "tool_use_id": m.tool_call_id, "content": m.text()}
            turns.append({"role": "user", "content": [block]})
            continue
        if isinstance(m.content, str):
            blocks = [{"type": "text", "text": m.content}]
        else:
            blocks = [_part_block(p) for p in m.content]
        turns.append({"role": m.role, "content": blocks})
    return {"system": "\n\n".join(system) if system else None, "messages": turns}


def _gemini(messages: List[Message]) -> Dict[str, Any]:
    system: List[str] = []
    contents: List[Dict[str, Any]] = []
    for m in messages:
        if m.role == "system":
            system.append(m.text())
            continue
        if m.role == "tool":
            part = {
                "function_response": {
                    "name": m.name or m.tool_call_id,
                    "response": {"content": m.text()},
                }
            }
            contents.append({"role": "user", "parts": [part]})
            continue
        if isinstance(m.content, str):
            parts = [{"text": m.content}]
        else:
            parts = [{"text": p.text or ""} if p.is_text else dict(p.data or {}) for p in m.content]
        contents.append({"role": "model" if m.role == "assistant" else "user", "parts": parts})
    instruction: Optional[Dict[str, Any]] = (
        {"parts": [{"text": "\n\n".join(system)}]} if system else None
    )
    return {"system_instruction": instruction, "contents": contents}


def convert_messages(
    messages: Iterable[MessageInput],
    target_format: Union[ToolSchemaFormat, str] = ToolSchemaFormat.OPENAI_FUNCTION,
) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
    """Convert messages for ``target_format`` (see module docstring for shapes)."""
    normalized = [Message.from_raw(m) for m in messages or ()]
    fmt = ToolSchemaFormat(target_format)
    if fmt is ToolSchemaFormat.ANTHROPIC_TOOL:
        return _anthropic(normalized)
    if fmt is ToolSchemaFormat.GEMINI_DECLARATION:
        return _gemini(normalized)
    return _openai(normalized)


__all__ = ["convert_messages"]
