"""
Structured content part model for chat messages.

This module defines the `ContentPart` dataclass and its associated
`ContentPartType` literal. Providers may emit structured content as multiple
parts (text, images, tool-call metadata). Only ``text`` parts contribute to
aggregated textual content; every other type is carried but never rendered.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional

# Known content part types seen across providers' structured messages.
ContentPartType = Literal[
    "text",          # Plain text content
    "image",         # Image content (path/URL/base64)
    "tool_call",     # Tool call metadata
    "tool_result",   # Tool result metadata
    "other",         # Catch-all for provider-specific part types
]

_KNOWN_TYPES = ("text", "image", "tool_call", "tool_result")


@dataclass(frozen=True)
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the content part, e.g. ``"text"``.
        text: Textual content for ``text`` parts.
        data: Provider- or adapter-specific payload for non-text parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    @classmethod
    def from_raw(cls, raw: Any) -> "ContentPart":
        """Coerce a part given as ``ContentPart``, string, or mapping."""
        if isinstance(raw, ContentPart):
            return raw
        if isinstance(raw, str):
            return cls(type="text", text=raw)
        if isinstance(raw, Mapping):
            kind = raw.get("type", "text" if "text" in raw else "other")
            if kind not in _KNOWN_TYPES:
                return cls(type="other", data=dict(raw))
            text = raw.get("text")
            data = {k: v for k, v in raw.items() if k not in ("type", "text")}
            return cls(type=kind, text=text if isinstance(text, str) else None, data=data or None)
        return cls(type="other", data={"value": raw})

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the object."""
        return asdict(self)


def text_of_content(content: Any) -> str:
    """Return the text carried by a string, a single part or a part sequence.

    Strings are used verbatim. Parts keep only ``text`` entries, joined in
    order with no separator; other part types are dropped without error.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, (ContentPart, Mapping)):
        content = (content,)
    if isinstance(content, Sequence):
        parts = [ContentPart.from_raw(p) for p in content]
        return "".join(p.text or "" for p in parts if p.is_text)
    return str(content)


__all__ = [
    "ContentPart",
    "ContentPartType",
    "text_of_content",
]
