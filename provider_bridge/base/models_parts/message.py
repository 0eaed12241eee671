"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a sequence of `ContentPart` objects.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence, Tuple, Union

from .content_part import ContentPart

# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]

_ROLES = ("system", "user", "assistant", "tool")


def join_text_parts(parts: Sequence[ContentPart]) -> str:
    """Concatenate the text of ``text`` parts in order, with no separator."""
    return "".join(p.text or "" for p in parts if p.is_text)


@dataclass(frozen=True)
class Message:
    """A chat message used by provider-agnostic request conversion.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Either a plain text string or a tuple of `ContentPart` items.
        tool_call_id: Call id answered by a ``tool`` message.
        name: Tool name for ``tool`` messages (used by Gemini).
    """

    role: Role
    content: Union[str, Tuple[ContentPart, ...]]
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise ValueError(f"unsupported message role: {self.role!r}")
        if not isinstance(self.content, str):
            object.__setattr__(
                self, "content", tuple(ContentPart.from_raw(p) for p in self.content)
            )

    def is_structured(self) -> bool:
        """Return True if the message content is a sequence of parts."""
        return not isinstance(self.content, str)

    def text(self) -> str:
        """Return the textual content (text parts only, joined verbatim)."""
        if isinstance(self.content, str):
            return self.content
        return join_text_parts(self.content)

    @classmethod
    def from_raw(cls, raw: Any) -> "Message":
        """Coerce a ``Message`` or a ``{"role", "content", ...}`` mapping."""
        if isinstance(raw, Message):
            return raw
        if not isinstance(raw, Mapping):
            raise TypeError(f"cannot build a Message from {type(raw).__name__}")
        content = raw.get("content")
        if content is None:
            content = ""
        return cls(
            role=raw.get("role", "user"),
            content=content,
            tool_call_id=raw.get("tool_call_id"),
            name=raw.get("name"),
        )


__all__ = [
    "Message",
    "Role",
    "join_text_parts",
]
