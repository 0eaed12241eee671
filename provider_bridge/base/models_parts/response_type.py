"""
Presence-based classification of an aggregated response.
"""
from __future__ import annotations

from enum import Enum


class ResponseType(str, Enum):
    CONTENT_ONLY = "content_only"
    TOOLS_ONLY = "tools_only"
    CONTENT_WITH_TOOLS = "content_with_tools"
    EMPTY = "empty"

    @classmethod
    def classify(cls, has_content: bool, has_tools: bool) -> "ResponseType":
        if has_content and has_tools:
            return cls.CONTENT_WITH_TOOLS
        if has_content:
            return cls.CONTENT_ONLY
        if has_tools:
            return cls.TOOLS_ONLY
        return cls.EMPTY


__all__ = ["ResponseType"]
