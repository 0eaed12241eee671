"""Target tool-schema dialects understood by the converter."""
from __future__ import annotations

from enum import Enum


class ToolSchemaFormat(str, Enum):
    OPENAI_FUNCTION = "openai_function"
    ANTHROPIC_TOOL = "anthropic_tool"
    GEMINI_DECLARATION = "gemini_declaration"


__all__ = ["ToolSchemaFormat"]
