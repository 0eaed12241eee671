"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``provider_bridge.base.models_parts``.
"""

from .models_parts import (
    AggregatedResponse,
    ContentPart,
    ContentPartType,
    Message,
    ResponseType,
    Role,
    StreamChunk,
    ToolCall,
    ToolResult,
    UsageStats,
    join_text_parts,
    text_of_content,
)

__all__ = [
    "AggregatedResponse",
    "ContentPart",
    "ContentPartType",
    "Message",
    "ResponseType",
    "Role",
    "StreamChunk",
    "ToolCall",
    "ToolResult",
    "UsageStats",
    "join_text_parts",
    "text_of_content",
]
