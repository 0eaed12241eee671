"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`provider_bridge.base.models_parts` if needed, while `provider_bridge.base.models`
remains the primary stable import path.
"""

from .aggregated_response import AggregatedResponse
from .content_part import ContentPart, ContentPartType, text_of_content
from .message import Message, Role, join_text_parts
from .response_type import ResponseType
from .stream_chunk import StreamChunk
from .tool_call import ToolCall
from .tool_result import ToolResult
from .usage_stats import UsageStats

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
