"""Request/tool conversion: tool schemas, tool choice, messages, routing."""

from .arguments import coerce_arguments
from .converter import GEMINI_UNSUPPORTED_KEYWORDS, JSON_SCHEMA_TYPES, ToolConverter
from .messages import convert_messages
from .router import SimpleToolRouter, ToolHandler
from .schema_format import ToolSchemaFormat
from .tool_choice import PASSTHROUGH_CHOICES, TYPED_CHOICES, map_tool_choice

__all__ = [
    "GEMINI_UNSUPPORTED_KEYWORDS",
    "JSON_SCHEMA_TYPES",
    "PASSTHROUGH_CHOICES",
    "SimpleToolRouter",
    "TYPED_CHOICES",
    "ToolConverter",
    "ToolHandler",
    "ToolSchemaFormat",
    "coerce_arguments",
    "convert_messages",
    "map_tool_choice",
]
