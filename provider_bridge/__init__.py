"""provider_bridge package

Normalization bridge between applications and multiple LLM providers.

Purpose:
    Resolve provider credentials into auth headers, convert tool definitions
    and messages into each provider's dialect, aggregate complete and
    streamed responses into one canonical shape, and classify every failure
    into a small sanitized error taxonomy.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`Bridge` plus module-level convenience functions
    - Models: :class:`AggregatedResponse`, :class:`ToolCall`,
      :class:`ToolResult`, :class:`UsageStats`, :class:`StreamChunk`,
      :class:`Message`, :class:`ContentPart`
    - Errors: :class:`NormalizedError`, :class:`ErrorCategory`,
      :class:`BridgeError`, :class:`AuthError`, :class:`ConversionError`
    - Session credentials: ``set_session_value`` and friends
"""

from .base.aggregation import (
    AggregationContext,
    ResponseMetrics,
    ToolResultStyle,
    extract_metrics,
    format_for_user,
)
from .base.auth import (
    AuthResolution,
    clear_all_session_values,
    clear_session_value,
    get_session_value,
    session_scope,
    set_session_value,
)
from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    AuthError,
    BridgeError,
    ConversionError,
    ErrorCategory,
    NormalizedError,
    classify,
)
from .base.models import (
    AggregatedResponse,
    ContentPart,
    Message,
    ResponseType,
    StreamChunk,
    ToolCall,
    ToolResult,
    UsageStats,
)
from .bridge import (
    Bridge,
    aggregate_response,
    aggregate_streaming_response,
    authenticate_for_provider,
    chat,
    convert_tools,
    default_bridge,
    map_error,
    validate_authentication,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AggregatedResponse",
    "AggregationContext",
    "AuthError",
    "AuthResolution",
    "Bridge",
    "BridgeError",
    "CancellationToken",
    "CancelledError",
    "ContentPart",
    "ConversionError",
    "ErrorCategory",
    "Message",
    "NormalizedError",
    "ResponseMetrics",
    "ResponseType",
    "StreamChunk",
    "ToolCall",
    "ToolResult",
    "ToolResultStyle",
    "UsageStats",
    "aggregate_response",
    "aggregate_streaming_response",
    "authenticate_for_provider",
    "chat",
    "classify",
    "clear_all_session_values",
    "clear_session_value",
    "convert_tools",
    "default_bridge",
    "extract_metrics",
    "format_for_user",
    "get_session_value",
    "map_error",
    "session_scope",
    "set_session_value",
    "validate_authentication",
]
