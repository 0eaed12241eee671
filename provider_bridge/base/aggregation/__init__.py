"""Response aggregation package.

Public surface for building :class:`AggregatedResponse` objects from complete
payloads and chunk streams, rendering them for users, and deriving metrics.
"""

from .accumulator import StreamAccumulator
from .aggregator import ResponseAggregator, is_finished
from .context import AggregationContext
from .extraction import ExtractedPayload, extract_text, normalize_response
from .formatting import (
    KEY_FIELDS,
    ToolResultStyle,
    format_for_user,
    format_tool_result,
    key_information,
)
from .metrics import ResponseMetrics, classify_response_type, extract_metrics

__all__ = [
    "AggregationContext",
    "ExtractedPayload",
    "KEY_FIELDS",
    "ResponseAggregator",
    "ResponseMetrics",
    "StreamAccumulator",
    "ToolResultStyle",
    "classify_response_type",
    "extract_metrics",
    "extract_text",
    "format_for_user",
    "format_tool_result",
    "is_finished",
    "key_information",
    "normalize_response",
]
