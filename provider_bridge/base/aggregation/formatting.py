"""
User-facing rendering of aggregated responses.

Presentation modes
------------------
- ``integrated``: tool results woven into the narrative as a trailing
  "Based on the tool result(s): ..." clause, unless the text already cites
  a result.
- ``appended``: base content, a fixed delimiter, then one
  ``tool_name: result`` line per successful tool.
- ``separate``: base content only; results stay structured.

Tool content that decodes to a JSON object is reduced to its most relevant
field (``result``, ``answer``, ``value``, ``message``, ``summary``,
``description``) for the integrated clause, and listed field by field
elsewhere. Failed results are never rendered as answers.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List, Optional

from ...config import get_bridge_settings
from ...config.defaults import APPENDED_TOOL_RESULTS_DELIMITER
from ..models import AggregatedResponse, ResponseType, ToolResult

KEY_FIELDS = ("result", "answer", "value", "message", "summary", "description")
_CITATION_MARKERS = ("based on", "according to", "the result")


class ToolResultStyle(str, Enum):
    INTEGRATED = "integrated"
    APPENDED = "appended"
    SEPARATE = "separate"

    @classmethod
    def coerce(cls, value: Any) -> "ToolResultStyle":
        if isinstance(value, ToolResultStyle):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown tool result style: {value!r}") from None


def _decode(content: str) -> Any:
    try:
        return json.loads(content)
    except ValueError:
        return content


def _scalar(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False, default=str)


def successful_results(results: Iterable[ToolResult]) -> List[ToolResult]:
    return [r for r in results if not r.error]


def key_information(result: ToolResult) -> str:
    """Most relevant text of a result's content."""
    decoded = _decode(result.content)
    if isinstance(decoded, Mapping):
        for key in KEY_FIELDS:
            if key in decoded:
                return _scalar(decoded[key])
        return _scalar(dict(decoded))
    return _scalar(decoded)


def format_tool_result(result: ToolResult) -> str:
    """Render one result as ``name: value`` or a per-field listing."""
    name = result.name or "Tool"
    decoded = _decode(result.content)
    if isinstance(decoded, Mapping):
        fields = "\n".join(f"  {k}: {_scalar(v)}" for k, v in decoded.items())
        return f"{name} results:\n{fields}"
    return f"{name}: {_scalar(decoded)}"


def _integrate(content: str, results: List[ToolResult]) -> str:
    if not results:
        return content
    if len(results) == 1:
        if any(marker in content.lower() for marker in _CITATION_MARKERS):
            return content
        return f"{content}\n\nBased on the tool result: {key_information(results[0])}"
    summary = "; ".join(key_information(r) for r in results)
    return f"{content}\n\nBased on the tool results: {summary}"


def _append(content: str, results: List[ToolResult]) -> str:
    if not results:
        return content
    return content + APPENDED_TOOL_RESULTS_DELIMITER + "\n".join(
        format_tool_result(r) for r in results
    )


def _metadata_block(response: AggregatedResponse) -> str:
    tokens = response.usage.total_tokens if response.usage else 0
    lines = [
        f"Processing time: {response.metadata.get('processing_time_ms', 0)}ms",
        f"Tokens used: {tokens}",
        f"Tools executed: {response.metadata.get('tools_executed', len(response.tool_results))}",
    ]
    return "\n\n---\nResponse Metadata:\n" + "\n".join(lines)


def format_for_user(
    response: AggregatedResponse, options: Optional[Mapping[str, Any]] = None
) -> str:
    """Render ``response`` as display text.

    Options:
        tool_result_style: ``integrated`` (default from settings),
            ``appended`` or ``separate``.
        include_metadata: append timing, token and tool counts.
    """
    options = options or {}
    style = ToolResultStyle.coerce(
        options.get("tool_result_style") or get_bridge_settings().tool_result_style
    )
    content = response.content
    results = successful_results(response.tool_results)
    # tools-only content already lists the results
    if response.response_type is not ResponseType.TOOLS_ONLY:
        if style is ToolResultStyle.INTEGRATED:
            content = _integrate(content, results)
        elif style is ToolResultStyle.APPENDED:
            content = _append(content, results)
    if options.get("include_metadata"):
        content += _metadata_block(response)
    return content


__all__ = [
    "KEY_FIELDS",
    "ToolResultStyle",
    "format_for_user",
    "format_tool_result",
    "key_information",
    "successful_results",
]
