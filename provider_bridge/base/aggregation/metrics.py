"""Analytics derived from a completed :class:`AggregatedResponse`."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..models import AggregatedResponse, ResponseType


@dataclass(frozen=True)
class ResponseMetrics:
    processing_time_ms: float = 0.0
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    tools_executed: int = 0
    tools_successful: int = 0
    tools_failed: int = 0
    tool_success_rate: float = 0.0
    conversation_id: Optional[str] = None
    finished: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def classify_response_type(has_content: bool, has_tools: bool) -> ResponseType:
    """Pure presence classification (see :class:`ResponseType`)."""
    return ResponseType.classify(has_content, has_tools)


def _success_rate(successful: int, executed: int) -> float:
    if executed == 0:
        return 0.0
    return round(successful / executed * 100, 1)


def extract_metrics(response: AggregatedResponse) -> ResponseMetrics:
    """Summarize timing, token usage and tool outcomes of ``response``."""
    executed = len(response.tool_results)
    failed = sum(1 for r in response.tool_results if r.error)
    successful = executed - failed
    usage = response.usage
    return ResponseMetrics(
        processing_time_ms=float(response.metadata.get("processing_time_ms", 0.0)),
        prompt_tokens=usage.prompt_tokens if usage else 0,
        completion_tokens=usage.completion_tokens if usage else 0,
        total_tokens=usage.total_tokens if usage else 0,
        tools_executed=executed,
        tools_successful=successful,
        tools_failed=failed,
        tool_success_rate=_success_rate(successful, executed),
        conversation_id=response.metadata.get("conversation_id"),
        finished=response.finished,
    )


__all__ = ["ResponseMetrics", "classify_response_type", "extract_metrics"]
