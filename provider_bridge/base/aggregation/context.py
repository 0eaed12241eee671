"""Per-request aggregation context."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from ..cancellation import CancellationToken
from ..models import ToolResult


@dataclass
class AggregationContext:
    """Inputs that accompany a stream into the aggregator.

    Attributes:
        started_at: ``time.monotonic()`` reading taken when the request began.
        tool_results: Results already executed for calls in this response.
        mark_incomplete: Report ``"incomplete"`` as finish reason when the
            stream is interrupted; ``None`` defers to bridge settings.
        cancellation_token: Polled between chunks.
        conversation_id: Echoed into response metadata.
    """

    started_at: float = field(default_factory=time.monotonic)
    tool_results: Sequence[Any] = ()
    mark_incomplete: Optional[bool] = None
    cancellation_token: Optional[CancellationToken] = None
    conversation_id: Optional[str] = None

    def results(self) -> Tuple[ToolResult, ...]:
        return tuple(ToolResult.from_raw(r) for r in self.tool_results)


__all__ = ["AggregationContext"]
