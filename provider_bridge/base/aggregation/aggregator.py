"""
Response aggregation: complete payloads and chunk streams into one
:class:`AggregatedResponse`.

Purpose
-------
Both entry points feed one merge core (``_build``) so content fallback,
``finished`` computation and metadata are identical whether the provider
answered in one payload or as a stream.

Design
------
- ``finished`` holds when every emitted tool call id has a result
  (``C ⊆ R``); extra results never unset it.
- Empty base content with tool results is replaced by a results lead-in, or
  by a failure summary when every result is an error. Empty content with no
  tool calls becomes a fixed fallback sentence.
- Streams are consumed synchronously in arrival order. Cancellation (token
  or ``CancelledError``) and timeouts end consumption early and return the
  partial response, flagged ``metadata["interrupted"]``.

Failure Modes
-------------
Unsupported payload types raise ``BridgeError``. Errors raised by the chunk
iterator other than cancellation and timeouts propagate unchanged, as does a
timeout that fires before the first chunk arrives.
"""
from __future__ import annotations

import asyncio
import time
from contextlib import suppress
from typing import Any, AsyncIterable, Dict, Iterable, Optional, Sequence, Tuple

import httpx

from ...config import get_bridge_settings
from ...config.defaults import (
    INCOMPLETE_FINISH_REASON,
    NO_RESPONSE_FALLBACK,
    TOOL_FAILURE_SUMMARY,
    TOOL_RESULTS_LEAD_IN,
)
from ..cancellation import CancelledError
from ..logging import LogContext, get_logger, log_event
from ..models import AggregatedResponse, ResponseType, ToolCall, ToolResult, UsageStats
from ..security.sanitizer import sanitize
from .accumulator import StreamAccumulator
from .context import AggregationContext
from .extraction import normalize_response
from .formatting import format_tool_result, successful_results

_TIMEOUTS = (TimeoutError, httpx.TimeoutException)
_INTERRUPTIONS = (CancelledError, asyncio.CancelledError) + _TIMEOUTS


def _final_content(content: str, tool_calls: Sequence[ToolCall], results: Sequence[ToolResult]) -> str:
    if content:
        return content
    if results:
        ok = successful_results(results)
        if not ok:
            return TOOL_FAILURE_SUMMARY
        return TOOL_RESULTS_LEAD_IN + "\n\n" + "\n\n".join(format_tool_result(r) for r in ok)
    if not tool_calls:
        return NO_RESPONSE_FALLBACK
    return content


def is_finished(tool_calls: Sequence[ToolCall], results: Sequence[ToolResult]) -> bool:
    """True when every emitted call id has a matching result id."""
    emitted = {c.id for c in tool_calls if c.id is not None}
    answered = {r.tool_call_id for r in results}
    return emitted <= answered


def _elapsed_ms(started_at: Optional[float]) -> float:
    if started_at is None:
        return 0.0
    return round(max(time.monotonic() - started_at, 0.0) * 1000, 3)


class ResponseAggregator:
    """Builds canonical responses; holds no per-request state."""

    def __init__(self, *, logger=None) -> None:
        self._logger = logger or get_logger("provider_bridge.aggregation")

    def _build(
        self,
        *,
        content: str,
        tool_calls: Tuple[ToolCall, ...],
        tool_results: Tuple[ToolResult, ...],
        usage: Optional[UsageStats],
        finish_reason: Optional[str],
        started_at: Optional[float],
        conversation_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> AggregatedResponse:
        response_type = ResponseType.classify(bool(content), bool(tool_calls or tool_results))
        metadata: Dict[str, Any] = {
            "processing_time_ms": _elapsed_ms(started_at),
            "tools_executed": len(tool_results),
            "has_tool_calls": bool(tool_calls),
            "response_type": response_type.value,
        }
        errors = [sanitize(r.to_dict()) for r in tool_results if r.error]
        if errors:
            metadata["tool_errors"] = errors
        if conversation_id is not None:
            metadata["conversation_id"] = conversation_id
        if extra:
            metadata.update(extra)
        return AggregatedResponse(
            content=_final_content(content, tool_calls, tool_results),
            tool_calls=tool_calls,
            tool_results=tool_results,
            usage=usage,
            finish_reason=finish_reason,
            metadata=metadata,
            finished=is_finished(tool_calls, tool_results),
        )

    def aggregate_complete(
        self,
        raw_response: Any,
        tool_results: Iterable[Any] = (),
        started_at: Optional[float] = None,
        *,
        conversation_id: Optional[str] = None,
        ctx: Optional[LogContext] = None,
    ) -> AggregatedResponse:
        """Aggregate one non-streaming provider payload.

        Results embedded in a normalized payload come first, followed by
        ``tool_results``.
        """
        payload = normalize_response(raw_response)
        results = payload.tool_results + tuple(ToolResult.from_raw(r) for r in tool_results)
        response = self._build(
            content=payload.content,
            tool_calls=payload.tool_calls,
            tool_results=results,
            usage=payload.usage,
            finish_reason=payload.finish_reason,
            started_at=started_at,
            conversation_id=conversation_id,
        )
        log_event(
            self._logger,
            "aggregate.complete",
            ctx,
            response_type=response.metadata["response_type"],
            tool_calls=len(response.tool_calls),
            finished=response.finished,
            processing_time_ms=response.metadata["processing_time_ms"],
        )
        return response

    def _finish_stream(
        self,
        acc: StreamAccumulator,
        context: AggregationContext,
        interruption: Optional[BaseException],
        ctx: Optional[LogContext],
    ) -> AggregatedResponse:
        # a timeout before the first chunk is a failed request, not a partial one
        if isinstance(interruption, _TIMEOUTS) and acc.chunks == 0:
            raise interruption
        content, calls, usage, finish_reason = acc.snapshot()
        extra: Dict[str, Any] = {"chunks": acc.chunks}
        if interruption is not None:
            mark = context.mark_incomplete
            if mark is None:
                mark = get_bridge_settings().mark_incomplete
            if mark:
                finish_reason = INCOMPLETE_FINISH_REASON
            extra["interrupted"] = True
            extra["interruption"] = type(interruption).__name__
            log_event(
                self._logger,
                "aggregate.stream.interrupted",
                ctx,
                chunks=acc.chunks,
                cause=type(interruption).__name__,
                finish_reason=finish_reason,
            )
        response = self._build(
            content=content,
            tool_calls=calls,
            tool_results=context.results(),
            usage=usage,
            finish_reason=finish_reason,
            started_at=context.started_at,
            conversation_id=context.conversation_id,
            extra=extra,
        )
        log_event(
            self._logger,
            "aggregate.stream",
            ctx,
            chunks=acc.chunks,
            response_type=response.metadata["response_type"],
            finished=response.finished,
            interrupted=interruption is not None,
        )
        return response

    def aggregate_stream(
        self,
        chunks: Iterable[Any],
        context: Optional[AggregationContext] = None,
        *,
        ctx: Optional[LogContext] = None,
    ) -> AggregatedResponse:
        """Consume ``chunks`` until exhausted, cancelled or timed out."""
        context = context or AggregationContext()
        token = context.cancellation_token
        acc = StreamAccumulator()
        interruption: Optional[BaseException] = None
        iterator = iter(chunks)
        try:
            for chunk in iterator:
                if token is not None:
                    token.raise_if_cancelled()
                acc.add(chunk)
            if token is not None:
                token.raise_if_cancelled()
        except _INTERRUPTIONS as exc:
            interruption = exc
        finally:
            close = getattr(iterator, "close", None)
            if callable(close):
                with suppress(Exception):
                    close()
        return self._finish_stream(acc, context, interruption, ctx)

    async def aggregate_stream_async(
        self,
        chunks: AsyncIterable[Any],
        context: Optional[AggregationContext] = None,
        *,
        ctx: Optional[LogContext] = None,
    ) -> AggregatedResponse:
        """Async variant of :meth:`aggregate_stream` for async iterators."""
        context = context or AggregationContext()
        token = context.cancellation_token
        acc = StreamAccumulator()
        interruption: Optional[BaseException] = None
        iterator = chunks.__aiter__()
        try:
            async for chunk in iterator:
                if token is not None:
                    token.raise_if_cancelled()
                acc.add(chunk)
            if token is not None:
                token.raise_if_cancelled()
        except _INTERRUPTIONS as exc:
            interruption = exc
        finally:
            aclose = getattr(iterator, "aclose", None)
            if callable(aclose):
                with suppress(Exception):
                    await aclose()
        return self._finish_stream(acc, context, interruption, ctx)


__all__ = ["ResponseAggregator", "is_finished"]
