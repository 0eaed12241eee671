"""Simple in-process tool invocation router.

Maps tool names to callables and executes model-issued :class:`ToolCall`
objects, returning :class:`ToolResult` values ready for aggregation. Handler
failures never propagate: they become error results whose content is the
standardized tool-error payload.

Tools registered with a definition get their arguments coerced to the
declared parameter types first (see :mod:`.arguments`). Every handler runs
under a wall-clock limit; a handler that overruns yields an
``execution_timeout`` error result while its worker thread is abandoned.
"""

from __future__ import annotations

import concurrent.futures as cf
import json
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..errors import BridgeError, ParameterError, build_tool_error_response
from ..logging import get_logger, log_event
from ..models import ToolCall, ToolResult
from ..timeouts import get_timeout_config
from .arguments import coerce_arguments
from .converter import ToolConverter, ToolInput
from .schema_format import ToolSchemaFormat

_logger = get_logger("provider_bridge.tools.router")

ToolHandler = Callable[[dict], Any]


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


class SimpleToolRouter:
    """A minimal registry-based tool router.

    Contract:
        - Register handlers by name using ``register(name, handler)``; pass
          ``definition`` to have arguments checked against its parameters.
        - Invoke via ``invoke(call)`` and receive a ``ToolResult``.
        - Handlers receive a single ``dict`` of arguments and return any value;
          non-string values are serialized to JSON.
    """

    def __init__(self, timeout_seconds: Optional[float] = None) -> None:
        self._handlers: Dict[str, ToolHandler] = {}
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._timeout_seconds = timeout_seconds

    @property
    def timeout_seconds(self) -> float:
        if self._timeout_seconds is not None:
            return self._timeout_seconds
        return get_timeout_config().tool_timeout_seconds

    def register(self, name: str, handler: ToolHandler, definition: Optional[ToolInput] = None) -> None:
        """Register a tool handler under ``name``.

        ``definition`` accepts any shape :class:`ToolConverter` does; an
        invalid schema raises ``ConversionError`` here rather than at call time.
        """
        self._handlers[name] = handler
        if definition is None:
            self._schemas.pop(name, None)
            return
        converter = ToolConverter()
        fmt = ToolSchemaFormat.OPENAI_FUNCTION
        self._schemas[name] = converter.validate_schema(converter.coerce(definition, fmt), fmt)

    def names(self) -> List[str]:
        return list(self._handlers)

    def _error_result(
        self, call: ToolCall, error: Any, context: Optional[Mapping[str, Any]] = None
    ) -> ToolResult:
        ctx = {"tool": call.name, "tool_call_id": call.id, **(context or {})}
        payload = build_tool_error_response(error, ctx)
        log_event(
            _logger,
            "tool.failed",
            tool=call.name,
            tool_call_id=call.id,
            category=payload["category"],
        )
        return ToolResult(
            tool_call_id=call.id or "",
            content=json.dumps(payload, ensure_ascii=False, default=str),
            error=True,
            name=call.name,
        )

    def _run(self, handler: ToolHandler, arguments: Dict[str, Any], limit: float) -> Any:
        executor = cf.ThreadPoolExecutor(max_workers=1, thread_name_prefix="provider-bridge-tool")
        try:
            return executor.submit(handler, arguments).result(timeout=limit)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def invoke(self, call: ToolCall, context: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Execute ``call`` and wrap the outcome.

        Args:
            call: Tool call emitted by the model.
            context: Extra fields recorded (sanitized) in error payloads.
        """
        name = call.name or ""
        handler = self._handlers.get(name)
        if handler is None:
            return self._error_result(
                call,
                BridgeError(reason="tool_not_found", message=f"tool '{call.name}' not registered"),
                context,
            )
        arguments = call.arguments
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as exc:
                return self._error_result(call, exc, context)
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return self._error_result(
                call, ParameterError(message="tool arguments must be a JSON object", path="/"), context
            )
        schema = self._schemas.get(name)
        try:
            arguments = coerce_arguments(arguments, schema, name) if schema else dict(arguments)
        except BridgeError as exc:
            return self._error_result(call, exc, context)
        limit = self.timeout_seconds
        try:
            result = self._run(handler, arguments, limit)
        except cf.TimeoutError:
            return self._error_result(
                call,
                BridgeError(
                    reason="execution_timeout",
                    message=f"tool '{call.name}' did not finish within {limit}s",
                    details={"timeout_seconds": limit},
                ),
                context,
            )
        except Exception as exc:
            return self._error_result(call, exc, context)
        return ToolResult(tool_call_id=call.id or "", content=_render(result), name=call.name)

    def invoke_all(
        self, calls: Iterable[ToolCall], context: Optional[Mapping[str, Any]] = None
    ) -> List[ToolResult]:
        """Invoke calls sequentially in order."""
        return [self.invoke(call, context) for call in calls]


__all__ = ["SimpleToolRouter", "ToolHandler"]
