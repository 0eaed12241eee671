"""
Bridge facade: one request through auth, conversion, transport and
aggregation.

Purpose
-------
``Bridge`` is the only entry point applications need. It resolves
credentials, converts tools and messages into the provider's dialect, hands
the request to a :class:`Transport`, and aggregates the answer.

Design
------
- Collaborators are injected (registry, resolver, converter, transport,
  aggregator); defaults are built lazily so importing the package performs no
  I/O.
- Every failure raised while serving a request is routed through
  :func:`classify` and re-raised as a sanitized :class:`NormalizedError`.
  The raw exception is not chained.

Failure Modes
-------------
- Missing or empty credentials -> ``configuration_error``.
- Unrepresentable tool schemas -> ``tool_conversion_error``.
- Non-2xx responses -> ``http_error``; network and timeout exceptions are
  classified by keyword.
"""
from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .base.aggregation import (
    AggregationContext,
    ResponseAggregator,
    ResponseMetrics,
    extract_metrics,
    format_for_user,
)
from .base.auth import AuthResolution, AuthResolver, ProviderRegistry, normalize_provider_id
from .base.auth.provider_spec import ProviderAuthSpec
from .base.cancellation import CancellationToken
from .base.errors import ConfigurationError, NormalizedError, classify
from .base.interfaces import Transport
from .base.logging import LogContext, get_logger, log_event
from .base.models import AggregatedResponse
from .base.tools import ToolConverter, ToolSchemaFormat, convert_messages, map_tool_choice
from .base.transport import HttpxTransport
from .config import BridgeSettings
from .config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

_logger = get_logger("provider_bridge.bridge")

_DEFAULT_CHAT_PATH = "/chat/completions"


class Bridge:
    """Provider-agnostic chat facade."""

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        resolver: Optional[AuthResolver] = None,
        converter: Optional[ToolConverter] = None,
        transport: Optional[Transport] = None,
        settings: Optional[BridgeSettings] = None,
        aggregator: Optional[ResponseAggregator] = None,
    ) -> None:
        self.resolver = resolver or AuthResolver(registry=registry, settings=settings)
        self.registry = self.resolver.registry
        self.converter = converter or ToolConverter()
        self.aggregator = aggregator or ResponseAggregator()
        self._transport = transport

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpxTransport()
        return self._transport

    # ---- component operations ------------------------------------------------

    def authenticate_for_provider(
        self, provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
    ) -> AuthResolution:
        """Resolve the credential and headers for ``provider_id``.

        Raises:
            AuthError: when no credential exists or the provider is unsupported.
        """
        return self.resolver.resolve(provider_id, request_options)

    def validate_authentication(
        self, provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
    ) -> AuthResolution:
        """Like :meth:`authenticate_for_provider` but also rejects empty keys."""
        return self.resolver.validate(provider_id, request_options)

    def _format_for(self, provider_id: Any) -> ToolSchemaFormat:
        if provider_id is None:
            return ToolSchemaFormat.OPENAI_FUNCTION
        spec = self.registry.get(normalize_provider_id(provider_id))
        return spec.tool_schema_format if spec else ToolSchemaFormat.OPENAI_FUNCTION

    def convert_tools(
        self,
        tool_definitions: Iterable[Any],
        provider_id: Any = None,
        target_format: Union[ToolSchemaFormat, str, None] = None,
    ) -> List[Dict[str, Any]]:
        """Convert tool definitions for a provider (or an explicit format)."""
        fmt = target_format if target_format is not None else self._format_for(provider_id)
        return self.converter.convert(tool_definitions, fmt)

    def aggregate_response(
        self,
        raw_response: Any,
        tool_results: Iterable[Any] = (),
        started_at: Optional[float] = None,
        *,
        conversation_id: Optional[str] = None,
    ) -> AggregatedResponse:
        return self.aggregator.aggregate_complete(
            raw_response, tool_results, started_at, conversation_id=conversation_id
        )

    def aggregate_streaming_response(
        self, chunks: Iterable[Any], context: Optional[AggregationContext] = None
    ) -> AggregatedResponse:
        return self.aggregator.aggregate_stream(chunks, context)

    def map_error(self, raw_error: Any) -> NormalizedError:
        return classify(raw_error)

    def format_for_user(
        self, response: AggregatedResponse, options: Optional[Mapping[str, Any]] = None
    ) -> str:
        return format_for_user(response, options)

    def extract_metrics(self, response: AggregatedResponse) -> ResponseMetrics:
        return extract_metrics(response)

    # ---- request building ----------------------------------------------------

    def _endpoint(
        self, spec: ProviderAuthSpec, model: Optional[str], stream: bool, options: Mapping[str, Any]
    ) -> str:
        explicit = options.get("endpoint")
        if explicit:
            return str(explicit)
        base_url = options.get("base_url") or spec.base_url
        if not base_url:
            raise ConfigurationError(
                reason="missing_endpoint",
                message="no base_url or endpoint configured",
                provider=spec.provider_id,
            )
        path = (spec.stream_path if stream else None) or spec.chat_path or _DEFAULT_CHAT_PATH
        if "{model}" in path:
            if not model:
                raise ConfigurationError(
                    reason="missing_model",
                    message="model is required to build the endpoint",
                    provider=spec.provider_id,
                )
            path = path.replace("{model}", model)
        return str(base_url).rstrip("/") + path

    def build_request_body(
        self,
        fmt: ToolSchemaFormat,
        messages: Sequence[Any],
        *,
        model: Optional[str] = None,
        tools: Optional[Iterable[Any]] = None,
        tool_choice: Any = None,
        stream: bool = False,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build the JSON body for ``fmt``; ``params`` are merged verbatim."""
        converted = self.converter.convert(tools, fmt) if tools else []
        choice = map_tool_choice(tool_choice, fmt) if converted else None
        params = dict(params or {})
        if fmt is ToolSchemaFormat.GEMINI_DECLARATION:
            shaped = convert_messages(messages, fmt)
            body: Dict[str, Any] = {"contents": shaped["contents"]}
            if shaped["system_instruction"] is not None:
                body["system_instruction"] = shaped["system_instruction"]
            if converted:
                body["tools"] = [{"function_declarations": converted}]
            if choice is not None:
                body["tool_config"] = choice
            if params:
                body["generation_config"] = params
            return body
        if fmt is ToolSchemaFormat.ANTHROPIC_TOOL:
            shaped = convert_messages(messages, fmt)
            body = {
                "model": model,
                "messages": shaped["messages"],
                "max_tokens": params.pop("max_tokens", ANTHROPIC_DEFAULT_MAX_TOKENS),
            }
            if shaped["system"] is not None:
                body["system"] = shaped["system"]
        else:
            body = {"model": model, "messages": convert_messages(messages, fmt)}
        if converted:
            body["tools"] = converted
        if choice is not None:
            body["tool_choice"] = choice
        if stream:
            body["stream"] = True
        body.update(params)
        return {k: v for k, v in body.items() if v is not None}

    # ---- end-to-end ------------------------------------------------------------

    def chat(
        self,
        provider_id: Any,
        messages: Sequence[Any],
        *,
        tools: Optional[Iterable[Any]] = None,
        tool_choice: Any = None,
        stream: bool = False,
        request_options: Optional[Mapping[str, Any]] = None,
        tool_results: Iterable[Any] = (),
        model: Optional[str] = None,
        conversation_id: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AggregatedResponse:
        """Run one chat request end to end.

        ``request_options`` carries per-request auth (``api_key``, optional
        provider headers), routing (``endpoint``, ``base_url``, ``model``) and
        ``params`` merged into the request body.

        Raises:
            NormalizedError: for every failure, already sanitized.
        """
        started_at = time.monotonic()
        options = dict(request_options or {})
        model = model or options.get("model")
        try:
            auth = self.validate_authentication(provider_id, options)
            spec = self.resolver.spec_for(provider_id)
            fmt = spec.tool_schema_format
            body = self.build_request_body(
                fmt,
                messages,
                model=model,
                tools=tools,
                tool_choice=tool_choice,
                stream=stream,
                params=options.get("params"),
            )
            endpoint = self._endpoint(spec, model, stream, options)
            ctx = LogContext(provider=auth.provider, model=model, conversation_id=conversation_id)
            log_event(_logger, "bridge.request", ctx, stream=stream, tools=len(body.get("tools", ())))
            if stream:
                context = AggregationContext(
                    started_at=started_at,
                    tool_results=tuple(tool_results),
                    cancellation_token=cancellation_token,
                    conversation_id=conversation_id,
                )
                chunks = self.transport.stream(auth.headers, body, endpoint)
                return self.aggregator.aggregate_stream(chunks, context, ctx=ctx)
            raw = self.transport.send(auth.headers, body, endpoint)
            return self.aggregator.aggregate_complete(
                raw, tool_results, started_at, conversation_id=conversation_id, ctx=ctx
            )
        except Exception as exc:
            raise self.map_error(exc) from None


_DEFAULT_BRIDGE: Optional[Bridge] = None


def default_bridge() -> Bridge:
    global _DEFAULT_BRIDGE
    if _DEFAULT_BRIDGE is None:
        _DEFAULT_BRIDGE = Bridge()
    return _DEFAULT_BRIDGE


def authenticate_for_provider(
    provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
) -> AuthResolution:
    return default_bridge().authenticate_for_provider(provider_id, request_options)


def validate_authentication(
    provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
) -> AuthResolution:
    return default_bridge().validate_authentication(provider_id, request_options)


def convert_tools(
    tool_definitions: Iterable[Any],
    provider_id: Any = None,
    target_format: Union[ToolSchemaFormat, str, None] = None,
) -> List[Dict[str, Any]]:
    return default_bridge().convert_tools(tool_definitions, provider_id, target_format)


def aggregate_response(
    raw_response: Any, tool_results: Iterable[Any] = (), started_at: Optional[float] = None
) -> AggregatedResponse:
    return default_bridge().aggregate_response(raw_response, tool_results, started_at)


def aggregate_streaming_response(
    chunks: Iterable[Any], context: Optional[AggregationContext] = None
) -> AggregatedResponse:
    return default_bridge().aggregate_streaming_response(chunks, context)


def map_error(raw_error: Any) -> NormalizedError:
    return classify(raw_error)


def chat(provider_id: Any, messages: Sequence[Any], **kwargs: Any) -> AggregatedResponse:
    return default_bridge().chat(provider_id, messages, **kwargs)


__all__ = [
    "Bridge",
    "aggregate_response",
    "aggregate_streaming_response",
    "authenticate_for_provider",
    "chat",
    "convert_tools",
    "default_bridge",
    "map_error",
    "validate_authentication",
]
