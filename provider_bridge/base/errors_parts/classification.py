"""
Error classification: raw failure -> sanitized :class:`NormalizedError`.

Dispatch is a single match over the :data:`Failure` union produced by
``as_failure``. Sub-categorization is keyword based and the group order below
is part of the contract: the first group whose keyword appears in the lowered
text wins, so ``"network timeout"`` is an execution error.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from ..logging import get_logger, log_event
from ..security.sanitizer import sanitize, sanitize_text
from .error_category import ErrorCategory
from .failures import (
    HttpFailure,
    OpaqueFailure,
    TaggedFailure,
    TextFailure,
    as_failure,
)
from .normalized_error import NormalizedError

_logger = get_logger("provider_bridge.errors")

KEYWORD_GROUPS: Tuple[Tuple[ErrorCategory, Tuple[str, ...]], ...] = (
    (ErrorCategory.PARAMETER_ERROR, ("validation", "parameter", "conversion")),
    (ErrorCategory.EXECUTION_ERROR, ("timeout", "execution", "action")),
    (ErrorCategory.SERIALIZATION_ERROR, ("serialization", "json", "encoding")),
    (ErrorCategory.CONFIGURATION_ERROR, ("schema", "configuration", "incompatible")),
    (ErrorCategory.AVAILABILITY_ERROR, ("circuit", "availability", "service")),
    (ErrorCategory.NETWORK_ERROR, ("network", "connection", "transport")),
)


def categorize(text: Optional[str]) -> ErrorCategory:
    """Return the category of the first keyword group matching ``text``."""
    lowered = (text or "").lower()
    for category, keywords in KEYWORD_GROUPS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ErrorCategory.UNKNOWN_ERROR


def _decode_json_text(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def _render(value: Any) -> str:
    """Render an already sanitized value as a single string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _classify_http(failure: HttpFailure) -> NormalizedError:
    body = sanitize(_decode_json_text(failure.body))
    rendered = _render(body)
    details = f"HTTP {failure.status}: {rendered}" if rendered else f"HTTP {failure.status}"
    return NormalizedError(
        category=ErrorCategory.HTTP_ERROR,
        reason=f"http_{failure.status}",
        details=details,
        original=body,
        status=failure.status,
    )


def _classify_tagged(failure: TaggedFailure) -> NormalizedError:
    reason = failure.reason or ErrorCategory.GENERIC_ERROR.value
    category = failure.category or ErrorCategory.lookup(reason)
    if category is None:
        category = categorize(reason)
        if category is ErrorCategory.UNKNOWN_ERROR and failure.message:
            category = categorize(failure.message)
    details = sanitize_text(failure.message) if failure.message else sanitize_text(reason)
    return NormalizedError(
        category=category,
        reason=sanitize_text(reason),
        details=details,
        original=sanitize(failure.payload),
    )


def _classify_text(failure: TextFailure) -> NormalizedError:
    category = categorize(failure.text)
    if category is ErrorCategory.UNKNOWN_ERROR:
        category = ErrorCategory.GENERIC_ERROR
    details = sanitize_text(failure.text)
    return NormalizedError(
        category=category,
        reason=ErrorCategory.GENERIC_ERROR.value,
        details=details,
        original=details,
    )


def _classify_opaque(failure: OpaqueFailure) -> NormalizedError:
    value = failure.value
    original = sanitize(value)
    if isinstance(value, BaseException):
        details = original
    else:
        details = f"{type(value).__name__}: {_render(original)}"
    return NormalizedError(
        category=categorize(details),
        reason=type(value).__name__,
        details=details,
        original=original,
    )


def classify(raw: Any) -> NormalizedError:
    """Classify any raw failure value into a sanitized :class:`NormalizedError`.

    An already normalized error is returned unchanged.
    """
    if isinstance(raw, NormalizedError):
        return raw
    failure = as_failure(raw)
    if isinstance(failure, HttpFailure):
        normalized = _classify_http(failure)
    elif isinstance(failure, TaggedFailure):
        normalized = _classify_tagged(failure)
    elif isinstance(failure, TextFailure):
        normalized = _classify_text(failure)
    else:
        normalized = _classify_opaque(failure)
    log_event(
        _logger,
        "error.classified",
        category=normalized.category.value,
        reason=normalized.reason,
        status=normalized.status,
    )
    return normalized


__all__ = ["KEYWORD_GROUPS", "categorize", "classify"]
