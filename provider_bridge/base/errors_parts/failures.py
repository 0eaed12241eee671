"""
Recognized shapes of upstream failures.

Any raw failure value is mapped onto exactly one variant of the ``Failure``
union by :func:`as_failure`; the classifier then matches on the variant.

Variants
--------
- ``HttpFailure``: a status code plus optional body.
- ``TaggedFailure``: a structured error exposing ``type`` / ``reason``.
- ``TextFailure``: a bare string.
- ``OpaqueFailure``: anything else, exceptions included.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from .bridge_error import BridgeError
from .error_category import ErrorCategory


@dataclass(frozen=True)
class HttpFailure:
    status: int
    body: Any = None


@dataclass(frozen=True)
class TaggedFailure:
    reason: Optional[str]
    message: Optional[str] = None
    payload: Any = None
    category: Optional[ErrorCategory] = None


@dataclass(frozen=True)
class TextFailure:
    text: str


@dataclass(frozen=True)
class OpaqueFailure:
    value: Any


Failure = Union[HttpFailure, TaggedFailure, TextFailure, OpaqueFailure]


def _valid_status(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value < 600:
        return value
    return None


def _extract_status(obj: Any) -> Optional[int]:
    """Attempt to extract an HTTP status code from an error object.

    Supported attribute shapes (checked in order):
    - ``obj.status_code``
    - ``obj.status``
    - ``obj.response.status_code``
    """
    for attr in ("status_code", "status"):
        val = _valid_status(getattr(obj, attr, None))
        if val is not None:
            return val
    resp = getattr(obj, "response", None)
    if resp is not None:
        return _valid_status(getattr(resp, "status_code", None))
    return None


def _extract_body(obj: Any) -> Any:
    body = getattr(obj, "body", None)
    if body is not None:
        return body
    resp = getattr(obj, "response", None)
    if resp is not None:
        try:
            return resp.text
        except (AttributeError, RuntimeError, UnicodeDecodeError):
            return None
    return None


def _tag_of(obj: Any, getter) -> Optional[str]:
    for attr in ("type", "reason"):
        val = getter(obj, attr)
        if isinstance(val, str) and val:
            return val
    return None


def _tagged_from_mapping(raw: Mapping) -> Optional[TaggedFailure]:
    reason = _tag_of(raw, lambda m, k: m.get(k))
    if reason is not None:
        message = raw.get("message")
        return TaggedFailure(
            reason=reason,
            message=message if isinstance(message, str) else None,
            payload=raw,
        )
    # Provider error envelopes: {"error": {"type": ..., "message": ...}}
    inner = raw.get("error")
    if isinstance(inner, Mapping):
        nested = _tagged_from_mapping(inner)
        if nested is not None:
            return TaggedFailure(reason=nested.reason, message=nested.message, payload=raw)
    return None


def as_failure(raw: Any) -> Failure:
    """Map ``raw`` onto exactly one :data:`Failure` variant (first match wins)."""
    if isinstance(raw, (HttpFailure, TaggedFailure, TextFailure, OpaqueFailure)):
        return raw
    if isinstance(raw, Mapping):
        status = _valid_status(raw.get("status"))
        if status is None:
            status = _valid_status(raw.get("status_code"))
        if status is not None:
            return HttpFailure(status=status, body=raw.get("body"))
        tagged = _tagged_from_mapping(raw)
        if tagged is not None:
            return tagged
        return OpaqueFailure(raw)
    if isinstance(raw, str):
        return TextFailure(raw)
    if isinstance(raw, BridgeError):
        return TaggedFailure(
            reason=raw.reason,
            message=str(raw),
            payload=raw.details or None,
            category=type(raw).category,
        )
    status = _extract_status(raw)
    if status is not None:
        return HttpFailure(status=status, body=_extract_body(raw))
    reason = _tag_of(raw, lambda o, k: getattr(o, k, None))
    if reason is not None:
        message = getattr(raw, "message", None)
        return TaggedFailure(
            reason=reason,
            message=message if isinstance(message, str) else str(raw) or None,
            payload=raw,
        )
    return OpaqueFailure(raw)


__all__ = [
    "HttpFailure",
    "TaggedFailure",
    "TextFailure",
    "OpaqueFailure",
    "Failure",
    "as_failure",
]
