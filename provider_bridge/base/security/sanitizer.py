"""Recursive redaction of secrets in diagnostic payloads.

Purpose
-------
Everything that leaves the bridge for a log sink or a caller-visible error
passes through :func:`sanitize`. The function walks mappings, sequences,
dataclasses, pydantic models and exceptions depth-first and replaces:

* values whose field name contains one of ``SENSITIVE_FIELD_NAMES``
  (case-insensitive substring match) with ``"[REDACTED]"``;
* inline ``api_key=value`` / ``token: value`` / ``password=value`` pairs,
  URL ``?key=value`` parameters and ``Bearer <token>`` fragments inside
  strings.

Design
------
- Matching is against the fixed name list only. A field such as
  ``public_data`` survives untouched.
- The walk is bounded by ``SANITIZE_MAX_DEPTH``; nodes below the bound become
  ``"[TRUNCATED]"``.
- Output is a plain structure (dicts, lists, tuples, scalars). Running
  ``sanitize`` on its own output returns an equal value.

Failure Modes
-------------
- Never raises for ordinary values; objects with no special handling are
  returned as-is.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from typing import Any, Optional

from ...config.defaults import REDACTED, SANITIZE_MAX_DEPTH, TRUNCATED

SENSITIVE_FIELD_NAMES = (
    "password",
    "token",
    "secret",
    "api_key",
    "private_key",
    "auth",
    "credential",
)

# Inline names are anchored to credential-like identifiers; a bare ``key`` is
# only a secret as a URL query parameter.
_INLINE_SECRET_RE = re.compile(
    r"(?P<prefix>(?:[\w-]*(?:api[_-]?key|private[_-]?key|token|password|secret)[\"']?\s*[=:]"
    r"|[?&]key=)\s*[\"']?)"
    r"(?!\[REDACTED\])(?P<value>[^\s&,;\"'}\]]+)",
    re.IGNORECASE,
)
_BEARER_RE = re.compile(r"(?P<prefix>\bBearer\s+)(?!\[REDACTED\])(?P<value>[^\s,;\"']+)", re.IGNORECASE)


def is_sensitive_field(name: Any) -> bool:
    """Return True when ``name`` contains one of the sensitive field names."""
    if not isinstance(name, str):
        return False
    lowered = name.lower()
    return any(marker in lowered for marker in SENSITIVE_FIELD_NAMES)


def sanitize_text(text: str) -> str:
    """Redact inline credentials from a free-form string."""
    text = _INLINE_SECRET_RE.sub(lambda m: f"{m.group('prefix')}{REDACTED}", text)
    return _BEARER_RE.sub(lambda m: f"{m.group('prefix')}{REDACTED}", text)


def sanitize(value: Any, *, depth: int = 0) -> Any:
    """Return a redacted copy of ``value``.

    Args:
        value: Arbitrary diagnostic payload.
        depth: Current nesting level (callers normally leave the default).
    """
    if depth > SANITIZE_MAX_DEPTH:
        return TRUNCATED
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, BaseException):
        return sanitize_text(f"{type(value).__name__}: {value}")
    if isinstance(value, Mapping):
        return {
            key: REDACTED if is_sensitive_field(key) else sanitize(item, depth=depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, tuple):
        return tuple(sanitize(item, depth=depth + 1) for item in value)
    if isinstance(value, (list, set, frozenset)):
        return [sanitize(item, depth=depth + 1) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        as_map = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return sanitize(as_map, depth=depth)
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return sanitize(dump(), depth=depth)
    return value


def mask_secret(key: Optional[str]) -> str:
    """Render a credential for diagnostics without revealing it.

    Keys longer than eight characters show their first and last four
    characters (``abcd...wxyz``); shorter keys render as ``***``.
    """
    if key is None:
        return "<unset>"
    if len(key) > 8:
        return f"{key[:4]}...{key[-4:]}"
    return "***"


__all__ = [
    "SENSITIVE_FIELD_NAMES",
    "is_sensitive_field",
    "sanitize",
    "sanitize_text",
    "mask_secret",
]
