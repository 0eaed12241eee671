"""
Standardized error payload returned to a model when a tool invocation fails.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from ..security.sanitizer import sanitize
from .bridge_error import BridgeError
from .classification import classify


def build_tool_error_response(
    error: Any, context: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Build ``{error, type, message, category, timestamp, context}`` for ``error``.

    ``context`` describes the execution (tool name, call id, caller fields) and
    is sanitized before inclusion. Structured details carried by the error are
    merged under ``details``.
    """
    normalized = classify(error)
    response: Dict[str, Any] = {
        "error": True,
        "type": normalized.reason,
        "message": normalized.details,
        "category": normalized.category.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "context": sanitize(dict(context or {})),
    }
    if isinstance(error, BridgeError) and error.details:
        response["details"] = sanitize(error.details)
    elif isinstance(normalized.original, dict):
        response["details"] = normalized.original
    return response


__all__ = ["build_tool_error_response"]
