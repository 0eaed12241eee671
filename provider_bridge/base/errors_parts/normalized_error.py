"""
Caller-visible classified error.

``NormalizedError`` is the only error type the bridge facade lets escape.
It is created once per failure by ``classify`` and carries sanitized content
only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_category import ErrorCategory


@dataclass(eq=False)
class NormalizedError(Exception):
    """Classified, sanitized failure record.

    Attributes:
        category: Member of the closed :class:`ErrorCategory` taxonomy.
        reason: Short machine-readable reason (``http_401``, ``key_not_found``).
        details: Human-readable, sanitized description.
        original: Sanitized rendition of the raw failure for diagnostics.
        sanitized: True once every field has passed through the sanitizer.
        status: HTTP status code for HTTP-shaped failures.
    """

    category: ErrorCategory
    reason: str
    details: str
    original: Any = None
    sanitized: bool = True
    status: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.category.value} ({self.reason}): {self.details}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "category": self.category.value,
            "reason": self.reason,
            "details": self.details,
            "sanitized": self.sanitized,
        }
        if self.status is not None:
            data["status"] = self.status
        if self.original is not None:
            data["original"] = self.original
        return data


__all__ = ["NormalizedError"]
