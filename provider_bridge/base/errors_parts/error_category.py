"""
Normalized error categories (closed taxonomy).

Every failure that leaves the bridge carries exactly one of these values.
Values are lowercase snake_case and are a stable public contract for logging
and programmatic handling.
"""
from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Enumerated error categories surfaced on ``NormalizedError``."""

    HTTP_ERROR = "http_error"
    PARAMETER_ERROR = "parameter_error"
    EXECUTION_ERROR = "execution_error"
    SERIALIZATION_ERROR = "serialization_error"
    CONFIGURATION_ERROR = "configuration_error"
    AVAILABILITY_ERROR = "availability_error"
    NETWORK_ERROR = "network_error"
    GENERIC_ERROR = "generic_error"
    UNKNOWN_ERROR = "unknown_error"
    TOOL_CONVERSION_ERROR = "tool_conversion_error"

    @classmethod
    def lookup(cls, value: str) -> "ErrorCategory | None":
        """Return the member whose value equals ``value`` exactly, else None."""
        try:
            return cls(value)
        except ValueError:
            return None


__all__ = ["ErrorCategory"]
