"""
Typed failures raised inside the bridge before classification.

``BridgeError`` is the base for failures the bridge itself detects (missing
credentials, unconvertible tool schemas). Each subclass pins the category it
maps onto so the classifier never has to guess from the message text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .error_category import ErrorCategory


@dataclass(eq=False)
class BridgeError(Exception):
    """Base structured bridge failure.

    Attributes:
        reason: Machine-readable reason (e.g. ``"key_not_found"``).
        message: Human-readable description, free of secrets.
        provider: Provider id involved in the failure, when known.
        details: Extra diagnostic fields (sanitized before exposure).
    """

    reason: str
    message: str = ""
    provider: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    category: ClassVar[Optional[ErrorCategory]] = None

    def __str__(self) -> str:
        prefix = f"{self.provider}: " if self.provider else ""
        return f"{prefix}{self.reason}: {self.message}" if self.message else f"{prefix}{self.reason}"


@dataclass(eq=False)
class AuthError(BridgeError):
    """Credential resolution failure.

    ``reason`` is one of ``key_not_found``, ``unsupported_provider`` or
    ``empty_key``.
    """

    category: ClassVar[Optional[ErrorCategory]] = ErrorCategory.CONFIGURATION_ERROR


@dataclass(eq=False)
class ConversionError(BridgeError):
    """A tool definition cannot be represented in the target schema format.

    Attributes:
        tool: Name of the offending tool definition, when known.
        path: JSON-pointer-like location of the offending schema node.
    """

    reason: str = "tool_conversion_error"
    tool: Optional[str] = None
    path: Optional[str] = None

    category: ClassVar[Optional[ErrorCategory]] = ErrorCategory.TOOL_CONVERSION_ERROR


@dataclass(eq=False)
class ConfigurationError(BridgeError):
    """A request cannot be built from the available configuration
    (no endpoint for the provider, unknown presentation style)."""

    category: ClassVar[Optional[ErrorCategory]] = ErrorCategory.CONFIGURATION_ERROR


@dataclass(eq=False)
class ParameterError(BridgeError):
    """Tool-call arguments do not fit the tool's parameter schema.

    Attributes:
        path: Location of the offending argument (``/items/0``).
    """

    reason: str = "parameter_error"
    path: Optional[str] = None

    category: ClassVar[Optional[ErrorCategory]] = ErrorCategory.PARAMETER_ERROR


__all__ = ["BridgeError", "AuthError", "ConversionError", "ConfigurationError", "ParameterError"]
