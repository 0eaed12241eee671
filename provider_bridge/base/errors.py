"""Unified bridge error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``provider_bridge.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    AuthError,
    BridgeError,
    ConfigurationError,
    ConversionError,
    ErrorCategory,
    Failure,
    HttpFailure,
    KEYWORD_GROUPS,
    NormalizedError,
    OpaqueFailure,
    ParameterError,
    TaggedFailure,
    TextFailure,
    as_failure,
    build_tool_error_response,
    categorize,
    classify,
)

__all__ = [
    "AuthError",
    "BridgeError",
    "ConfigurationError",
    "ConversionError",
    "ErrorCategory",
    "Failure",
    "HttpFailure",
    "KEYWORD_GROUPS",
    "NormalizedError",
    "OpaqueFailure",
    "ParameterError",
    "TaggedFailure",
    "TextFailure",
    "as_failure",
    "build_tool_error_response",
    "categorize",
    "classify",
]
