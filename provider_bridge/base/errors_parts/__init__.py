"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `provider_bridge.base.errors` for the stable surface.
"""

from .bridge_error import AuthError, BridgeError, ConfigurationError, ConversionError, ParameterError
from .classification import KEYWORD_GROUPS, categorize, classify
from .error_category import ErrorCategory
from .failures import (
    Failure,
    HttpFailure,
    OpaqueFailure,
    TaggedFailure,
    TextFailure,
    as_failure,
)
from .normalized_error import NormalizedError
from .tool_error import build_tool_error_response

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
