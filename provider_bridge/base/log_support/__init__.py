"""Auxiliary logging helpers (formatter, context, filter) used by base.logging."""

from .json_formatter import ISO, JsonFormatter
from .logging_context import LogContext
from .sanitizing_filter import SanitizingFilter

__all__ = ["JsonFormatter", "ISO", "LogContext", "SanitizingFilter"]
