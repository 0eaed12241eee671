"""Base structured logging utilities for the bridge.

Rationale:
- Central place to configure consistent JSON logging.
- Every managed handler carries a :class:`SanitizingFilter` so credentials
  never reach a sink, whichever child logger emitted the record.
- Level is read from ``PROVIDER_BRIDGE_LOG_LEVEL`` on each ``get_logger`` call.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any

from .log_support import JsonFormatter, LogContext, SanitizingFilter

BASE_LOGGER_NAME = "provider_bridge"
LOG_LEVEL_ENV = "PROVIDER_BRIDGE_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_bridge_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_bridge_console_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _new_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(SanitizingFilter())
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(level: int) -> logging.Logger:
    """Initialize and return the shared ``provider_bridge`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_new_console_handler(desired_level))
                continue
            existing.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_new_console_handler(desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """Return a logger that emits through the shared sanitized JSON handler.

    Child names (``provider_bridge.auth``) propagate to the base logger and
    carry no handlers of their own.
    """
    base_logger = _ensure_base_logger(level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (normally from ``get_logger``).
    event: str
        Event name (e.g. ``auth.resolved``).
    ctx: LogContext | None
        Request context; merged shallowly.
    level: int
        Logging level for the record (INFO by default).
    **fields: Any
        Arbitrary serializable key/value pairs; ``None`` values are dropped.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "log_event",
]
