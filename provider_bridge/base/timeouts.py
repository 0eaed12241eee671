"""Timeout configuration for transport calls and tool execution.

TimeoutConfig
    Normalized timeout values in seconds.

get_timeout_config()
    Process-cached configuration parsed from the environment on first use.
    Supported variables (all optional):
        PROVIDER_BRIDGE_HTTP_TIMEOUT_SECONDS
        PROVIDER_BRIDGE_STREAM_TIMEOUT_SECONDS
        PROVIDER_BRIDGE_TOOL_TIMEOUT_SECONDS

Invalid or non-positive values fall back to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import HTTP_TIMEOUT_SECONDS, STREAM_TIMEOUT_SECONDS, TOOL_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Timeout for a complete non-streaming request.
        stream_timeout_seconds: Read timeout between streamed events.
        tool_timeout_seconds: Wall-clock limit for one routed tool handler.
    """

    http_timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    stream_timeout_seconds: float = STREAM_TIMEOUT_SECONDS
    tool_timeout_seconds: float = TOOL_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_timeout_config() -> TimeoutConfig:
    global _CACHED
    if _CACHED is None:
        _CACHED = TimeoutConfig(
            http_timeout_seconds=_env_seconds(
                "PROVIDER_BRIDGE_HTTP_TIMEOUT_SECONDS", HTTP_TIMEOUT_SECONDS
            ),
            stream_timeout_seconds=_env_seconds(
                "PROVIDER_BRIDGE_STREAM_TIMEOUT_SECONDS", STREAM_TIMEOUT_SECONDS
            ),
            tool_timeout_seconds=_env_seconds(
                "PROVIDER_BRIDGE_TOOL_TIMEOUT_SECONDS", TOOL_TIMEOUT_SECONDS
            ),
        )
    return _CACHED


def reset_timeout_config() -> None:
    """Forget the cached configuration (tests)."""
    global _CACHED
    _CACHED = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]
