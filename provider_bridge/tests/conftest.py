"""Shared fixtures for the provider_bridge test suite.

Every test starts from a clean process state: no provider keys in the
environment, no config file, empty session credentials and zeroed counters.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

import pytest

from provider_bridge.base.auth import clear_all_session_values
from provider_bridge.base.metrics import fallback_counters
from provider_bridge.base.timeouts import reset_timeout_config
from provider_bridge.config import CONFIG_FILE_ENV, reset_config_cache
from provider_bridge.config.env import ENV_MAP

_EXTRA_ENV = (
    CONFIG_FILE_ENV,
    "PROVIDER_BRIDGE_GENERIC_AUTH",
    "PROVIDER_BRIDGE_TOOL_RESULT_STYLE",
    "PROVIDER_BRIDGE_MARK_INCOMPLETE",
    "PROVIDER_BRIDGE_HTTP_TIMEOUT_SECONDS",
    "PROVIDER_BRIDGE_STREAM_TIMEOUT_SECONDS",
    "PROVIDER_BRIDGE_TOOL_TIMEOUT_SECONDS",
    "OPENROUTER_SITE_URL",
    "OPENROUTER_SITE_NAME",
    "CLOUDFLARE_EMAIL",
    "ACME_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in list(ENV_MAP.values()) + list(_EXTRA_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    reset_timeout_config()
    clear_all_session_values()
    fallback_counters().reset()
    yield
    clear_all_session_values()
    reset_config_cache()
    reset_timeout_config()


class MockTransport:
    """In-memory transport recording requests and replaying canned payloads."""

    def __init__(
        self,
        response: Optional[Mapping[str, Any]] = None,
        chunks: Optional[List[Any]] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.response = response or {}
        self.chunks = chunks or []
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def send(self, headers, body, endpoint):
        self.calls.append({"headers": dict(headers), "body": body, "endpoint": endpoint})
        if self.error is not None:
            raise self.error
        return self.response

    def stream(self, headers, body, endpoint):
        self.calls.append({"headers": dict(headers), "body": body, "endpoint": endpoint})
        if self.error is not None:
            raise self.error
        yield from self.chunks


@pytest.fixture()
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture()
def bridge_logs(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """``caplog`` attached to the package base logger, which does not propagate."""
    base = logging.getLogger("provider_bridge")
    base.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="provider_bridge")
    yield caplog
    base.removeHandler(caplog.handler)
