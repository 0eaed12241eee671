"""Structured JSON logging: formatter, sanitizing filter, context merge."""
from __future__ import annotations

import json
import logging

from provider_bridge.base.log_support import JsonFormatter, LogContext, SanitizingFilter
from provider_bridge.base.logging import get_logger, log_event


def _record(msg, *args):
    return logging.LogRecord("provider_bridge.test", logging.INFO, __file__, 1, msg, args, None)


def test_formatter_hoists_json_event_fields():
    line = JsonFormatter().format(_record(json.dumps({"event": "x.done", "count": 2})))
    data = json.loads(line)
    assert data["event"] == "x.done" and data["count"] == 2
    assert data["logger"] == "provider_bridge.test"
    assert "msg" not in data


def test_formatter_keeps_plain_messages():
    data = json.loads(JsonFormatter().format(_record("hello %s", "world")))
    assert data["msg"] == "hello world"
    assert data["level"] == "INFO"


def test_filter_scrubs_message_and_args():
    record = _record("auth header Bearer sk-live-123 via %s", "Bearer sk-arg-456")
    SanitizingFilter().filter(record)
    text = record.getMessage()
    assert "sk-live-123" not in text
    assert "sk-arg-456" not in text


def test_child_loggers_propagate_to_base():
    base = get_logger()
    child = get_logger("provider_bridge.child")
    assert base.propagate is False
    assert child.propagate is True and not child.handlers
    assert any(isinstance(f, SanitizingFilter) for h in base.handlers for f in h.filters)


def test_log_event_merges_context_and_drops_none(bridge_logs):
    ctx = LogContext(provider="openai", model=None, extra={"attempt": 1})
    log_event(get_logger("provider_bridge.child"), "demo.event", ctx, status=None, tokens=3)
    payload = json.loads(bridge_logs.records[-1].getMessage())
    assert payload == {"event": "demo.event", "provider": "openai", "attempt": 1, "tokens": 3}
