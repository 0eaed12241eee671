"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- Stream clients use the stream read timeout.
"""
from __future__ import annotations

from provider_bridge.base.http import close_all_clients, get_httpx_client


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="send")
    c2 = get_httpx_client("https://api.example.com", purpose="send")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="send")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="send")
    c2 = get_httpx_client("https://api.other.com", purpose="send")
    assert c1 is not c2


def test_timeouts_follow_environment(monkeypatch):
    monkeypatch.setenv("PROVIDER_BRIDGE_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("PROVIDER_BRIDGE_STREAM_TIMEOUT_SECONDS", "90")
    send = get_httpx_client(None, "send")
    stream = get_httpx_client(None, "stream")
    assert send.timeout.read == 5.0
    assert stream.timeout.connect == 5.0
    assert stream.timeout.read == 90.0


def test_close_all_clears_pool():
    c1 = get_httpx_client(None, "send")
    close_all_clients()
    assert c1.is_closed
    assert get_httpx_client(None, "send") is not c1
