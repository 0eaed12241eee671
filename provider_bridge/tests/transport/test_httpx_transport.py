from __future__ import annotations

import json

import httpx
import pytest

from provider_bridge.base.errors import ErrorCategory, classify
from provider_bridge.base.transport import HttpxTransport, TransportHTTPError, iter_sse_events

ENDPOINT = "https://api.example.com/v1/chat/completions"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_send_posts_json_with_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"content": "ok"})

    transport = HttpxTransport(client=_client(handler))
    out = transport.send({"authorization": "Bearer k"}, {"model": "m"}, ENDPOINT)
    assert out == {"content": "ok"}
    assert seen == {"auth": "Bearer k", "body": {"model": "m"}}


def test_send_error_status_raises_with_body():
    def handler(request):
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    with pytest.raises(TransportHTTPError) as exc:
        HttpxTransport(client=_client(handler)).send({}, {}, ENDPOINT)
    assert exc.value.status_code == 429
    normalized = classify(exc.value)
    assert normalized.category is ErrorCategory.HTTP_ERROR
    assert normalized.reason == "http_429"


def test_send_error_with_text_body():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(TransportHTTPError) as exc:
        HttpxTransport(client=_client(handler)).send({}, {}, ENDPOINT)
    assert exc.value.body == "bad gateway"


def test_stream_yields_sse_payloads_until_done():
    body = (
        'data: {"choices": [{"delta": {"content": "Hel"}}]}\n\n'
        ": keep-alive\n\n"
        'data: {"choices": [{"delta": {"content": "lo"}}]}\n\n'
        "data: [DONE]\n\n"
        'data: {"choices": [{"delta": {"content": "late"}}]}\n\n'
    )

    def handler(request):
        return httpx.Response(200, content=body.encode(), headers={"content-type": "text/event-stream"})

    events = list(HttpxTransport(client=_client(handler)).stream({}, {"stream": True}, ENDPOINT))
    assert [e["choices"][0]["delta"]["content"] for e in events] == ["Hel", "lo"]


def test_stream_error_status_raises():
    def handler(request):
        return httpx.Response(401, json={"error": "invalid api_key=sk-abc"})

    with pytest.raises(TransportHTTPError) as exc:
        list(HttpxTransport(client=_client(handler)).stream({}, {}, ENDPOINT))
    assert exc.value.status_code == 401
    assert "sk-abc" not in classify(exc.value).details


def test_network_errors_propagate_unchanged():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        HttpxTransport(client=_client(handler)).send({}, {}, ENDPOINT)


def test_sse_skips_bad_frames_and_non_objects(bridge_logs):
    lines = [b'data: {"a": 1}', "event: ping", "data: {broken", "data: [1, 2]", "", 'data: {"b": 2}']
    assert list(iter_sse_events(lines)) == [{"a": 1}, {"b": 2}]
    assert "stream.decode_failed" in bridge_logs.text
