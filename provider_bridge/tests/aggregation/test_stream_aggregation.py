"""Streaming aggregation: ordering, merging, interruption."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from provider_bridge.base.aggregation import AggregationContext, ResponseAggregator
from provider_bridge.base.cancellation import CancellationToken
from provider_bridge.base.models import ResponseType, StreamChunk, ToolCall
from provider_bridge.bridge import Bridge


def test_nil_chunk_skipped_and_content_concatenated():
    chunks = [{"content": "Hello"}, {"content": " there"}, {"content": None}]
    response = Bridge().aggregate_streaming_response(chunks)
    assert response.content == "Hello there"
    assert response.finished is True
    assert response.metadata["chunks"] == 2
    assert response.response_type is ResponseType.CONTENT_ONLY


def test_plain_strings_and_normalized_chunks():
    chunks = ["a", None, StreamChunk(content="b", finish_reason="stop"), ""]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "ab"
    assert response.finish_reason == "stop"


def test_normalized_part_content_keeps_text_parts():
    chunks = [
        {"content": [{"type": "text", "text": "Hello"}, {"type": "image", "url": "x"}]},
        {"content": " there"},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "Hello there"
    assert response.metadata["chunks"] == 2


def test_openai_delta_part_content_keeps_text_parts():
    chunks = [
        {"choices": [{"delta": {"content": [{"type": "text", "text": "Hi"}, {"type": "image", "url": "x"}]}}]},
        {"choices": [{"delta": {"content": "!"}, "finish_reason": "stop"}]},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "Hi!"
    assert response.finish_reason == "stop"


def test_image_only_chunk_counts_as_empty():
    chunks = [{"content": [{"type": "image", "url": "x"}]}, {"content": "ok"}]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "ok"
    assert response.metadata["chunks"] == 1


def test_usage_is_summed_and_total_recomputed():
    chunks = [
        {"content": "x", "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 99}},
        {"usage": {"prompt_tokens": 2, "completion_tokens": 4}},
    ]
    usage = ResponseAggregator().aggregate_stream(chunks).usage
    assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (5, 5, 10)


def test_last_finish_reason_wins():
    chunks = [{"content": "a", "finish_reason": "length"}, {"finish_reason": "stop"}]
    assert ResponseAggregator().aggregate_stream(chunks).finish_reason == "stop"


def test_tool_calls_deduplicated_by_id_last_write_wins():
    chunks = [
        {"tool_calls": [{"id": "a", "name": "x", "arguments": "{}"}]},
        {"tool_calls": [{"id": "b", "name": "y"}]},
        {"tool_calls": [{"id": "a", "name": "x", "arguments": '{"v": 1}'}]},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert [c.id for c in response.tool_calls] == ["a", "b"]
    assert response.tool_calls[0].arguments == '{"v": 1}'
    assert response.content == ""
    assert response.response_type is ResponseType.TOOLS_ONLY
    assert response.finished is False


def test_finished_when_results_cover_every_call():
    chunks = [{"tool_calls": [{"id": "a", "name": "x"}, {"id": "b", "name": "y"}]}]
    context = AggregationContext(
        tool_results=[
            {"tool_call_id": "a", "content": "1"},
            {"tool_call_id": "b", "content": "2"},
            {"tool_call_id": "z", "content": "extra"},
        ]
    )
    response = ResponseAggregator().aggregate_stream(chunks, context)
    assert response.finished is True
    assert response.content == "Here are the results:\n\nTool: 1\n\nTool: 2\n\nTool: extra"


def test_partial_results_leave_response_unfinished():
    chunks = [{"tool_calls": [{"id": "a"}, {"id": "b"}]}]
    context = AggregationContext(tool_results=[{"tool_call_id": "a", "content": "1"}])
    assert ResponseAggregator().aggregate_stream(chunks, context).finished is False


def test_openai_argument_fragments_join_by_index():
    chunks = [
        {"choices": [{"delta": {"tool_calls": [
            {"index": 0, "id": "call_abc", "type": "function", "function": {"name": "lookup", "arguments": ""}}
        ]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": '{"q":'}}]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": '"x"}'}}]}}]},
        {"choices": [{"delta": {}, "finish_reason": "tool_calls"}]},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    (call,) = response.tool_calls
    assert call.id == "call_abc" and call.name == "lookup"
    assert call.arguments == '{"q":"x"}'
    assert response.finish_reason == "tool_calls"


def test_anthropic_event_stream():
    chunks = [
        {"type": "message_start", "message": {"role": "assistant", "usage": {"input_tokens": 10, "output_tokens": 1}}},
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Let me check."}},
        {"type": "content_block_start", "index": 1, "content_block": {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {}}},
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": '{"city":'}},
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": '"Oslo"}'}},
        {"type": "message_delta", "delta": {"stop_reason": "tool_use"}, "usage": {"output_tokens": 15}},
        {"type": "message_stop"},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "Let me check."
    assert response.tool_calls == (ToolCall(id="toolu_1", name="get_weather", arguments='{"city":"Oslo"}', index=1),)
    assert response.finish_reason == "tool_use"
    assert response.usage.prompt_tokens == 10
    assert response.usage.total_tokens == response.usage.prompt_tokens + response.usage.completion_tokens
    assert response.metadata["chunks"] == 6


def test_gemini_stream_chunks():
    chunks = [
        {"candidates": [{"content": {"parts": [{"text": "Hel"}]}}]},
        {"candidates": [{"content": {"parts": [{"text": "lo"}]}, "finishReason": "STOP"}],
         "usageMetadata": {"promptTokenCount": 2, "candidatesTokenCount": 3}},
    ]
    response = ResponseAggregator().aggregate_stream(chunks)
    assert response.content == "Hello"
    assert response.finish_reason == "STOP"
    assert response.usage.total_tokens == 5


def test_cancellation_returns_partial_and_closes_iterator():
    token = CancellationToken()
    closed = []

    def gen():
        try:
            yield {"content": "partial "}
            token.cancel("user stop")
            yield {"content": "ignored"}
            yield {"content": "never"}
        finally:
            closed.append(True)

    context = AggregationContext(cancellation_token=token)
    response = ResponseAggregator().aggregate_stream(gen(), context)
    assert response.content == "partial "
    assert response.finish_reason == "incomplete"
    assert response.metadata["interrupted"] is True
    assert response.metadata["interruption"] == "CancelledError"
    assert closed == [True]


def test_interruption_without_marking():
    def gen():
        yield {"content": "a", "finish_reason": "length"}
        raise httpx.ReadTimeout("read timed out")

    context = AggregationContext(mark_incomplete=False)
    response = ResponseAggregator().aggregate_stream(gen(), context)
    assert response.content == "a"
    assert response.finish_reason == "length"
    assert response.metadata["interruption"] == "ReadTimeout"


def test_mark_incomplete_setting_from_env(monkeypatch):
    monkeypatch.setenv("PROVIDER_BRIDGE_MARK_INCOMPLETE", "false")

    def gen():
        yield {"content": "a"}
        raise TimeoutError()

    response = ResponseAggregator().aggregate_stream(gen())
    assert response.finish_reason is None
    assert response.metadata["interrupted"] is True


def test_timeout_before_first_chunk_propagates():
    def gen():
        raise TimeoutError("connect timed out")
        yield  # pragma: no cover

    with pytest.raises(TimeoutError):
        ResponseAggregator().aggregate_stream(gen())


def test_other_iterator_errors_propagate():
    def gen():
        yield {"content": "a"}
        raise ValueError("bad frame")

    with pytest.raises(ValueError):
        ResponseAggregator().aggregate_stream(gen())


def test_interruption_is_logged(bridge_logs):
    token = CancellationToken()
    token.cancel()
    ResponseAggregator().aggregate_stream([{"content": "a"}], AggregationContext(cancellation_token=token))
    assert "aggregate.stream.interrupted" in bridge_logs.text


def test_async_stream_aggregation():
    async def agen():
        for piece in ("Hello", None, " async"):
            yield {"content": piece}

    response = asyncio.run(ResponseAggregator().aggregate_stream_async(agen()))
    assert response.content == "Hello async"
    assert response.metadata["chunks"] == 2


def test_async_cancelled_error_returns_partial():
    async def agen():
        yield {"content": "before"}
        raise asyncio.CancelledError()

    response = asyncio.run(ResponseAggregator().aggregate_stream_async(agen()))
    assert response.content == "before"
    assert response.finish_reason == "incomplete"
