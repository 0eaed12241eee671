"""Unit tests for error classification.

Covers:
- keyword precedence (first matching group wins)
- HTTP-shaped failures (mappings, attributes, ``response.status_code``)
- tagged failures, provider error envelopes and explicit categories
- opaque values and pass-through of already normalized errors
"""
from __future__ import annotations

import json
import types

import httpx
import pytest

from provider_bridge.base.errors import (
    AuthError,
    BridgeError,
    ConversionError,
    ErrorCategory,
    HttpFailure,
    NormalizedError,
    OpaqueFailure,
    TaggedFailure,
    TextFailure,
    as_failure,
    categorize,
    classify,
)
from provider_bridge.base.transport import TransportHTTPError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("network timeout", ErrorCategory.EXECUTION_ERROR),
        ("incompatible_schema", ErrorCategory.CONFIGURATION_ERROR),
        ("parameter validation failed", ErrorCategory.PARAMETER_ERROR),
        ("JSON decode problem", ErrorCategory.SERIALIZATION_ERROR),
        ("circuit open", ErrorCategory.AVAILABILITY_ERROR),
        ("connection reset by peer", ErrorCategory.NETWORK_ERROR),
        ("something odd", ErrorCategory.UNKNOWN_ERROR),
    ],
)
def test_categorize_keyword_precedence(text, expected):
    assert categorize(text) is expected


def test_classification_is_deterministic():
    first = classify("network timeout while calling action")
    for _ in range(5):
        again = classify("network timeout while calling action")
        assert again.category is first.category is ErrorCategory.EXECUTION_ERROR


def test_incompatible_schema_scenario():
    err = classify("incompatible_schema")
    assert err.category is ErrorCategory.CONFIGURATION_ERROR
    assert err.sanitized is True


def test_plain_text_without_keyword_is_generic():
    err = classify("it broke")
    assert err.category is ErrorCategory.GENERIC_ERROR
    assert err.reason == "generic_error"


def test_http_mapping():
    err = classify({"status": 429, "body": {"error": "slow down"}})
    assert err.category is ErrorCategory.HTTP_ERROR
    assert err.reason == "http_429"
    assert err.status == 429
    assert err.details.startswith("HTTP 429")


def test_http_string_body_is_decoded_and_sanitized():
    body = json.dumps({"error": {"message": "bad key", "api_key": "sk-leak-123456"}})
    err = classify(TransportHTTPError(401, body))
    assert err.reason == "http_401"
    assert "sk-leak-123456" not in err.details
    assert "[REDACTED]" in err.details


def test_http_status_from_attributes():
    assert classify(types.SimpleNamespace(status_code=404)).reason == "http_404"
    nested = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503, text="down"))
    err = classify(nested)
    assert err.status == 503 and "down" in err.details


def test_tagged_mapping_with_known_category():
    err = classify({"type": "network_error", "message": "dns failure"})
    assert err.category is ErrorCategory.NETWORK_ERROR
    assert err.details == "dns failure"


def test_tagged_mapping_categorized_by_reason_then_message():
    assert classify({"reason": "schema_mismatch"}).category is ErrorCategory.CONFIGURATION_ERROR
    err = classify({"type": "weird", "message": "request timeout"})
    assert err.category is ErrorCategory.EXECUTION_ERROR


def test_provider_error_envelope():
    payload = {"error": {"type": "invalid_request_error", "message": "parameter 'x' invalid"}}
    failure = as_failure(payload)
    assert isinstance(failure, TaggedFailure)
    assert failure.reason == "invalid_request_error"
    assert classify(payload).category is ErrorCategory.PARAMETER_ERROR


def test_bridge_errors_carry_explicit_category():
    assert classify(AuthError(reason="key_not_found", provider="openai")).category is (
        ErrorCategory.CONFIGURATION_ERROR
    )
    conv = classify(ConversionError(message="bad schema", tool="lookup"))
    assert conv.category is ErrorCategory.TOOL_CONVERSION_ERROR
    assert conv.reason == "tool_conversion_error"


def test_bridge_error_without_category_uses_reason():
    err = classify(BridgeError(reason="serialization_error", message="unsupported payload"))
    assert err.category is ErrorCategory.SERIALIZATION_ERROR


def test_exception_objects_are_opaque():
    exc = httpx.ConnectError("connection refused")
    failure = as_failure(exc)
    assert isinstance(failure, OpaqueFailure)
    err = classify(exc)
    assert err.category is ErrorCategory.NETWORK_ERROR
    assert err.reason == "ConnectError"


def test_timeout_exception_is_execution_error():
    err = classify(httpx.ReadTimeout("read timed out"))
    assert err.category is ErrorCategory.EXECUTION_ERROR


def test_opaque_value_unknown():
    err = classify(12345)
    assert err.category is ErrorCategory.UNKNOWN_ERROR
    assert err.reason == "int"


def test_variants_pass_through_as_failure():
    for variant in (HttpFailure(500, None), TextFailure("x"), OpaqueFailure(object())):
        assert as_failure(variant) is variant


def test_normalized_error_returned_unchanged():
    err = classify("network down")
    assert classify(err) is err


def test_nested_secrets_never_reach_details():
    raw = {"type": "execution_error", "message": "failed with token=abc123"}
    for _ in range(40):
        raw = {"error": raw, "context": {"password": "hunter2", "note": "api_key=sk-deep"}}
    err = classify({"status": 500, "body": raw})
    assert "hunter2" not in err.details
    assert "sk-deep" not in err.details
    assert "abc123" not in err.details


def test_normalized_error_is_raisable_and_serializable():
    err = classify({"status": 502, "body": "bad gateway"})
    with pytest.raises(NormalizedError):
        raise err
    data = err.to_dict()
    assert data["category"] == "http_error" and data["status"] == 502


def test_classified_event_logged(bridge_logs):
    classify("connection refused")
    assert "error.classified" in bridge_logs.text
    assert "network_error" in bridge_logs.text
