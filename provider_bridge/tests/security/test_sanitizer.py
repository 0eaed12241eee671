"""Sanitizer behavior: field-name redaction, inline patterns, idempotence."""
from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from provider_bridge.base.security import mask_secret, sanitize, sanitize_text


@dataclass
class _Cfg:
    name: str
    client_secret: str


class _Model(BaseModel):
    user: str
    access_token: str


def test_sensitive_field_names_redacted_case_insensitive():
    out = sanitize({"API_KEY": "sk-1", "Password": "p", "refresh_token": "t", "name": "ok"})
    assert out == {
        "API_KEY": "[REDACTED]",
        "Password": "[REDACTED]",
        "refresh_token": "[REDACTED]",
        "name": "ok",
    }


def test_public_data_is_never_redacted():
    data = {"public_data": {"greeting": "hello"}, "meta": {"public_data": "x"}}
    assert sanitize(data) == data


@pytest.mark.parametrize(
    "text, leaked",
    [
        ("request failed: api_key=sk-abc123 retry later", "sk-abc123"),
        ('payload {"token": "tok-999"}', "tok-999"),
        ("password: hunter2", "hunter2"),
        ("Authorization: Bearer eyJhbGciOi.abc", "eyJhbGciOi.abc"),
        ("url?key=secretvalue&x=1", "secretvalue"),
    ],
)
def test_inline_patterns(text, leaked):
    cleaned = sanitize_text(text)
    assert leaked not in cleaned
    assert "[REDACTED]" in cleaned


def test_idempotent_on_nested_structures():
    raw = {
        "error": {"message": "bad api_key=sk-1 and Bearer abc.def", "secret": "s"},
        "items": [{"token": "t"}, "password=pw", ("key: v",)],
        "public_data": {"a": 1},
    }
    once = sanitize(raw)
    assert sanitize(once) == once


def test_dataclasses_models_and_exceptions():
    assert sanitize(_Cfg(name="n", client_secret="cs")) == {"name": "n", "client_secret": "[REDACTED]"}
    assert sanitize(_Model(user="u", access_token="at")) == {"user": "u", "access_token": "[REDACTED]"}
    assert sanitize(RuntimeError("token=abc")) == "RuntimeError: token=[REDACTED]"


def test_depth_bound_truncates():
    deep = "leaf"
    for _ in range(50):
        deep = {"next": deep}
    out = sanitize(deep)
    node = out
    depth = 0
    while isinstance(node, dict):
        node = node["next"]
        depth += 1
    assert node == "[TRUNCATED]"
    assert depth <= 50


def test_sets_become_lists_and_tuples_stay_tuples():
    assert sanitize(("a", "b")) == ("a", "b")
    assert sorted(sanitize({"x", "y"})) == ["x", "y"]


def test_mask_secret():
    assert mask_secret(None) == "<unset>"
    assert mask_secret("short") == "***"
    assert mask_secret("sk-abcdefghijkl") == "sk-a...ijkl"


@pytest.mark.parametrize(
    "text",
    ["unknown key: model", "monkey: 5", "max_tokens exceeded: 4096 > 2048", "keyboard=us"],
)
def test_ordinary_diagnostics_survive(text):
    assert sanitize_text(text) == text


def test_prefixed_credential_names_still_redacted():
    cleaned = sanitize_text("OPENAI_API_KEY=sk-live-1 client_secret: cs-2 private-key=pk-3")
    assert "sk-live-1" not in cleaned and "cs-2" not in cleaned and "pk-3" not in cleaned
