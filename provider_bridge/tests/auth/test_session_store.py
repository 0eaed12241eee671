"""Session credential store isolation tests."""
from __future__ import annotations

import asyncio
import threading

from provider_bridge.base.auth import (
    SessionCredentialStore,
    clear_all_session_values,
    clear_session_value,
    get_session_value,
    session_scope,
    set_session_value,
)


def test_set_get_clear_roundtrip():
    set_session_value("OpenAI", "sk-a")
    assert get_session_value("openai") == "sk-a"
    clear_session_value("openai")
    assert get_session_value("openai") is None


def test_clear_all():
    set_session_value("openai", "a")
    set_session_value("anthropic", "b")
    clear_all_session_values()
    assert get_session_value("openai") is None
    assert get_session_value("anthropic") is None


def test_threads_do_not_see_each_other():
    store = SessionCredentialStore()
    store.set("openai", "main")
    seen = {}

    def worker():
        seen["before"] = store.get("openai")
        store.set("openai", "worker")
        seen["after"] = store.get("openai")

    t = threading.Thread(target=worker)
    t.start()
    t.join()
    assert seen == {"before": None, "after": "worker"}
    assert store.get("openai") == "main"


def test_async_task_writes_stay_in_task():
    store = SessionCredentialStore()

    async def child():
        inherited = store.get("openai")
        store.set("openai", "child")
        return inherited

    async def main():
        store.set("openai", "parent")
        inherited = await asyncio.create_task(child())
        return inherited, store.get("openai")

    assert asyncio.run(main()) == ("parent", "parent")


def test_scope_is_fresh_and_restores():
    set_session_value("openai", "outer")
    with session_scope() as store:
        assert store.get("openai") is None
        store.set("openai", "inner")
    assert get_session_value("openai") == "outer"


def test_snapshot_and_inherit():
    source = SessionCredentialStore()
    source.set("openai", "shared")
    snap = source.snapshot()
    target = SessionCredentialStore()
    seen = {}

    def worker():
        target.inherit(snap)
        seen["value"] = target.get("openai")

    t = threading.Thread(target=worker)
    t.start()
    t.join()
    assert seen["value"] == "shared"
    assert target.providers() == ()
