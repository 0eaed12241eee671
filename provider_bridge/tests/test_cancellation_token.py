from __future__ import annotations

import threading

import pytest

from provider_bridge.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_reason_and_raises():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("user abort")
    assert token.cancelled and token.reason == "user abort"
    with pytest.raises(CancelledError, match="user abort"):
        token.raise_if_cancelled()


def test_parent_cancellation_cascades_to_children():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("shutdown")
    assert child.cancelled and child.reason == "shutdown"
    late = parent.child()
    assert late.cancelled


def test_cancel_from_another_thread():
    token = CancellationToken()
    worker = threading.Thread(target=token.cancel)
    worker.start()
    worker.join()
    assert token.cancelled
