"""Cooperative cancellation token.

The aggregator polls the token between stream chunks; a caller on another
thread (or a timeout handler) flips it with ``cancel``.
"""

from __future__ import annotations

from threading import Event, Lock
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancellation flag with optional parent cascading."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._event = Event()
        self._lock = Lock()
        self._reason: Optional[str] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; children are cancelled with the same reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        with self._lock:
            self._children.append(token)
            already = self._event.is_set()
        if already:
            token.cancel(self._reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
