"""
Session-scoped credential store.

Purpose
-------
Highest-precedence credential tier. Values are set explicitly for the
current execution context and are invisible to every other context.

Design
------
- Backed by a ``contextvars.ContextVar`` holding a read-only mapping. Each
  write publishes a new mapping in the calling context only (copy on write),
  so there is no shared dictionary and no lock.
- Threads start from an empty session. asyncio tasks start from a snapshot of
  the creating context; their writes do not flow back.
- ``scope()`` opens a fresh session and restores the previous one on exit.
- ``snapshot()`` / ``inherit()`` move values between contexts explicitly.

Failure Modes
-------------
- Accessors never raise; unknown providers read as ``None``.
"""
from __future__ import annotations

import contextlib
from contextvars import ContextVar
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..logging import get_logger, log_event

_logger = get_logger("provider_bridge.auth.session")

_EMPTY: Mapping[str, str] = MappingProxyType({})


def _norm(provider_id: str) -> str:
    return (provider_id or "").lower().strip()


class SessionCredentialStore:
    """Per-context provider -> key table."""

    def __init__(self, name: str = "provider_bridge_session") -> None:
        self._var: ContextVar[Mapping[str, str]] = ContextVar(name, default=_EMPTY)

    def _publish(self, table: Dict[str, str]) -> None:
        self._var.set(MappingProxyType(table))

    def set(self, provider_id: str, key: str) -> None:
        table = dict(self._var.get())
        table[_norm(provider_id)] = key
        self._publish(table)
        log_event(_logger, "auth.session.set", provider=_norm(provider_id))

    def get(self, provider_id: str) -> Optional[str]:
        return self._var.get().get(_norm(provider_id))

    def clear(self, provider_id: str) -> None:
        current = self._var.get()
        pid = _norm(provider_id)
        if pid in current:
            self._publish({k: v for k, v in current.items() if k != pid})
            log_event(_logger, "auth.session.cleared", provider=pid)

    def clear_all(self) -> None:
        """Drop every value visible in the calling context."""
        self._var.set(_EMPTY)

    def providers(self) -> Tuple[str, ...]:
        return tuple(self._var.get())

    def snapshot(self) -> Mapping[str, str]:
        """Return the calling context's values (read-only)."""
        return self._var.get()

    def inherit(self, snapshot: Mapping[str, str]) -> None:
        """Copy ``snapshot`` into the calling context, overriding same-provider values."""
        table = dict(self._var.get())
        table.update({_norm(k): v for k, v in snapshot.items()})
        self._publish(table)

    @contextlib.contextmanager
    def scope(self) -> Iterator["SessionCredentialStore"]:
        """Run the block in a fresh, empty session."""
        token = self._var.set(_EMPTY)
        try:
            yield self
        finally:
            self._var.reset(token)


_default_store = SessionCredentialStore()


def default_session_store() -> SessionCredentialStore:
    return _default_store


def set_session_value(provider_id: str, key: str) -> None:
    _default_store.set(provider_id, key)


def get_session_value(provider_id: str) -> Optional[str]:
    return _default_store.get(provider_id)


def clear_session_value(provider_id: str) -> None:
    _default_store.clear(provider_id)


def clear_all_session_values() -> None:
    _default_store.clear_all()


def session_scope():
    return _default_store.scope()


__all__ = [
    "SessionCredentialStore",
    "default_session_store",
    "set_session_value",
    "get_session_value",
    "clear_session_value",
    "clear_all_session_values",
    "session_scope",
]
