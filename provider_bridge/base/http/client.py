"""Shared HTTP client pool for the default transport.

Purpose:
    Keep one reusable ``httpx.Client`` per ``(base_url, purpose)`` so that
    repeated bridge calls share connections. Timeouts derive from
    :func:`get_timeout_config`; no numeric literals live here.

Timeout strategy:
    - ``"send"`` clients use ``http_timeout_seconds`` for every phase.
    - ``"stream"`` clients keep the same connect/write/pool budget but use
      ``stream_timeout_seconds`` as the read timeout between events.

Lifecycle & cleanup:
    Clients are created lazily, cached, and closed at interpreter exit via
    ``atexit``. Tests may call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..logging import get_logger
from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()
_logger = get_logger("provider_bridge.http")


def _timeout_for(purpose: str) -> httpx.Timeout:
    cfg = get_timeout_config()
    if purpose == "stream":
        return httpx.Timeout(cfg.http_timeout_seconds, read=cfg.stream_timeout_seconds)
    return httpx.Timeout(cfg.http_timeout_seconds)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so relative request
            paths work. ``None`` groups clients under a shared key.
        purpose: ``"send"`` or ``"stream"``; selects the timeout profile.

    Thread-safety:
        Per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = _timeout_for(purpose)
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except httpx.HTTPError as exc:  # shutdown path; nothing to recover
                _logger.debug("client close failed: %s", exc)
        _CLIENTS.clear()


def _cleanup_at_exit() -> None:
    close_all_clients()


atexit.register(_cleanup_at_exit)

__all__ = ["get_httpx_client", "close_all_clients"]
