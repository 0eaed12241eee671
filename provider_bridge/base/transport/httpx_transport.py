"""Default :class:`Transport` implementation on pooled ``httpx`` clients.

``send`` posts a JSON body and returns the decoded JSON response. ``stream``
posts the same body and yields decoded SSE payloads. Non-2xx responses raise
:class:`TransportHTTPError`; ``httpx`` network and timeout exceptions
propagate unchanged so the caller can classify them.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..http import get_httpx_client
from ..logging import get_logger, log_event
from .errors import TransportHTTPError
from .sse import iter_sse_events

_logger = get_logger("provider_bridge.transport")


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class HttpxTransport:
    """Synchronous JSON/SSE transport.

    Parameters:
        client: Optional preconfigured ``httpx.Client`` (tests pass one built
            on ``httpx.MockTransport``). When omitted, pooled clients from
            :func:`get_httpx_client` are used.
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def _client_for(self, purpose: str) -> httpx.Client:
        return self._client or get_httpx_client(None, purpose)

    def send(self, headers: Mapping[str, str], body: Mapping[str, Any], endpoint: str) -> Dict[str, Any]:
        resp = self._client_for("send").post(endpoint, headers=dict(headers), json=dict(body))
        log_event(_logger, "transport.send", status=resp.status_code)
        if resp.status_code >= 400:
            raise TransportHTTPError(resp.status_code, _error_body(resp))
        return resp.json()

    def stream(
        self, headers: Mapping[str, str], body: Mapping[str, Any], endpoint: str
    ) -> Iterator[Dict[str, Any]]:
        client = self._client_for("stream")
        with client.stream("POST", endpoint, headers=dict(headers), json=dict(body)) as resp:
            log_event(_logger, "transport.stream", status=resp.status_code)
            if resp.status_code >= 400:
                resp.read()
                raise TransportHTTPError(resp.status_code, _error_body(resp))
            yield from iter_sse_events(resp.iter_lines())


__all__ = ["HttpxTransport"]
