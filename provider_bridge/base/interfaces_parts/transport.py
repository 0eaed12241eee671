"""Transport Protocol (single-class module).

Opaque I/O collaborator used by the bridge facade. The bridge hands it fully
built headers, a JSON-serializable body and the provider endpoint; it returns
the decoded provider payload or an iterator of decoded stream events.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Send requests to a provider endpoint.

    Failures are raised as exceptions; HTTP failures should expose a
    ``status_code`` so they classify as ``http_error``.
    """

    def send(
        self, headers: Mapping[str, str], body: Mapping[str, Any], endpoint: str
    ) -> Mapping[str, Any]:
        """Perform one request and return the decoded response payload."""
        ...

    def stream(
        self, headers: Mapping[str, str], body: Mapping[str, Any], endpoint: str
    ) -> Iterator[Mapping[str, Any]]:
        """Perform a streaming request and yield decoded events in arrival order."""
        ...


__all__ = ["Transport"]
