"""Transport layer: the HTTP seam between the bridge and providers."""

from .errors import TransportHTTPError
from .httpx_transport import HttpxTransport
from .sse import DONE_MARKER, iter_sse_events

__all__ = ["DONE_MARKER", "HttpxTransport", "TransportHTTPError", "iter_sse_events"]
