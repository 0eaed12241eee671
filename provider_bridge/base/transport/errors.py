"""Transport-level failure carrying the upstream HTTP status."""
from __future__ import annotations

from typing import Any


class TransportHTTPError(Exception):
    """Raised for non-2xx upstream responses.

    The classifier reads ``status_code`` and ``body`` and maps the failure to
    ``http_error`` with a sanitized body.
    """

    def __init__(self, status_code: int, body: Any = None) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


__all__ = ["TransportHTTPError"]
