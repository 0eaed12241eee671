"""Cancellation error type."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when stream consumption is cancelled cooperatively.

    The aggregator treats this like an upstream interruption: it stops
    consuming and returns the partial response accumulated so far.
    """


__all__ = ["CancelledError"]
