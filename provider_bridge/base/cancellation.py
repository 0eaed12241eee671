"""Cooperative cancellation primitives (public API facade).

- ``CancellationToken`` signals cancellation to a consuming stream.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancelled_error import CancelledError

__all__ = ["CancellationToken", "CancelledError"]
