"""Logging filter that scrubs credentials from records before emission."""
from __future__ import annotations

import logging

from ..security.sanitizer import sanitize, sanitize_text


class SanitizingFilter(logging.Filter):
    """Rewrite ``record.msg`` and ``record.args`` through the sanitizer.

    Only inline patterns are applied to the message text; structured field
    names inside JSON event payloads (``total_tokens`` and friends) are left
    alone. Record args are sanitized as values.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = sanitize_text(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = sanitize(record.args)
            else:
                record.args = tuple(sanitize(arg) for arg in record.args)
        return True


__all__ = ["SanitizingFilter"]
