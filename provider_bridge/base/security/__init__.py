"""Secret handling helpers (redaction, masking)."""

from .sanitizer import (
    SENSITIVE_FIELD_NAMES,
    is_sensitive_field,
    mask_secret,
    sanitize,
    sanitize_text,
)

__all__ = [
    "SENSITIVE_FIELD_NAMES",
    "is_sensitive_field",
    "mask_secret",
    "sanitize",
    "sanitize_text",
]
