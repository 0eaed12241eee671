"""
Credential sources in precedence order (session highest).
"""
from __future__ import annotations

from enum import Enum


class CredentialSource(str, Enum):
    SESSION = "session"
    PER_REQUEST_OVERRIDE = "per_request_override"
    ENVIRONMENT = "environment"
    STORED_DEFAULT = "stored_default"


__all__ = ["CredentialSource"]
