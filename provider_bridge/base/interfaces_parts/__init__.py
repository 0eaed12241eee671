"""Single-class Protocol modules for bridge collaborators."""

from .credential_store import CredentialStore
from .transport import Transport

__all__ = ["CredentialStore", "Transport"]
