"""CredentialStore Protocol (single-class module).

Config/keyring collaborator consulted by the authentication resolver for the
environment and stored-default credential tiers.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Read-only credential lookups.

    Implementations must return ``None`` for absent values and must not turn
    an empty string into ``None``: the resolver treats a set-but-empty value
    as present.
    """

    def get_default(self, provider_id: str) -> Optional[str]:
        """Return the stored default key for ``provider_id``, if any."""
        ...

    def get_env(self, var_name: str) -> Optional[str]:
        """Return the value of environment variable ``var_name``, if set."""
        ...


__all__ = ["CredentialStore"]
