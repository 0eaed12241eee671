"""
Keys Repository

Purpose
- Default config/keyring collaborator for the authentication resolver.
- Reads environment variables and the stored-defaults section of the bridge
  config file; never writes.

Design
- Non-throwing accessors that return None when a value is not present.
- ``get_env`` returns the raw value, so an empty string stays distinguishable
  from an unset variable.

Usage
- repo = KeysRepository()
- repo.get_env("OPENAI_API_KEY")
- repo.get_default("openai")
"""

from __future__ import annotations

from typing import Optional

from ...config import get_stored_default
from ...config.env import get_env


class KeysRepository:
    """Credential lookups backed by the process environment and config file."""

    def get_env(self, var_name: str) -> Optional[str]:
        return get_env(var_name)

    def get_default(self, provider_id: str) -> Optional[str]:
        return get_stored_default(provider_id)


__all__ = ["KeysRepository"]
