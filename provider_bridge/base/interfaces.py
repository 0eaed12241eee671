"""
Collaborator interfaces (Protocols) consumed by the bridge.

Re-exports the single-class modules under
``provider_bridge.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import CredentialStore, Transport

__all__ = ["CredentialStore", "Transport"]
