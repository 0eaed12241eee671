"""
Repositories package for the bridge.

Exports:
- KeysRepository: environment and stored-default credential lookups
"""

from .keys import KeysRepository

__all__ = ["KeysRepository"]
