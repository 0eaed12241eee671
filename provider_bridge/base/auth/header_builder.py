"""
Table-driven authentication header synthesis.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from ...config.defaults import GENERIC_AUTH_HEADER, GENERIC_AUTH_PREFIX


@dataclass(frozen=True)
class HeaderBuilder:
    """Render a credential into request headers.

    Attributes:
        header_name: Header carrying the credential (lowercase).
        prefix: Text placed before the key (``"Bearer "`` for bearer auth).
        static_headers: Fixed headers always sent alongside the credential.
    """

    header_name: str
    prefix: str = ""
    static_headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def bearer(cls) -> "HeaderBuilder":
        return cls(header_name=GENERIC_AUTH_HEADER, prefix=GENERIC_AUTH_PREFIX)

    def build(self, key: str) -> Dict[str, str]:
        headers = {self.header_name: f"{self.prefix}{key}"}
        headers.update(self.static_headers)
        return headers


__all__ = ["HeaderBuilder"]
