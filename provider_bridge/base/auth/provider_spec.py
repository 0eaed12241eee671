"""
Static per-provider descriptor used by the resolver and the bridge.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..tools.schema_format import ToolSchemaFormat
from .header_builder import HeaderBuilder


@dataclass(frozen=True)
class OptionalHeader:
    """Extra header filled from a request option, then an env var."""

    option: str
    env_var: Optional[str]
    header: str


@dataclass(frozen=True)
class ProviderAuthSpec:
    """Everything the bridge needs to talk to one provider.

    Attributes:
        provider_id: Registry key (lowercase).
        credential_env_var: Canonical environment variable for the key.
        header_builder: Renders the key into headers.
        env_aliases: Further variables consulted, in order, after the
            canonical one.
        optional_headers: Non-credential headers sourced per request.
        tool_schema_format: Dialect used for tools and messages.
        base_url: Default API root; ``None`` when it is account specific.
        chat_path: Path of the chat endpoint; may contain ``{model}``.
        stream_path: Streaming path when it differs from ``chat_path``.
    """

    provider_id: str
    credential_env_var: str
    header_builder: HeaderBuilder
    env_aliases: Tuple[str, ...] = ()
    optional_headers: Tuple[OptionalHeader, ...] = ()
    tool_schema_format: ToolSchemaFormat = ToolSchemaFormat.OPENAI_FUNCTION
    base_url: Optional[str] = None
    chat_path: Optional[str] = "/chat/completions"
    stream_path: Optional[str] = None

    def env_var_candidates(self) -> Tuple[str, ...]:
        return (self.credential_env_var,) + tuple(
            alias for alias in self.env_aliases if alias != self.credential_env_var
        )


__all__ = ["OptionalHeader", "ProviderAuthSpec"]
