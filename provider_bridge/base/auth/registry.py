"""
Immutable provider registry.

The default table covers the providers the bridge knows how to authenticate.
Adding a provider is one more :class:`ProviderAuthSpec` entry, either in
``_default_specs`` or at runtime through ``ProviderRegistry.with_spec``.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from ...config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
    XAI_DEFAULT_BASE_URL,
)
from ...config.env import ENV_MAP, get_env_var_candidates
from ..tools.schema_format import ToolSchemaFormat
from .header_builder import HeaderBuilder
from .provider_spec import OptionalHeader, ProviderAuthSpec

_GEMINI_CHAT_PATH = "/models/{model}:generateContent"
_GEMINI_STREAM_PATH = "/models/{model}:streamGenerateContent?alt=sse"


def _aliases(provider_id: str) -> Tuple[str, ...]:
    """Alias variables after the canonical one."""
    return tuple(get_env_var_candidates(provider_id))[1:]


def _bearer(provider_id: str, base_url: str, **kwargs) -> ProviderAuthSpec:
    return ProviderAuthSpec(
        provider_id=provider_id,
        credential_env_var=ENV_MAP[provider_id],
        header_builder=HeaderBuilder.bearer(),
        env_aliases=_aliases(provider_id),
        base_url=base_url,
        **kwargs,
    )


def _google(provider_id: str) -> ProviderAuthSpec:
    return ProviderAuthSpec(
        provider_id=provider_id,
        credential_env_var=ENV_MAP[provider_id],
        header_builder=HeaderBuilder(header_name="x-goog-api-key"),
        env_aliases=_aliases(provider_id),
        tool_schema_format=ToolSchemaFormat.GEMINI_DECLARATION,
        base_url=GOOGLE_DEFAULT_BASE_URL,
        chat_path=_GEMINI_CHAT_PATH,
        stream_path=_GEMINI_STREAM_PATH,
    )


def _default_specs() -> Iterable[ProviderAuthSpec]:
    yield _bearer("openai", OPENAI_DEFAULT_BASE_URL)
    yield _bearer(
        "openrouter",
        OPENROUTER_DEFAULT_BASE_URL,
        optional_headers=(
            OptionalHeader(option="site_url", env_var="OPENROUTER_SITE_URL", header="HTTP-Referer"),
            OptionalHeader(option="site_name", env_var="OPENROUTER_SITE_NAME", header="X-Title"),
        ),
    )
    yield _bearer("deepseek", DEEPSEEK_DEFAULT_BASE_URL)
    yield _bearer("xai", XAI_DEFAULT_BASE_URL)
    yield ProviderAuthSpec(
        provider_id="anthropic",
        credential_env_var=ENV_MAP["anthropic"],
        header_builder=HeaderBuilder(
            header_name="x-api-key",
            static_headers={"anthropic-version": ANTHROPIC_API_VERSION},
        ),
        tool_schema_format=ToolSchemaFormat.ANTHROPIC_TOOL,
        base_url=ANTHROPIC_DEFAULT_BASE_URL,
        chat_path="/messages",
    )
    yield _google("google")
    yield _google("gemini")
    # Cloudflare endpoints are account specific; callers pass base_url.
    yield ProviderAuthSpec(
        provider_id="cloudflare",
        credential_env_var=ENV_MAP["cloudflare"],
        header_builder=HeaderBuilder(header_name="x-auth-key"),
        optional_headers=(
            OptionalHeader(option="email", env_var="CLOUDFLARE_EMAIL", header="X-Auth-Email"),
        ),
    )


class ProviderRegistry:
    """Read-only mapping of provider id to :class:`ProviderAuthSpec`."""

    __slots__ = ("_specs",)

    def __init__(self, specs: Optional[Iterable[ProviderAuthSpec]] = None) -> None:
        table = {s.provider_id: s for s in (_default_specs() if specs is None else specs)}
        self._specs: Mapping[str, ProviderAuthSpec] = MappingProxyType(table)

    @property
    def specs(self) -> Mapping[str, ProviderAuthSpec]:
        return self._specs

    def get(self, provider_id: str) -> Optional[ProviderAuthSpec]:
        return self._specs.get((provider_id or "").lower().strip())

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and self.get(provider_id) is not None

    def provider_ids(self) -> Tuple[str, ...]:
        return tuple(self._specs)

    def with_spec(self, spec: ProviderAuthSpec) -> "ProviderRegistry":
        """Return a new registry with ``spec`` added (or replaced)."""
        return ProviderRegistry({**self._specs, spec.provider_id: spec}.values())


_DEFAULT_REGISTRY: Optional[ProviderRegistry] = None


def default_registry() -> ProviderRegistry:
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ProviderRegistry()
    return _DEFAULT_REGISTRY


__all__ = ["ProviderRegistry", "default_registry"]
