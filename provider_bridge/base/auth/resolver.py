"""
Authentication resolver.

Purpose
-------
Resolve a provider credential through a strict precedence chain and render
it into the provider's auth headers.

Precedence (first present value wins)
-------------------------------------
1. Session value set for the provider in the calling context.
2. ``request_options["api_key"]`` for this call.
3. Environment: the provider's canonical variable, then its aliases.
4. Stored default from the credential store.

``None`` means absent. Any other value, the empty string included, is present
and stops the search.

Failure Modes
-------------
- ``AuthError(reason="key_not_found")`` when no tier yields a value.
- ``AuthError(reason="unsupported_provider")`` for providers missing from the
  registry while generic auth is disabled in config.
- ``AuthError(reason="empty_key")`` from ``validate`` when the winning value
  is empty.

Raw keys are never logged; diagnostics carry the source and masked key only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, NoReturn, Optional, Tuple

from ...config import BridgeSettings, get_bridge_settings
from ...config.env import generic_env_var_name
from ..errors import AuthError
from ..interfaces import CredentialStore
from ..logging import get_logger, log_event
from ..repositories import KeysRepository
from ..security.sanitizer import mask_secret
from .credential_source import CredentialSource
from .header_builder import HeaderBuilder
from .provider_spec import ProviderAuthSpec
from .registry import ProviderRegistry, default_registry
from .session import SessionCredentialStore, default_session_store

_logger = get_logger("provider_bridge.auth")


def normalize_provider_id(provider_id: Any) -> str:
    """Accept strings or enum members (``Provider.OPENAI``) as provider ids."""
    value = getattr(provider_id, "value", provider_id)
    return str(value or "").lower().strip()


@dataclass(frozen=True)
class AuthResolution:
    """Resolved credential and the headers that carry it."""

    provider: str
    headers: Mapping[str, str] = field(repr=False)
    key: str = field(repr=False)
    source: CredentialSource

    def to_safe_dict(self) -> Dict[str, Any]:
        masked = mask_secret(self.key)
        headers = {
            name: value.replace(self.key, masked) if self.key else value
            for name, value in self.headers.items()
        }
        return {
            "provider": self.provider,
            "source": self.source.value,
            "key": masked,
            "headers": headers,
        }


class AuthResolver:
    """Resolve credentials and auth headers for registered providers."""

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        credentials: Optional[CredentialStore] = None,
        session: Optional[SessionCredentialStore] = None,
        settings: Optional[BridgeSettings] = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.credentials: CredentialStore = credentials or KeysRepository()
        self.session = session or default_session_store()
        self._settings = settings

    @property
    def settings(self) -> BridgeSettings:
        return self._settings or get_bridge_settings()

    def spec_for(self, provider_id: Any) -> ProviderAuthSpec:
        """Return the registry entry, or the generic mapping for unknown ids."""
        pid = normalize_provider_id(provider_id)
        spec = self.registry.get(pid)
        if spec is not None:
            return spec
        if not pid or not self.settings.generic_auth_enabled:
            self._fail(AuthError(
                reason="unsupported_provider",
                message="no authentication mapping for provider",
                provider=pid or None,
            ))
        return ProviderAuthSpec(
            provider_id=pid,
            credential_env_var=generic_env_var_name(pid),
            header_builder=HeaderBuilder.bearer(),
            chat_path=None,
        )

    def _lookup(
        self, spec: ProviderAuthSpec, options: Mapping[str, Any]
    ) -> Tuple[Optional[str], Optional[CredentialSource], Optional[str]]:
        value = self.session.get(spec.provider_id)
        if value is not None:
            return value, CredentialSource.SESSION, None
        value = options.get("api_key")
        if value is not None:
            return str(value), CredentialSource.PER_REQUEST_OVERRIDE, None
        for name in spec.env_var_candidates():
            value = self.credentials.get_env(name)
            if value is not None:
                return value, CredentialSource.ENVIRONMENT, name
        value = self.credentials.get_default(spec.provider_id)
        if value is not None:
            return value, CredentialSource.STORED_DEFAULT, None
        return None, None, None

    def _optional_headers(self, spec: ProviderAuthSpec, options: Mapping[str, Any]) -> Dict[str, str]:
        extra: Dict[str, str] = {}
        for opt in spec.optional_headers:
            value = options.get(opt.option)
            if value is None and opt.env_var:
                value = self.credentials.get_env(opt.env_var)
            if value:
                extra[opt.header] = str(value)
        return extra

    def resolve(
        self, provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
    ) -> AuthResolution:
        """Resolve the credential for ``provider_id`` and build its headers."""
        options = request_options or {}
        spec = self.spec_for(provider_id)
        key, source, env_var = self._lookup(spec, options)
        if key is None or source is None:
            self._fail(AuthError(
                reason="key_not_found",
                message=(
                    "no credential in session, request options, "
                    f"{' / '.join(spec.env_var_candidates())} or stored defaults"
                ),
                provider=spec.provider_id,
            ))
        headers = spec.header_builder.build(key)
        headers.update(self._optional_headers(spec, options))
        log_event(
            _logger,
            "auth.resolved",
            provider=spec.provider_id,
            source=source.value,
            env_var=env_var,
            key_hint=mask_secret(key),
            headers=sorted(headers),
        )
        return AuthResolution(
            provider=spec.provider_id,
            headers=MappingProxyType(headers),
            key=key,
            source=source,
        )

    def validate(
        self, provider_id: Any, request_options: Optional[Mapping[str, Any]] = None
    ) -> AuthResolution:
        """Resolve and additionally reject empty credentials."""
        resolution = self.resolve(provider_id, request_options)
        if not resolution.key.strip():
            self._fail(AuthError(
                reason="empty_key",
                message=f"credential from {resolution.source.value} is empty",
                provider=resolution.provider,
            ))
        return resolution

    @staticmethod
    def _fail(error: AuthError) -> NoReturn:
        log_event(
            _logger,
            "auth.failed",
            level=logging.WARNING,
            provider=error.provider,
            reason=error.reason,
        )
        raise error


__all__ = ["AuthResolution", "AuthResolver", "normalize_provider_id"]
