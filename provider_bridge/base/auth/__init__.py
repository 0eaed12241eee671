"""Authentication resolver package.

Public surface for credential precedence resolution, provider header
synthesis, and the session-scoped credential store.
"""

from .credential_source import CredentialSource
from .header_builder import HeaderBuilder
from .provider_spec import OptionalHeader, ProviderAuthSpec
from .registry import ProviderRegistry, default_registry
from .resolver import AuthResolution, AuthResolver, normalize_provider_id
from .session import (
    SessionCredentialStore,
    clear_all_session_values,
    clear_session_value,
    default_session_store,
    get_session_value,
    session_scope,
    set_session_value,
)

__all__ = [
    "AuthResolution",
    "AuthResolver",
    "CredentialSource",
    "HeaderBuilder",
    "OptionalHeader",
    "ProviderAuthSpec",
    "ProviderRegistry",
    "SessionCredentialStore",
    "clear_all_session_values",
    "clear_session_value",
    "default_registry",
    "default_session_store",
    "get_session_value",
    "normalize_provider_id",
    "session_scope",
    "set_session_value",
]
