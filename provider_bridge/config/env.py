"""provider_bridge.config.env
==========================

Centralized environment variable mapping and helpers for provider credentials.

Purpose
-------
- Provide a single source of truth for mapping provider identifiers to their
  corresponding environment variable names (canonical and aliases).
- Give the auth registry the ordered variable names to consult per provider.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Some providers accept more than
  one variable name; list those in ``ENV_ALIASES`` with the canonical name
  first to establish precedence.
- A variable that is set counts as present even when its value is the empty
  string. Callers decide whether an empty credential is acceptable; the lookup
  never silently falls through to a lower-precedence source.

Failure Modes
-------------
- ``get_env`` returns ``None`` when a variable is unset; unknown providers
  yield no candidates.
- Helpers never raise on missing providers or unset variables.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "google": "GOOGLE_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "cloudflare": "CLOUDFLARE_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "xai": "XAI_API_KEY",
}


# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def generic_env_var_name(provider: str) -> str:
    """Return the conventional ``<PROVIDER>_API_KEY`` name for any provider."""
    return f"{(provider or '').strip().upper()}_API_KEY"


def get_env_var_candidates(provider: str, canonical: Optional[str] = None) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider.

    The canonical name (``canonical`` when given, else the ``ENV_MAP`` entry)
    is yielded first, followed by any aliases.
    """
    p = (provider or "").lower()
    canonical = canonical or ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def get_env(name: str) -> Optional[str]:
    """Return the raw value of ``name`` or ``None`` when the variable is unset."""
    return os.environ.get(name)


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "generic_env_var_name",
    "get_env_var_candidates",
    "get_env",
]
