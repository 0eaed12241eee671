"""Unified configuration layer for the bridge.

Goals
-----
* Centralize defaults (generic auth mapping, tool result presentation,
  interrupted stream marking).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       PROVIDER_BRIDGE_CONFIG_FILE
    3. Environment variables (PROVIDER_BRIDGE_*)
* Provide a single call site: ``get_bridge_settings()``.
* Expose stored per-provider credentials (``api.<provider>`` section of the
  external file) for the last tier of the credential precedence chain.

External Config File (Optional)
-------------------------------
If PROVIDER_BRIDGE_CONFIG_FILE is set to a path, we attempt to load JSON first
and fall back to YAML. Structure example:

```
bridge:
  generic_auth: bearer
  tool_result_style: appended
  mark_incomplete: true
api:
  openai:
    api_key: sk-...
  anthropic:
    key: sk-ant-...
```

Public API
----------
* get_bridge_settings() -> BridgeSettings
* get_stored_default(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_TOOL_RESULT_STYLE, GENERIC_AUTH_MODE

CONFIG_FILE_ENV = "PROVIDER_BRIDGE_CONFIG_FILE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}
_STORED_KEY_FIELDS = ("api_key", "key", "token")

_FILE_CACHE: Optional[Dict[str, Any]] = None
_SETTINGS_CACHE: Optional["BridgeSettings"] = None


@dataclass(frozen=True)
class BridgeSettings:
    """Resolved bridge-wide settings.

    Attributes:
        generic_auth: ``"bearer"`` to authenticate unknown providers with a
            bearer header on ``<PROVIDER>_API_KEY``; ``"disabled"`` to reject
            them with ``unsupported_provider``.
        tool_result_style: default presentation mode for ``format_for_user``.
        mark_incomplete: when true, interrupted streams report the
            ``"incomplete"`` finish reason instead of the last one seen.
    """

    generic_auth: str = GENERIC_AUTH_MODE
    tool_result_style: str = DEFAULT_TOOL_RESULT_STYLE
    mark_incomplete: bool = True

    @property
    def generic_auth_enabled(self) -> bool:
        return self.generic_auth != "disabled"


def _parse_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    return default


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = p.read_text(encoding="utf-8")
    data: Any
    # Try JSON first
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if (val := os.getenv("PROVIDER_BRIDGE_GENERIC_AUTH")) is not None:
        out["generic_auth"] = val.strip().lower()
    if (val := os.getenv("PROVIDER_BRIDGE_TOOL_RESULT_STYLE")) is not None:
        out["tool_result_style"] = val.strip().lower()
    if (val := os.getenv("PROVIDER_BRIDGE_MARK_INCOMPLETE")) is not None:
        out["mark_incomplete"] = val
    return out


def get_bridge_settings() -> BridgeSettings:
    """Return merged bridge settings (cached per process).

    Merge order (later wins): defaults -> external config ``bridge`` section
    -> env vars.
    """
    global _SETTINGS_CACHE
    if _SETTINGS_CACHE is not None:
        return _SETTINGS_CACHE
    base = BridgeSettings()
    cfg: Dict[str, Any] = {
        "generic_auth": base.generic_auth,
        "tool_result_style": base.tool_result_style,
        "mark_incomplete": base.mark_incomplete,
    }
    file_cfg = _load_external_config().get("bridge")
    if isinstance(file_cfg, dict):
        cfg |= {k: v for k, v in file_cfg.items() if k in cfg and v is not None}
    cfg |= _env_overrides()
    _SETTINGS_CACHE = BridgeSettings(
        generic_auth=str(cfg["generic_auth"]).lower(),
        tool_result_style=str(cfg["tool_result_style"]).lower(),
        mark_incomplete=_parse_bool(cfg["mark_incomplete"], base.mark_incomplete),
    )
    return _SETTINGS_CACHE


def get_stored_default(provider: str) -> Optional[str]:
    """Return the stored credential for ``provider`` from the config file.

    Reads ``api.<provider>`` and returns the first of ``api_key``, ``key`` or
    ``token`` that is set. A bare string section is accepted as the key.
    """
    section = _load_external_config().get("api")
    if not isinstance(section, dict):
        return None
    entry = section.get((provider or "").lower().strip())
    if isinstance(entry, str):
        return entry
    if not isinstance(entry, dict):
        return None
    for field in _STORED_KEY_FIELDS:
        val = entry.get(field)
        if val is not None:
            return str(val)
    return None


def reset_config_cache() -> None:
    """Drop cached file contents and settings (tests, config reloads)."""
    global _FILE_CACHE, _SETTINGS_CACHE
    _FILE_CACHE = None
    _SETTINGS_CACHE = None


__all__ = [
    "BridgeSettings",
    "CONFIG_FILE_ENV",
    "get_bridge_settings",
    "get_stored_default",
    "reset_config_cache",
]
