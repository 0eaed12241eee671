"""
Tool-choice mapping.

Unrecognized tool-choice values are not an error: they degrade to ``"auto"``
with a warning log and an increment of the ``tool_choice_fallbacks`` counter.
Genuine schema conversion failures are handled by the converter and are never
routed through this fallback.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from ..logging import get_logger, log_event
from ..metrics import TOOL_CHOICE_FALLBACKS, fallback_counters
from .schema_format import ToolSchemaFormat

_logger = get_logger("provider_bridge.tools.choice")

PASSTHROUGH_CHOICES = ("auto", "none", "required")

# Selector ``type`` values understood by at least one provider dialect.
TYPED_CHOICES = PASSTHROUGH_CHOICES + ("function", "tool", "any")

ToolChoice = Union[str, Dict[str, Any]]


def _function_selector(name: str) -> Dict[str, Any]:
    return {"type": "function", "function": {"name": name}}


def _canonical(choice: Any) -> Optional[ToolChoice]:
    """Return the OpenAI-shaped choice, or ``None`` when unrecognized."""
    if isinstance(choice, str) and choice in PASSTHROUGH_CHOICES:
        return choice
    if isinstance(choice, tuple) and len(choice) == 2 and choice[0] == "function":
        if isinstance(choice[1], str) and choice[1]:
            return _function_selector(choice[1])
        return None
    if isinstance(choice, Mapping):
        if "type" in choice:
            if choice["type"] not in TYPED_CHOICES:
                return None
            return dict(choice)
        target = choice.get("function", choice.get("name"))
        if isinstance(target, str) and target:
            return _function_selector(target)
    return None


def _fallback(choice: Any) -> str:
    count = fallback_counters().increment(TOOL_CHOICE_FALLBACKS)
    log_event(
        _logger,
        "tool_choice.fallback",
        level=logging.WARNING,
        received=repr(choice)[:200],
        fallback="auto",
        total=count,
    )
    return "auto"


def _for_anthropic(choice: ToolChoice) -> Dict[str, Any]:
    if isinstance(choice, str):
        return {"type": {"required": "any"}.get(choice, choice)}
    function = choice.get("function")
    if choice.get("type") == "function" and isinstance(function, Mapping):
        return {"type": "tool", "name": function.get("name")}
    return choice


def _for_gemini(choice: ToolChoice) -> Dict[str, Any]:
    if isinstance(choice, str):
        mode = {"auto": "AUTO", "none": "NONE", "required": "ANY"}[choice]
        return {"function_calling_config": {"mode": mode}}
    function = choice.get("function")
    if choice.get("type") == "function" and isinstance(function, Mapping):
        return {
            "function_calling_config": {
                "mode": "ANY",
                "allowed_function_names": [function.get("name")],
            }
        }
    return choice


def map_tool_choice(
    choice: Any,
    target_format: Union[ToolSchemaFormat, str] = ToolSchemaFormat.OPENAI_FUNCTION,
) -> Optional[Any]:
    """Map a caller tool choice into the target dialect.

    Recognized inputs: ``"auto"``, ``"none"``, ``"required"``,
    ``{"function": name}``, ``("function", name)`` and mappings already
    carrying a known ``type``. ``None`` means no preference and maps to ``None``.
    """
    if choice is None:
        return None
    canonical = _canonical(choice)
    if canonical is None:
        canonical = _fallback(choice)
    fmt = ToolSchemaFormat(target_format)
    if fmt is ToolSchemaFormat.ANTHROPIC_TOOL:
        return _for_anthropic(canonical)
    if fmt is ToolSchemaFormat.GEMINI_DECLARATION:
        return _for_gemini(canonical)
    return canonical


__all__ = ["PASSTHROUGH_CHOICES", "TYPED_CHOICES", "map_tool_choice"]
