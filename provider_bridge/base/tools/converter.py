"""
Tool definition conversion into provider schema dialects.

Purpose
-------
Translate provider-agnostic tool definitions into the descriptor shape each
provider expects:

- ``openai_function``: ``{"type": "function", "function": {name, description, parameters}}``
- ``anthropic_tool``: ``{name, description, input_schema}``
- ``gemini_declaration``: ``{name, description, parameters}`` (function declaration)

Design
------
- Schemas are validated, then copied verbatim. Nothing is rewritten: a
  construct the target dialect cannot express raises ``ConversionError`` with
  the tool name and schema path instead of being dropped or approximated.
- Gemini declarations accept an OpenAPI subset; references, combinators other
  than ``anyOf``, constants, open-ended property maps and type unions are
  rejected.

Failure Modes
-------------
- ``ConversionError(reason="tool_conversion_error")`` for invalid definitions,
  non-object top-level schemas, unknown types, ``required`` entries naming
  missing properties, non-mapping property schemas, and dialect gaps.
"""
from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, NoReturn, Optional, Union

from pydantic import ValidationError

from ..dto.tool_definition import ToolDefinition
from ..errors import ConversionError
from ..logging import get_logger, log_event
from .schema_format import ToolSchemaFormat

_logger = get_logger("provider_bridge.tools")

JSON_SCHEMA_TYPES = frozenset(
    {"object", "array", "string", "number", "integer", "boolean", "null"}
)
GEMINI_UNSUPPORTED_KEYWORDS = (
    "$ref",
    "$defs",
    "definitions",
    "oneOf",
    "allOf",
    "not",
    "patternProperties",
    "additionalProperties",
    "const",
)
_SUBSCHEMA_LISTS = ("anyOf", "oneOf", "allOf")

ToolInput = Union[ToolDefinition, Mapping[str, Any], Any]


def _fail(
    message: str, tool: Optional[str], path: str, fmt: Optional[ToolSchemaFormat]
) -> NoReturn:
    log_event(
        _logger,
        "tools.conversion_failed",
        level=logging.WARNING,
        tool=tool,
        path=path,
        target_format=fmt.value if fmt else None,
        detail=message,
    )
    raise ConversionError(
        message=message,
        tool=tool,
        path=path,
        details={"tool": tool, "path": path, "target_format": fmt.value if fmt else None},
    )


def _validation_summary(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'definition'}: {err['msg']}"
        for err in exc.errors()
    )


class ToolConverter:
    """Validate tool definitions and render them for a target dialect."""

    def coerce(self, raw: ToolInput, fmt: ToolSchemaFormat) -> ToolDefinition:
        """Build a :class:`ToolDefinition` from a supported input shape.

        Accepts ``ToolDefinition`` instances, mappings (bare or wrapped in an
        OpenAI ``{"type": "function", "function": {...}}`` envelope), and
        objects exposing ``tool_name`` / ``tool_description`` /
        ``tool_parameters``.
        """
        if isinstance(raw, ToolDefinition):
            return raw
        if isinstance(raw, Mapping):
            inner = raw.get("function")
            data = dict(inner) if isinstance(inner, Mapping) else dict(raw)
            if "parameters" not in data and "input_schema" in data:
                data["parameters"] = data.pop("input_schema")
            data.pop("type", None)
            name = data.get("name") if isinstance(data.get("name"), str) else None
        elif hasattr(raw, "tool_name"):
            name = getattr(raw, "tool_name", None)
            data = {
                "name": name,
                "description": getattr(raw, "tool_description", None),
                "parameters": getattr(raw, "tool_parameters", None)
                or {"type": "object", "properties": {}},
            }
        else:
            _fail(f"unsupported tool definition type {type(raw).__name__}", None, "", fmt)
        try:
            return ToolDefinition.model_validate(data)
        except ValidationError as exc:
            _fail(f"invalid tool definition: {_validation_summary(exc)}", name, "", fmt)

    def _check_type(self, node: Mapping[str, Any], tool: str, path: str, fmt: ToolSchemaFormat) -> None:
        kind = node.get("type")
        if kind is None:
            return
        if isinstance(kind, list):
            if fmt is ToolSchemaFormat.GEMINI_DECLARATION:
                _fail("type unions are not representable", tool, f"{path}/type", fmt)
            members = kind
        else:
            members = [kind]
        for member in members:
            if member not in JSON_SCHEMA_TYPES:
                _fail(f"unknown schema type {member!r}", tool, f"{path}/type", fmt)

    def _check_node(self, node: Any, tool: str, path: str, fmt: ToolSchemaFormat) -> None:
        if not isinstance(node, Mapping):
            _fail("schema node must be an object", tool, path or "/", fmt)
        self._check_type(node, tool, path, fmt)
        if fmt is ToolSchemaFormat.GEMINI_DECLARATION:
            for keyword in GEMINI_UNSUPPORTED_KEYWORDS:
                if keyword in node:
                    _fail(f"'{keyword}' is not supported by {fmt.value}", tool, f"{path}/{keyword}", fmt)
        properties = node.get("properties")
        if properties is not None:
            if not isinstance(properties, Mapping):
                _fail("'properties' must be an object", tool, f"{path}/properties", fmt)
            for prop_name, prop_schema in properties.items():
                self._check_node(prop_schema, tool, f"{path}/properties/{prop_name}", fmt)
        required = node.get("required")
        if required is not None:
            if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
                _fail("'required' must be a list of names", tool, f"{path}/required", fmt)
            known = properties or {}
            for name in required:
                if name not in known:
                    _fail(f"required property {name!r} is not defined", tool, f"{path}/required", fmt)
        items = node.get("items")
        if isinstance(items, list):
            for idx, item in enumerate(items):
                self._check_node(item, tool, f"{path}/items/{idx}", fmt)
        elif items is not None:
            self._check_node(items, tool, f"{path}/items", fmt)
        for keyword in _SUBSCHEMA_LISTS:
            variants = node.get(keyword)
            if variants is None:
                continue
            if not isinstance(variants, list):
                _fail(f"'{keyword}' must be a list", tool, f"{path}/{keyword}", fmt)
            for idx, variant in enumerate(variants):
                self._check_node(variant, tool, f"{path}/{keyword}/{idx}", fmt)

    def validate_schema(self, definition: ToolDefinition, fmt: ToolSchemaFormat) -> Dict[str, Any]:
        """Check ``definition.parameters`` for ``fmt`` and return a deep copy."""
        schema = definition.parameters or {"type": "object", "properties": {}}
        kind = schema.get("type")
        if kind is None and "properties" not in schema and schema:
            _fail("top-level schema must be an object", definition.name, "/type", fmt)
        if kind is not None and kind != "object":
            _fail("top-level schema must be an object", definition.name, "/type", fmt)
        self._check_node(schema, definition.name, "", fmt)
        out = copy.deepcopy(dict(schema))
        out.setdefault("type", "object")
        out.setdefault("properties", {})
        return out

    def render(self, definition: ToolDefinition, schema: Dict[str, Any], fmt: ToolSchemaFormat) -> Dict[str, Any]:
        if fmt is ToolSchemaFormat.OPENAI_FUNCTION:
            return {
                "type": "function",
                "function": {
                    "name": definition.name,
                    "description": definition.description,
                    "parameters": schema,
                },
            }
        if fmt is ToolSchemaFormat.ANTHROPIC_TOOL:
            return {
                "name": definition.name,
                "description": definition.description,
                "input_schema": schema,
            }
        return {
            "name": definition.name,
            "description": definition.description,
            "parameters": schema,
        }

    def convert(
        self,
        tool_definitions: Iterable[ToolInput],
        target_format: Union[ToolSchemaFormat, str] = ToolSchemaFormat.OPENAI_FUNCTION,
    ) -> List[Dict[str, Any]]:
        """Convert every definition or raise on the first unrepresentable one."""
        try:
            fmt = ToolSchemaFormat(target_format)
        except ValueError:
            _fail(f"unknown target format {target_format!r}", None, "", None)
        out: List[Dict[str, Any]] = []
        for raw in tool_definitions or ():
            definition = self.coerce(raw, fmt)
            schema = self.validate_schema(definition, fmt)
            out.append(self.render(definition, schema, fmt))
        log_event(_logger, "tools.converted", count=len(out), target_format=fmt.value)
        return out


__all__ = [
    "GEMINI_UNSUPPORTED_KEYWORDS",
    "JSON_SCHEMA_TYPES",
    "ToolConverter",
]
