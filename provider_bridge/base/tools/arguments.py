"""
Schema-driven coercion of model-supplied tool arguments.

Models frequently emit scalars as strings (``"5"`` for an integer, ``"true"``
for a boolean). ``coerce_arguments`` walks the decoded arguments against the
tool's JSON-Schema parameters and converts them to the declared types before
the handler runs.

Rules
-----
- ``string``: strings verbatim; numbers and booleans rendered as text.
- ``integer``: ints; integral floats; strings parsing as a whole integer.
  Booleans are rejected.
- ``number``: ints and floats; strings parsing as a float.
- ``boolean``: bools; ``"true"``/``"false"``/``"1"``/``"0"``; ``1``/``0``.
- ``array`` / ``object``: walked recursively through ``items`` and
  ``properties``.
- ``enum`` is checked after coercion.
- Missing properties take their ``default``; ``null`` for an optional
  property counts as missing. Unknown properties pass through unless
  ``additionalProperties`` is ``false``.

Failures raise :class:`ParameterError` carrying the argument path.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Dict, Optional

from ..errors import ParameterError

_TRUE = ("true", "1")
_FALSE = ("false", "0")


def _fail(message: str, path: str, tool: Optional[str]) -> None:
    raise ParameterError(
        message=message,
        path=path or "/",
        details={"tool": tool, "path": path or "/"},
    )


def _as_string(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"expected string, got {type(value).__name__}")


def _as_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected integer, got boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"expected integer, got {value!r}")


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("expected number, got boolean")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return float(value.strip())
    raise ValueError(f"expected number, got {value!r}")


def _as_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE + _FALSE:
        return value.strip().lower() in _TRUE
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise ValueError(f"expected boolean, got {value!r}")


def _as_null(value: Any) -> None:
    if value is not None:
        raise ValueError(f"expected null, got {value!r}")
    return None


_SCALARS = {
    "string": _as_string,
    "integer": _as_integer,
    "number": _as_number,
    "boolean": _as_boolean,
    "null": _as_null,
}


class _Coercer:
    def __init__(self, tool: Optional[str]) -> None:
        self.tool = tool

    def value(self, value: Any, node: Any, path: str) -> Any:
        if not isinstance(node, Mapping):
            return value
        kind = node.get("type")
        if isinstance(kind, list):
            out = self._first_fit(value, node, kind, path)
        elif kind is not None:
            out = self._typed(value, node, kind, path)
        else:
            out = value
        enum = node.get("enum")
        if isinstance(enum, list) and out not in enum:
            _fail(f"{out!r} is not one of {enum!r}", path, self.tool)
        return out

    def _first_fit(self, value: Any, node: Mapping, kinds: list, path: str) -> Any:
        last: Optional[ParameterError] = None
        for kind in kinds:
            try:
                return self._typed(value, node, kind, path)
            except ParameterError as exc:
                last = exc
        if last is None:
            return value
        raise last

    def _typed(self, value: Any, node: Mapping, kind: str, path: str) -> Any:
        if kind == "object":
            return self.object(value, node, path)
        if kind == "array":
            if not isinstance(value, (list, tuple)):
                _fail(f"expected array, got {type(value).__name__}", path, self.tool)
            items = node.get("items")
            if isinstance(items, list):
                return [
                    self.value(item, items[i] if i < len(items) else None, f"{path}/{i}")
                    for i, item in enumerate(value)
                ]
            return [self.value(item, items, f"{path}/{i}") for i, item in enumerate(value)]
        convert = _SCALARS.get(kind)
        if convert is None:
            return value
        try:
            return convert(value)
        except ValueError as exc:
            _fail(str(exc), path, self.tool)

    def object(self, value: Any, node: Mapping, path: str) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            _fail(f"expected object, got {type(value).__name__}", path, self.tool)
        properties = node.get("properties") or {}
        required = node.get("required") or ()
        extra = node.get("additionalProperties")
        out: Dict[str, Any] = {}
        for key, item in value.items():
            sub_path = f"{path}/{key}"
            if key in properties:
                if item is None and key not in required and not _allows_null(properties[key]):
                    continue
                out[key] = self.value(item, properties[key], sub_path)
            elif extra is False:
                _fail(f"unknown parameter {key!r}", sub_path, self.tool)
            else:
                out[key] = self.value(item, extra, sub_path)
        for key, sub in properties.items():
            if key not in out and isinstance(sub, Mapping) and "default" in sub:
                out[key] = copy.deepcopy(sub["default"])
        for key in required:
            if key not in out:
                _fail(f"missing required parameter {key!r}", f"{path}/{key}", self.tool)
        return out


def _allows_null(node: Any) -> bool:
    if not isinstance(node, Mapping):
        return True
    kind = node.get("type")
    return kind is None or kind == "null" or (isinstance(kind, list) and "null" in kind)


def coerce_arguments(
    arguments: Mapping[str, Any], schema: Mapping[str, Any], tool: Optional[str] = None
) -> Dict[str, Any]:
    """Return ``arguments`` converted to the types declared by ``schema``.

    Raises:
        ParameterError: an argument cannot be converted, violates its enum,
            is unknown to a closed schema, or a required one is missing.
    """
    return _Coercer(tool).object(arguments, schema, "")


__all__ = ["coerce_arguments"]
