"""DTO describing a tool the model may call.

``parameters`` is a JSON-Schema-like mapping (``type``, ``properties``,
``required``). Structural checks beyond the name live in the converter so
they can report the offending schema path.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolDefinition(BaseModel):
    """Provider-agnostic tool definition.

    Parameters
    ----------
    name:
        Tool name; 1-64 characters from ``[a-zA-Z0-9_-]``.
    description:
        Human-readable description shown to the model.
    parameters:
        JSON-Schema-like mapping describing the arguments. Defaults to an
        empty object schema.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=r"^[a-zA-Z0-9_-]{1,64}$")
    description: str = ""
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value


__all__ = ["ToolDefinition"]
