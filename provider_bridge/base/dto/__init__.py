"""Pydantic DTOs for bridge inputs."""

from .tool_definition import ToolDefinition

__all__ = ["ToolDefinition"]
