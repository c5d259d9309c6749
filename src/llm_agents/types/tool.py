"""
Tool types for function calling.

The pipeline only surfaces tool-call requests made by the model; running the
tools is up to the caller.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    """A function the model may ask to call.

    Example:
        >>> tool = ToolDefinition(
        ...     name="get_weather",
        ...     description="Get weather for a city",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"city": {"type": "string"}},
        ...         "required": ["city"],
        ...     },
        ... )
    """

    name: str = Field(min_length=1, description="Function name")
    description: str = Field(default="", description="Function description")
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for parameters",
    )

    def to_wire(self) -> dict[str, Any]:
        """Wrap as an OpenAI-compatible ``{"type": "function", ...}`` entry."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolCallFunction(BaseModel):
    """Function name and JSON-encoded arguments of a tool call."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Function name")
    arguments: str = Field(default="", description="JSON encoded arguments")


class ToolCall(BaseModel):
    """A request from the model to invoke a tool."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(default="", description="Tool call identifier")
    type: str = Field(default="function", description="Tool type")
    function: ToolCallFunction = Field(default_factory=ToolCallFunction)

    @property
    def name(self) -> str:
        """Name of the function to call."""
        return self.function.name

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode the JSON arguments string.

        Returns:
            Decoded arguments, empty when no arguments were sent

        Raises:
            DecodeError: If the arguments are not a JSON object
        """
        from llm_agents.errors import DecodeError

        if not self.function.arguments:
            return {}
        try:
            parsed = json.loads(self.function.arguments)
        except json.JSONDecodeError as exc:
            raise DecodeError(
                f"invalid arguments for tool call '{self.name}': {exc}",
                cause=exc,
            ) from exc
        if not isinstance(parsed, dict):
            raise DecodeError(f"arguments for tool call '{self.name}' must be a JSON object")
        return parsed
