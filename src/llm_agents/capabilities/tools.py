"""
Tools capability: function calling.

Tool definitions may be given as ToolDefinition instances, as plain
``{name, description, parameters}`` dicts, or already wrapped in the
``{"type": "function", "function": {...}}`` form. They are emitted wrapped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from llm_agents.capabilities.base import StreamingCapability
from llm_agents.errors import ValidationError
from llm_agents.types.message import Message
from llm_agents.types.protocol import Protocol
from llm_agents.types.response import ToolsResponse
from llm_agents.types.tool import ToolDefinition


class ToolsCapability(StreamingCapability):
    """Chat completions that may answer with tool calls."""

    protocol = Protocol.TOOLS
    response_type = ToolsResponse

    def validate(self, options: Mapping[str, Any], *, partial: bool = False) -> None:
        super().validate(options, partial=partial)
        if "tools" in options:
            self.to_definitions(options["tools"])

    def to_definitions(self, tools: Any) -> list[ToolDefinition]:
        """Normalize tool entries into ToolDefinition instances.

        Raises:
            ValidationError: If tools is empty or an entry is malformed
        """
        if not isinstance(tools, list | tuple) or not tools:
            raise ValidationError(
                f"capability '{self.name}': tools must be a non-empty array of function definitions",
                field="tools",
                actual=type(tools).__name__,
            )
        definitions: list[ToolDefinition] = []
        for index, tool in enumerate(tools):
            if isinstance(tool, ToolDefinition):
                definitions.append(tool)
                continue
            if not isinstance(tool, Mapping):
                raise ValidationError(
                    f"capability '{self.name}': tool {index} must be a function definition",
                    field=f"tools[{index}]",
                    actual=type(tool).__name__,
                )
            spec = tool.get("function") if tool.get("type") == "function" else tool
            try:
                definitions.append(ToolDefinition.model_validate(spec))
            except PydanticValidationError as exc:
                raise ValidationError(
                    f"capability '{self.name}': tool {index} is not a valid function definition",
                    field=f"tools[{index}]",
                ) from exc
        return definitions

    def shape(
        self, messages: list[Message], options: dict[str, Any]
    ) -> tuple[list[Message], dict[str, Any]]:
        options["tools"] = [d.to_wire() for d in self.to_definitions(options.get("tools"))]
        return messages, options
