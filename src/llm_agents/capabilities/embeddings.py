"""
Embeddings capability: vector embeddings for one or more inputs.

The body carries ``input`` at the root and no ``messages``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from llm_agents.capabilities.base import Capability
from llm_agents.errors import ValidationError
from llm_agents.types.protocol import Protocol
from llm_agents.types.response import EmbeddingsResponse


class EmbeddingsCapability(Capability):
    """Embeddings requests; buffered only."""

    protocol = Protocol.EMBEDDINGS
    response_type = EmbeddingsResponse

    def validate(self, options: Mapping[str, Any], *, partial: bool = False) -> None:
        super().validate(options, partial=partial)
        if "input" not in options:
            return
        value = options["input"]
        if isinstance(value, str):
            if not value:
                raise ValidationError(
                    f"capability '{self.name}': input cannot be empty", field="input"
                )
            return
        if (
            not isinstance(value, list | tuple)
            or not value
            or not all(isinstance(item, str) for item in value)
        ):
            raise ValidationError(
                f"capability '{self.name}': input must be a string or a non-empty list of strings",
                field="input",
                actual=type(value).__name__,
            )
