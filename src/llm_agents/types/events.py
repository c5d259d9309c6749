"""
Streaming chunks decoded from server-sent events.

A chunk mirrors one SSE ``data:`` frame. The ``error`` slot is never
serialized; it carries an in-band failure that ends the stream.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChunkDelta(BaseModel):
    """Incremental message content."""

    model_config = ConfigDict(extra="allow")

    role: str | None = None
    content: str | None = None
    tool_calls: list[dict[str, Any]] | None = None


class StreamChoice(BaseModel):
    """One choice inside a streaming chunk."""

    model_config = ConfigDict(extra="allow")

    index: int = 0
    delta: ChunkDelta = Field(default_factory=ChunkDelta)
    finish_reason: str | None = None


class StreamingChunk(BaseModel):
    """One decoded streaming frame."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str = ""
    choices: list[StreamChoice] = Field(default_factory=list)
    error: BaseException | None = Field(default=None, exclude=True)

    @classmethod
    def from_error(cls, error: BaseException) -> StreamingChunk:
        """Create a terminal chunk carrying an error."""
        return cls(error=error)

    @property
    def content(self) -> str:
        """Delta text of the first choice, empty when absent."""
        if not self.choices:
            return ""
        return self.choices[0].delta.content or ""

    @property
    def finish_reason(self) -> str | None:
        """Finish reason of the first choice."""
        return self.choices[0].finish_reason if self.choices else None
