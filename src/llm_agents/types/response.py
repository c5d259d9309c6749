"""
Buffered response shapes for the chat, vision, tools and embeddings protocols.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from llm_agents.types.tool import ToolCall


class TokenUsage(BaseModel):
    """Token accounting reported by the upstream service."""

    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ResponseMessage(BaseModel):
    """Assistant message inside a response choice."""

    model_config = ConfigDict(extra="allow")

    role: str = "assistant"
    content: Any = None
    tool_calls: list[ToolCall] = Field(default_factory=list)

    def text(self) -> str:
        """Render the content as text.

        Structured content keeps the text of its text parts; any other
        non-string value is rendered as JSON.
        """
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        if isinstance(self.content, list):
            texts = [
                part.get("text", "")
                for part in self.content
                if isinstance(part, dict) and part.get("type") == "text"
            ]
            if texts:
                return "".join(texts)
        return json.dumps(self.content)


class Choice(BaseModel):
    """One completion choice."""

    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: ResponseMessage = Field(default_factory=ResponseMessage)
    finish_reason: str | None = None


class ChatResponse(BaseModel):
    """Response for the chat and vision protocols."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: TokenUsage | None = None

    @property
    def content(self) -> str:
        """Text of the first choice, empty when there are no choices."""
        if not self.choices:
            return ""
        return self.choices[0].message.text()

    @property
    def finish_reason(self) -> str | None:
        """Finish reason of the first choice."""
        return self.choices[0].finish_reason if self.choices else None


class ToolsResponse(ChatResponse):
    """Response for the tools protocol."""

    @property
    def tool_calls(self) -> list[ToolCall]:
        """Tool calls requested in the first choice."""
        if not self.choices:
            return []
        return self.choices[0].message.tool_calls


class EmbeddingData(BaseModel):
    """One embedding vector."""

    model_config = ConfigDict(extra="allow")

    embedding: list[float] = Field(default_factory=list)
    index: int = 0
    object: str = "embedding"


class EmbeddingsResponse(BaseModel):
    """Response for the embeddings protocol."""

    model_config = ConfigDict(extra="allow")

    object: str = "list"
    data: list[EmbeddingData] = Field(default_factory=list)
    model: str = ""
    usage: TokenUsage | None = None

    @property
    def vectors(self) -> list[list[float]]:
        """Embedding vectors ordered by their index."""
        return [item.embedding for item in sorted(self.data, key=lambda d: d.index)]
