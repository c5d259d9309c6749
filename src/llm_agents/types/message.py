"""
Conversation messages and multimodal content parts.

Content is either a plain string or an ordered list of typed parts in the
OpenAI-compatible shape:

- ``{"type": "text", "text": ...}``
- ``{"type": "image_url", "image_url": {"url": ..., "detail": ...}}``
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ImageURL(BaseModel):
    """Image reference embedded in an ``image_url`` content part."""

    url: str = Field(description="HTTP(S) URL or data URI")
    detail: str | None = Field(default=None, description="Detail level: auto, low or high")


class ContentPart(BaseModel):
    """One typed part of a multimodal message."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Part type: 'text' or 'image_url'")
    text: str | None = Field(default=None, description="Text content")
    image_url: ImageURL | None = Field(default=None, description="Image reference")

    @classmethod
    def text_part(cls, text: str) -> ContentPart:
        """Create a text part."""
        return cls(type="text", text=text)

    @classmethod
    def image_part(cls, url: str, detail: str | None = None) -> ContentPart:
        """Create an image part from a URL or data URI."""
        return cls(type="image_url", image_url=ImageURL(url=url, detail=detail))


MessageContent = str | list[ContentPart]


class Message(BaseModel):
    """A single conversation turn.

    Examples:
        >>> Message.user("Hello!")
        >>> Message.system("You are a helpful assistant.")
    """

    model_config = ConfigDict(use_enum_values=True)

    role: MessageRole = Field(description="Message role")
    content: MessageContent = Field(description="Message content (text or content parts)")

    @classmethod
    def system(cls, text: str) -> Message:
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=text)

    @classmethod
    def user(cls, text: str) -> Message:
        """Create a user message."""
        return cls(role=MessageRole.USER, content=text)

    @classmethod
    def assistant(cls, text: str) -> Message:
        """Create an assistant message."""
        return cls(role=MessageRole.ASSISTANT, content=text)

    def is_multimodal(self) -> bool:
        """Check whether the content is a list of parts."""
        return not isinstance(self.content, str)

    def get_text_content(self) -> str:
        """Extract text content from the message.

        Returns:
            The string content directly, or the text parts joined by newlines.
        """
        if isinstance(self.content, str):
            return self.content
        return "\n".join(part.text for part in self.content if part.type == "text" and part.text)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON shape sent upstream."""
        return self.model_dump(mode="json", exclude_none=True)
