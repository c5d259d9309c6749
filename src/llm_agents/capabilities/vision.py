"""
Vision capability: embeds images into the last user message.

The ``images`` and ``detail`` options never reach the body root. They are
turned into ``image_url`` content parts appended after the original text of
the last message, which must come from the user.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from llm_agents.capabilities.base import StreamingCapability
from llm_agents.errors import ValidationError
from llm_agents.types.message import ContentPart, Message, MessageRole
from llm_agents.types.protocol import Protocol, extract_option
from llm_agents.types.response import ChatResponse

DEFAULT_DETAIL = "auto"


class VisionCapability(StreamingCapability):
    """Chat completions over text plus images."""

    protocol = Protocol.VISION
    response_type = ChatResponse

    def validate(self, options: Mapping[str, Any], *, partial: bool = False) -> None:
        super().validate(options, partial=partial)
        if "images" in options:
            images = options["images"]
            if not isinstance(images, list | tuple) or not images:
                raise ValidationError(
                    f"capability '{self.name}': images must be a non-empty array",
                    field="images",
                    expected="non-empty list of URL or data URI strings",
                    actual=type(images).__name__,
                )
            for image in images:
                if not isinstance(image, str) or not image:
                    raise ValidationError(
                        f"capability '{self.name}': every image must be a URL or data URI string",
                        field="images",
                        actual=repr(image),
                    )
        detail = options.get("detail")
        if detail is not None and not isinstance(detail, str):
            raise ValidationError(
                f"capability '{self.name}': detail must be a string",
                field="detail",
                actual=type(detail).__name__,
            )

    def shape(
        self, messages: list[Message], options: dict[str, Any]
    ) -> tuple[list[Message], dict[str, Any]]:
        if not messages:
            raise ValidationError(
                f"capability '{self.name}': messages cannot be empty for vision requests",
                field="messages",
            )
        last = messages[-1]
        if last.role != MessageRole.USER.value:
            raise ValidationError(
                f"capability '{self.name}': last message must be from user for vision requests",
                field="messages",
                expected=MessageRole.USER.value,
                actual=last.role,
            )

        images: list[str] = list(options.pop("images", None) or [])
        detail = extract_option(options, "detail", DEFAULT_DETAIL)
        options.pop("detail", None)
        if not images:
            raise ValidationError(
                f"capability '{self.name}': images must be a non-empty array",
                field="images",
            )

        if isinstance(last.content, str):
            parts = [ContentPart.text_part(last.content)]
        else:
            parts = [part.model_copy() for part in last.content]
        parts.extend(ContentPart.image_part(url, detail) for url in images)

        shaped = list(messages[:-1])
        shaped.append(Message(role=last.role, content=parts))
        return shaped, options
