"""
Built-in capability formats.

``o-chat`` and ``o-vision`` target reasoning models: they take
``max_completion_tokens`` instead of ``max_tokens`` and add
``reasoning_effort``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llm_agents.capabilities.base import OptionDescriptor
from llm_agents.capabilities.chat import ChatCapability
from llm_agents.capabilities.embeddings import EmbeddingsCapability
from llm_agents.capabilities.tools import ToolsCapability
from llm_agents.capabilities.vision import VisionCapability

if TYPE_CHECKING:
    from llm_agents.capabilities.registry import CapabilityRegistry

CHAT_OPTIONS = (
    OptionDescriptor("max_tokens", default=4096),
    OptionDescriptor("temperature", default=0.7),
    OptionDescriptor("top_p"),
    OptionDescriptor("frequency_penalty"),
    OptionDescriptor("presence_penalty"),
    OptionDescriptor("stop"),
    OptionDescriptor("stream"),
)

VISION_OPTIONS = (
    OptionDescriptor("images", required=True),
    OptionDescriptor("max_tokens", default=4096),
    OptionDescriptor("temperature", default=0.7),
    OptionDescriptor("detail", default="auto"),
    OptionDescriptor("stream"),
)

TOOLS_OPTIONS = (
    OptionDescriptor("tools", required=True),
    OptionDescriptor("tool_choice", default="auto"),
    OptionDescriptor("max_tokens", default=4096),
    OptionDescriptor("temperature", default=0.7),
    OptionDescriptor("stream"),
)

EMBEDDINGS_OPTIONS = (
    OptionDescriptor("input", required=True),
    OptionDescriptor("dimensions"),
    OptionDescriptor("encoding_format", default="float"),
)

O_CHAT_OPTIONS = (
    OptionDescriptor("max_completion_tokens", default=4096),
    OptionDescriptor("reasoning_effort", default="medium"),
    OptionDescriptor("stream"),
)

O_VISION_OPTIONS = (
    OptionDescriptor("max_completion_tokens", default=4096),
    OptionDescriptor("images", required=True),
    OptionDescriptor("detail", default="auto"),
    OptionDescriptor("reasoning_effort", default="medium"),
    OptionDescriptor("stream"),
)


def register_builtin_formats(registry: CapabilityRegistry) -> CapabilityRegistry:
    """Register chat, vision, tools, embeddings, o-chat and o-vision."""
    registry.register("chat", lambda: ChatCapability("chat", CHAT_OPTIONS))
    registry.register("vision", lambda: VisionCapability("vision", VISION_OPTIONS))
    registry.register("tools", lambda: ToolsCapability("tools", TOOLS_OPTIONS))
    registry.register(
        "embeddings", lambda: EmbeddingsCapability("embeddings", EMBEDDINGS_OPTIONS)
    )
    registry.register("o-chat", lambda: ChatCapability("o-chat", O_CHAT_OPTIONS))
    registry.register("o-vision", lambda: VisionCapability("o-vision", O_VISION_OPTIONS))
    return registry
