"""能力模块：按协议与格式注册的请求构建器。

Capabilities: per-protocol request recipes and the format registry.
"""

from llm_agents.capabilities.base import (
    Capability,
    OptionDescriptor,
    StreamingCapability,
)
from llm_agents.capabilities.chat import ChatCapability
from llm_agents.capabilities.embeddings import EmbeddingsCapability
from llm_agents.capabilities.formats import register_builtin_formats
from llm_agents.capabilities.registry import (
    CapabilityFactory,
    CapabilityRegistry,
    default_registry,
    get_format,
    list_formats,
    register_format,
)
from llm_agents.capabilities.tools import ToolsCapability
from llm_agents.capabilities.vision import VisionCapability

__all__ = [
    "Capability",
    "CapabilityFactory",
    "CapabilityRegistry",
    "ChatCapability",
    "EmbeddingsCapability",
    "OptionDescriptor",
    "StreamingCapability",
    "ToolsCapability",
    "VisionCapability",
    "default_registry",
    "get_format",
    "list_formats",
    "register_builtin_formats",
    "register_format",
]
