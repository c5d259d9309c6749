"""面向多家模型服务的统一智能体客户端。

llm-agents: provider-agnostic LLM client.

Chat, vision, tool calling and embeddings against Ollama and Azure OpenAI
through one agent interface, with capability-driven request building,
retries, health tracking and cancellable streaming.
"""
from __future__ import annotations

from llm_agents.agent import Agent, AgentError, AgentErrorType
from llm_agents.config import AgentConfig, load_agent_config
from llm_agents.errors import (
    AgentsError,
    ConfigError,
    DecodeError,
    RemoteError,
    RequestCancelledError,
    TransportError,
    UnsupportedError,
    ValidationError,
)
from llm_agents.transport import CancelToken, ChunkStream, TransportClient
from llm_agents.types.events import StreamingChunk
from llm_agents.types.message import ContentPart, Message, MessageRole
from llm_agents.types.protocol import Protocol
from llm_agents.types.response import ChatResponse, EmbeddingsResponse, ToolsResponse
from llm_agents.types.tool import ToolCall, ToolDefinition

__version__ = "0.1.0"

__all__ = [
    # Agent
    "Agent",
    "AgentConfig",
    "AgentError",
    "AgentErrorType",
    # Errors
    "AgentsError",
    "CancelToken",
    "ChatResponse",
    "ChunkStream",
    "ConfigError",
    "ContentPart",
    "DecodeError",
    "EmbeddingsResponse",
    # Types
    "Message",
    "MessageRole",
    "Protocol",
    "RemoteError",
    "RequestCancelledError",
    "StreamingChunk",
    "ToolCall",
    "ToolDefinition",
    "ToolsResponse",
    "TransportClient",
    "TransportError",
    "UnsupportedError",
    "ValidationError",
    "__version__",
    "load_agent_config",
]
