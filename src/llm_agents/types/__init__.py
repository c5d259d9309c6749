"""
Wire types: protocols, messages, requests, responses, streaming chunks and tools.
"""

from llm_agents.types.events import ChunkDelta, StreamChoice, StreamingChunk
from llm_agents.types.message import ContentPart, ImageURL, Message, MessageContent, MessageRole
from llm_agents.types.protocol import Protocol, extract_option
from llm_agents.types.request import ClientRequest, ProtocolRequest
from llm_agents.types.response import (
    ChatResponse,
    Choice,
    EmbeddingData,
    EmbeddingsResponse,
    ResponseMessage,
    TokenUsage,
    ToolsResponse,
)
from llm_agents.types.tool import ToolCall, ToolCallFunction, ToolDefinition

__all__ = [
    # Protocol
    "Protocol",
    "extract_option",
    # Messages
    "ContentPart",
    "ImageURL",
    "Message",
    "MessageContent",
    "MessageRole",
    # Requests
    "ClientRequest",
    "ProtocolRequest",
    # Responses
    "ChatResponse",
    "Choice",
    "EmbeddingData",
    "EmbeddingsResponse",
    "ResponseMessage",
    "TokenUsage",
    "ToolsResponse",
    # Streaming
    "ChunkDelta",
    "StreamChoice",
    "StreamingChunk",
    # Tools
    "ToolCall",
    "ToolCallFunction",
    "ToolDefinition",
]
