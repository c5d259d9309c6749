"""
Chat capability: plain conversational completions.
"""

from __future__ import annotations

from llm_agents.capabilities.base import StreamingCapability
from llm_agents.types.protocol import Protocol
from llm_agents.types.response import ChatResponse


class ChatCapability(StreamingCapability):
    """Chat completions with options at the body root."""

    protocol = Protocol.CHAT
    response_type = ChatResponse
