"""
Protocol-level and client-level request records.

A ProtocolRequest is what a capability emits: the conversation plus the
processed options, which serialize at the root of the JSON body. A
ClientRequest is what the Agent hands to the transport client.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from llm_agents.types.message import Message
from llm_agents.types.protocol import Protocol

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


@dataclass
class ProtocolRequest:
    """A request body shaped by a capability.

    Attributes:
        protocol: Protocol the body is for
        messages: Conversation turns (unused for embeddings)
        options: Processed options merged at the JSON root
    """

    protocol: Protocol
    messages: list[Message] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> dict[str, str]:
        """Headers every protocol request carries."""
        return dict(JSON_HEADERS)

    @property
    def is_stream(self) -> bool:
        """Whether the body asks for a streamed response."""
        return self.options.get("stream") is True

    def to_body(self) -> dict[str, Any]:
        """Build the JSON body.

        Chat, vision and tools bodies carry ``messages``; embeddings bodies
        carry only the options, ``input`` included. Options win on key
        collisions.
        """
        body: dict[str, Any] = {}
        if self.protocol is not Protocol.EMBEDDINGS:
            body["messages"] = [m.to_wire() for m in self.messages]
        body.update(self.options)
        return body

    def marshal(self) -> bytes:
        """Encode the body as UTF-8 JSON."""
        return json.dumps(self.to_body(), default=_json_default).encode("utf-8")


@dataclass
class ClientRequest:
    """A request handed from the Agent to the transport client."""

    protocol: Protocol
    messages: list[Message] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)


def _json_default(value: Any) -> Any:
    """Serialize pydantic models nested in option values."""
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return dump(mode="json", exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
