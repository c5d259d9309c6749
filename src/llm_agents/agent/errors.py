"""
Agent-level errors.

Raised when an agent cannot be built from its configuration, or when a call
returns something other than the protocol's response type.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from llm_agents.errors import AgentsError, ErrorContext

if TYPE_CHECKING:
    from llm_agents.config.core import TransportConfig


class AgentErrorType(str, Enum):
    """Where the failure happened."""

    INIT = "init"
    LLM = "llm"


def client_label(config: TransportConfig) -> str:
    """``provider/model`` label for a transport configuration."""
    provider = config.provider.name
    model = config.provider.model.name
    if provider and model:
        return f"{provider}/{model}"
    return provider or model or "unknown"


class AgentError(AgentsError):
    """Failure attributed to an agent.

    Attributes:
        type: init or llm
        id: Unique identifier of this error
        name: Agent name
        code: Optional machine-readable code
        client: ``provider/model`` label
        timestamp: When the error was created (UTC)
    """

    def __init__(
        self,
        type: AgentErrorType,
        message: str,
        *,
        name: str = "",
        code: str = "",
        client: str = "",
        cause: BaseException | None = None,
        id: uuid.UUID | None = None,
    ) -> None:
        self.type = type
        self.id = id or uuid.uuid4()
        self.name = name
        self.code = code
        self.client = client
        self.timestamp = datetime.now(timezone.utc)
        ctx = ErrorContext(source="agent")
        ctx.details["type"] = type.value
        if code:
            ctx.details["code"] = code
        super().__init__(message, ctx)
        self.__cause__ = cause

    def _format_message(self) -> str:
        if self.client and self.name:
            return f"Agent error [{self.client}/{self.name}]: {self.message}"
        if self.name:
            return f"Agent error [{self.name}]: {self.message}"
        return f"Agent error: {self.message}"

    @classmethod
    def init(cls, message: str, **kwargs: Any) -> AgentError:
        """Create an initialization error."""
        return cls(AgentErrorType.INIT, message, **kwargs)

    @classmethod
    def llm(cls, message: str, **kwargs: Any) -> AgentError:
        """Create an error for a failed or unexpected model call."""
        return cls(AgentErrorType.LLM, message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "uuid": str(self.id),
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        for key in ("name", "code", "client"):
            if value := getattr(self, key):
                data[key] = value
        return data
