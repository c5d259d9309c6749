"""协议枚举：定义聊天、视觉、工具与嵌入四种交互协议。

Protocol enumeration and option helpers.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class Protocol(str, Enum):
    """A category of model interaction.

    The set is closed: every capability, handler and provider endpoint is
    keyed by one of these values.
    """

    CHAT = "chat"
    VISION = "vision"
    TOOLS = "tools"
    EMBEDDINGS = "embeddings"

    @property
    def supports_streaming(self) -> bool:
        """Whether responses for this protocol can be streamed over SSE."""
        return self is not Protocol.EMBEDDINGS

    @classmethod
    def is_valid(cls, name: str) -> bool:
        """Check whether a name is one of the known protocols."""
        return name in cls._value2member_map_

    @classmethod
    def names(cls) -> str:
        """Comma separated list of protocol names, in declaration order."""
        return ", ".join(p.value for p in cls)

    @classmethod
    def parse(cls, name: str | Protocol) -> Protocol:
        """Resolve a protocol from its name.

        Args:
            name: Protocol name or Protocol value

        Returns:
            The matching Protocol

        Raises:
            UnsupportedError: If the name is not a known protocol
        """
        if isinstance(name, Protocol):
            return name
        if not cls.is_valid(name):
            from llm_agents.errors import UnsupportedError

            raise UnsupportedError(
                f"invalid protocol '{name}', valid protocols: {cls.names()}",
                name=name,
            )
        return cls(name)


def extract_option(options: dict[str, Any] | None, key: str, default: T) -> T:
    """Read a typed value from an options mapping.

    The stored value is returned only when it has the same type as
    ``default``; otherwise ``default`` is returned.

    Example:
        >>> extract_option({"temperature": 0.2}, "temperature", 0.7)
        0.2
        >>> extract_option({"temperature": "hot"}, "temperature", 0.7)
        0.7
    """
    if not options or key not in options:
        return default
    value = options[key]
    if default is None or isinstance(value, type(default)):
        return value
    return default
