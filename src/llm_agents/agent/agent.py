"""智能体：面向用户的对话、视觉、工具与嵌入接口。

Agent façade over a transport client.

Each call builds the conversation (system prompt first, when configured),
hands a ClientRequest to the transport client and returns the typed
response or a ChunkStream.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from llm_agents.agent.errors import AgentError, client_label
from llm_agents.config.core import AgentConfig
from llm_agents.config.loader import load_agent_config
from llm_agents.errors import AgentsError
from llm_agents.transport.client import TransportClient
from llm_agents.types.message import Message, MessageRole
from llm_agents.types.protocol import Protocol
from llm_agents.types.request import ClientRequest
from llm_agents.types.response import ChatResponse, EmbeddingsResponse, ToolsResponse
from llm_agents.types.tool import ToolDefinition

if TYPE_CHECKING:
    import httpx

    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.models.model import Model
    from llm_agents.providers.base import Provider
    from llm_agents.providers.registry import ProviderRegistry
    from llm_agents.transport.cancel import CancelToken
    from llm_agents.transport.stream import ChunkStream

R = TypeVar("R")

Prompt = str | Sequence[Message]
ToolLike = ToolDefinition | Mapping[str, Any]


class Agent:
    """User-facing entry point.

    Example:
        >>> config = load_agent_config("agent.yaml")
        >>> async with Agent(config) as agent:
        ...     response = await agent.chat("Hello!")
        ...     print(response.content)
        ...
        ...     async with await agent.chat_stream("Tell me a story") as stream:
        ...         async for chunk in stream:
        ...             print(chunk.content, end="")
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        *,
        client: TransportClient | None = None,
        providers: ProviderRegistry | None = None,
        capabilities: CapabilityRegistry | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create an agent.

        Args:
            config: Agent configuration (defaults to ``AgentConfig.default()``)
            client: Ready-made transport client
            providers: Provider registry used to build the client
            capabilities: Capability registry used to build the model
            http_client: Externally owned HTTP client

        Raises:
            AgentError: If the transport client cannot be built
        """
        self._config = config or AgentConfig.default()
        if client is None:
            try:
                client = TransportClient(
                    self._config.transport,
                    providers=providers,
                    capabilities=capabilities,
                    http_client=http_client,
                )
            except AgentsError as e:
                raise AgentError.init(
                    f"failed to create transport client: {e.message}",
                    name=self._config.name,
                    client=client_label(self._config.transport),
                    cause=e,
                ) from e
        self._client = client

    @classmethod
    def from_config(cls, config: AgentConfig | str | Path, **kwargs: Any) -> Agent:
        """Create an agent from a configuration record or file path."""
        if not isinstance(config, AgentConfig):
            config = load_agent_config(config)
        return cls(config, **kwargs)

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def system_prompt(self) -> str:
        return self._config.system_prompt

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def client(self) -> TransportClient:
        return self._client

    @property
    def provider(self) -> Provider:
        return self._client.provider

    @property
    def model(self) -> Model:
        return self._client.model

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Agent:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _messages(self, prompt: Prompt) -> list[Message]:
        messages: list[Message] = []
        turns = [Message.user(prompt)] if isinstance(prompt, str) else list(prompt)
        if self._config.system_prompt and not (
            turns and turns[0].role == MessageRole.SYSTEM.value
        ):
            messages.append(Message.system(self._config.system_prompt))
        messages.extend(turns)
        return messages

    def _request(
        self,
        protocol: Protocol,
        prompt: Prompt | None,
        base: Mapping[str, Any] | None,
        options: Mapping[str, Any] | None,
    ) -> ClientRequest:
        merged = dict(base or {})
        if options:
            merged.update(options)
        messages = self._messages(prompt) if prompt is not None else []
        return ClientRequest(protocol=protocol, messages=messages, options=merged)

    def _expect(self, result: Any, expected: type[R]) -> R:
        if not isinstance(result, expected):
            raise AgentError.llm(
                f"unexpected response type {type(result).__name__}, expected {expected.__name__}",
                name=self._config.name,
                client=client_label(self._config.transport),
            )
        return result

    async def chat(
        self,
        prompt: Prompt,
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ChatResponse:
        """Send a chat request.

        Args:
            prompt: User text, or a full list of messages
            options: Per-call options overlaid on the model defaults
            token: Optional cancel token
        """
        request = self._request(Protocol.CHAT, prompt, None, options)
        return self._expect(await self._client.execute(request, token=token), ChatResponse)

    async def chat_stream(
        self,
        prompt: Prompt,
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ChunkStream:
        """Stream a chat response."""
        request = self._request(Protocol.CHAT, prompt, None, options)
        return await self._client.execute_stream(request, token=token)

    async def vision(
        self,
        prompt: Prompt,
        images: Sequence[str],
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ChatResponse:
        """Ask about one or more images (URLs or data URIs)."""
        request = self._request(Protocol.VISION, prompt, {"images": list(images)}, options)
        return self._expect(await self._client.execute(request, token=token), ChatResponse)

    async def vision_stream(
        self,
        prompt: Prompt,
        images: Sequence[str],
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ChunkStream:
        """Stream an answer about one or more images."""
        request = self._request(Protocol.VISION, prompt, {"images": list(images)}, options)
        return await self._client.execute_stream(request, token=token)

    async def tools(
        self,
        prompt: Prompt,
        tools: Sequence[ToolLike],
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ToolsResponse:
        """Offer tools to the model; the response may carry tool calls.

        The tools are not executed here.
        """
        request = self._request(Protocol.TOOLS, prompt, {"tools": list(tools)}, options)
        return self._expect(await self._client.execute(request, token=token), ToolsResponse)

    async def tools_stream(
        self,
        prompt: Prompt,
        tools: Sequence[ToolLike],
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> ChunkStream:
        """Stream a tools response."""
        request = self._request(Protocol.TOOLS, prompt, {"tools": list(tools)}, options)
        return await self._client.execute_stream(request, token=token)

    async def embed(
        self,
        input: str | Sequence[str],
        options: Mapping[str, Any] | None = None,
        *,
        token: CancelToken | None = None,
    ) -> EmbeddingsResponse:
        """Embed one string or a batch of strings."""
        value = input if isinstance(input, str) else list(input)
        request = self._request(Protocol.EMBEDDINGS, None, {"input": value}, options)
        return self._expect(
            await self._client.execute(request, token=token), EmbeddingsResponse
        )

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, client={client_label(self._config.transport)!r})"
