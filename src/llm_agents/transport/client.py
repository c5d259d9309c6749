"""传输客户端：编排单次请求的完整生命周期。

Transport client.

Runs one request end to end: capability lookup, option merge, body
construction, provider routing and auth, HTTP send, response decoding,
health update and retries. Buffered calls are retried on transient
failures; streaming calls fail fast.
"""

from __future__ import annotations

import uuid
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

import httpx

from llm_agents.errors import AgentsError, RemoteError, TransportError, classify_error
from llm_agents.providers.registry import default_registry as default_providers
from llm_agents.resilience.retry import RetryConfig, RetryPolicy
from llm_agents.telemetry.health import HealthSnapshot, HealthTracker
from llm_agents.telemetry.logger import get_logger, log_context
from llm_agents.transport.cancel import run_cancellable
from llm_agents.transport.pool import PoolConfig
from llm_agents.transport.stream import ChunkStream

if TYPE_CHECKING:
    from llm_agents.capabilities.base import Capability
    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.config.core import TransportConfig
    from llm_agents.models.model import Model
    from llm_agents.providers.base import Provider, ProviderRequest
    from llm_agents.providers.registry import ProviderRegistry
    from llm_agents.transport.cancel import CancelToken
    from llm_agents.types.request import ClientRequest

logger = get_logger("llm_agents.transport")

_UA_VERSION: str | None = None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        try:
            _UA_VERSION = version("llm-agents")
        except PackageNotFoundError:
            _UA_VERSION = "0.0.0"
    return _UA_VERSION


class TransportClient:
    """Executes requests against one provider and model.

    The client is safe to share between concurrent tasks. The pooled
    ``httpx.AsyncClient`` is created on first use.

    Example:
        >>> client = TransportClient(TransportConfig(provider=provider_config))
        >>> response = await client.execute(
        ...     ClientRequest(Protocol.CHAT, [Message.user("hi")], {"temperature": 0.2})
        ... )
        >>> response.content
    """

    def __init__(
        self,
        config: TransportConfig,
        *,
        provider: Provider | None = None,
        providers: ProviderRegistry | None = None,
        capabilities: CapabilityRegistry | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Transport configuration
            provider: Ready-made provider; built from ``config.provider`` when omitted
            providers: Provider registry used to build the provider
            capabilities: Capability registry used to build the model
            http_client: Externally owned HTTP client (not closed by ``aclose``)
        """
        self._config = config
        self._provider = provider or (providers or default_providers()).create(
            config.provider, capabilities
        )
        self._pool = PoolConfig.from_transport(config)
        self._retry = RetryPolicy(RetryConfig.from_transport(config))
        self._health = HealthTracker()
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def model(self) -> Model:
        return self._provider.model

    @property
    def health(self) -> HealthSnapshot:
        """Read-only health snapshot."""
        return self._health.snapshot()

    @property
    def is_healthy(self) -> bool:
        return self._health.is_healthy

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = self._pool.create_client()
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> TransportClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _build_http_request(self, prepared: ProviderRequest) -> httpx.Request:
        headers = {"User-Agent": f"llm-agents/{_get_ua_version()}"}
        headers.update(prepared.headers)
        headers.update(self._provider.auth_headers())
        return self._get_client().build_request(
            "POST", prepared.url, headers=headers, content=prepared.body
        )

    async def _send(
        self,
        prepared: ProviderRequest,
        token: CancelToken | None,
        *,
        stream: bool = False,
    ) -> httpx.Response:
        http_request = self._build_http_request(prepared)
        try:
            return await run_cancellable(
                self._get_client().send(http_request, stream=stream), token
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"provider '{self._provider.name}': request to {prepared.url} failed: {e}",
                url=prepared.url,
                cause=e,
            ) from e

    def _record_failure(self, error: AgentsError) -> None:
        if classify_error(error).marks_unhealthy:
            self._health.mark_unhealthy()

    async def _attempt(
        self,
        prepared: ProviderRequest,
        capability: Capability,
        token: CancelToken | None,
    ) -> Any:
        try:
            response = await self._send(prepared, token)
            try:
                result = await self._provider.process_response(response, capability)
            finally:
                await response.aclose()
        except AgentsError as e:
            self._record_failure(e)
            raise
        self._health.mark_healthy()
        return result

    def _log_retry(self, attempt: int, error: Exception, delay: float) -> None:
        fields: dict[str, Any] = {"attempt": attempt, "delay_s": round(delay, 3)}
        if isinstance(error, RemoteError):
            fields["status_code"] = error.status_code
        logger.warning(f"retrying after error: {error}", **fields)

    async def execute(self, request: ClientRequest, *, token: CancelToken | None = None) -> Any:
        """Execute a buffered request.

        Args:
            request: Protocol, messages and per-call options
            token: Optional cancel token

        Returns:
            ChatResponse, ToolsResponse or EmbeddingsResponse

        Raises:
            UnsupportedError: If the model or provider does not serve the protocol
            ValidationError: If the merged options are rejected
            TransportError: If the HTTP exchange fails after all retries
            RemoteError: If the upstream answers with a non-200 status
            DecodeError: If the response body cannot be decoded
            RequestCancelledError: If the token fires
        """
        model = self.model
        capability = model.capability(request.protocol)
        options = model.merge_request_options(request.protocol, request.options)
        capability.validate(options)
        protocol_request = capability.build_request(request.messages, options, model.name)
        prepared = self._provider.prepare_request(request.protocol, protocol_request)

        with log_context(
            request_id=uuid.uuid4().hex[:12],
            provider=self._provider.name,
            model=model.name,
            protocol=request.protocol.value,
        ):
            logger.debug("request started", url=prepared.url)
            result = await self._retry.execute(
                lambda: self._attempt(prepared, capability, token),
                on_retry=self._log_retry,
                token=token,
            )
            if not result.success:
                logger.warning(
                    f"request failed: {result.error}",
                    attempts=result.attempts,
                )
                raise result.error  # type: ignore[misc]
            logger.debug("request completed", attempts=result.attempts)
            return result.value

    async def execute_stream(
        self, request: ClientRequest, *, token: CancelToken | None = None
    ) -> ChunkStream:
        """Start a streaming request.

        Streaming requests are never retried.

        Args:
            request: Protocol, messages and per-call options
            token: Optional cancel token; firing it closes the stream

        Returns:
            ChunkStream yielding StreamingChunk values

        Raises:
            UnsupportedError: If the protocol cannot stream or is unsupported
            ValidationError: If the merged options are rejected
            TransportError: If the request cannot be sent
            RemoteError: If the upstream answers with a non-200 status
            RequestCancelledError: If the token fires before headers arrive
        """
        model = self.model
        capability = model.streaming_capability(request.protocol)
        options = model.merge_request_options(request.protocol, request.options)
        capability.validate(options)
        protocol_request = capability.build_stream_request(request.messages, options, model.name)
        prepared = self._provider.prepare_stream_request(request.protocol, protocol_request)

        protocol = request.protocol.value
        with log_context(provider=self._provider.name, model=model.name, protocol=protocol):
            logger.debug("stream started", url=prepared.url)
            try:
                response = await self._send(prepared, token, stream=True)
                await self._provider.check_stream_response(response)
            except AgentsError as e:
                self._record_failure(e)
                logger.warning(f"stream failed: {e}")
                raise

        def on_finish(healthy: bool, count: int) -> None:
            self._health.set(healthy)
            if healthy:
                logger.debug("stream completed", protocol=protocol, chunks=count)
            else:
                logger.warning("stream ended with error", protocol=protocol, chunks=count)

        chunks = self._provider.process_stream(response, capability)
        return ChunkStream(chunks, token=token, on_finish=on_finish, on_close=response.aclose)
