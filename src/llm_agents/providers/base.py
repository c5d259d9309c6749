"""提供方基类：端点路由、认证头、请求准备与响应处理。

Provider base class.

A provider turns a ProtocolRequest into a ProviderRequest (URL, headers,
body), adds auth headers, and turns HTTP responses back into typed results
or a lazy sequence of streaming chunks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from llm_agents.errors import DecodeError, RemoteError, TransportError, UnsupportedError
from llm_agents.types.events import StreamingChunk
from llm_agents.types.protocol import Protocol

if TYPE_CHECKING:
    from llm_agents.capabilities.base import Capability, StreamingCapability
    from llm_agents.models.model import Model
    from llm_agents.types.request import ProtocolRequest

SSE_PREFIX = "data: "

STREAM_HEADERS: dict[str, str] = {
    "Accept": "text/event-stream",
    "Cache-Control": "no-cache",
}


@dataclass
class ProviderRequest:
    """An HTTP request ready to send."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class Provider(ABC):
    """Base class for upstream services.

    Subclasses declare ``endpoints`` (protocol -> path suffix) and implement
    ``endpoint`` and ``auth_headers``.
    """

    endpoints: ClassVar[Mapping[Protocol, str]] = {
        Protocol.CHAT: "/chat/completions",
        Protocol.VISION: "/chat/completions",
        Protocol.TOOLS: "/chat/completions",
        Protocol.EMBEDDINGS: "/embeddings",
    }

    def __init__(
        self,
        name: str,
        base_url: str,
        model: Model,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._name = name
        self._base_url = base_url
        self._model = model
        self._options: dict[str, Any] = dict(options or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def model(self) -> Model:
        return self._model

    @property
    def options(self) -> dict[str, Any]:
        return self._options

    def _path(self, protocol: Protocol) -> str:
        path = self.endpoints.get(protocol)
        if path is None:
            raise UnsupportedError(
                f"protocol {protocol.value} not supported by provider '{self._name}'",
                name=protocol.value,
            )
        return path

    @abstractmethod
    def endpoint(self, protocol: Protocol) -> str:
        """Full URL for a protocol.

        Raises:
            UnsupportedError: If the provider has no endpoint for the protocol
        """

    @abstractmethod
    def auth_headers(self) -> dict[str, str]:
        """Authentication headers applied after the request headers."""

    def prepare_request(self, protocol: Protocol, request: ProtocolRequest) -> ProviderRequest:
        """Build a buffered HTTP request."""
        return ProviderRequest(
            url=self.endpoint(protocol),
            headers=request.headers,
            body=request.marshal(),
        )

    def prepare_stream_request(
        self, protocol: Protocol, request: ProtocolRequest
    ) -> ProviderRequest:
        """Build a streaming HTTP request (adds the event-stream headers)."""
        prepared = self.prepare_request(protocol, request)
        prepared.headers.update(STREAM_HEADERS)
        return prepared

    async def process_response(self, response: httpx.Response, capability: Capability) -> Any:
        """Check the status and decode a buffered response.

        Raises:
            RemoteError: If the status is not 200
            TransportError: If the body cannot be read
            DecodeError: If the body does not parse
        """
        try:
            data = await response.aread()
        except httpx.HTTPError as e:
            raise TransportError(
                f"provider '{self._name}': failed to read response: {e}",
                url=str(response.request.url),
                cause=e,
            ) from e
        if response.status_code != httpx.codes.OK:
            raise RemoteError.from_status(
                response.status_code,
                data.decode("utf-8", errors="replace"),
                provider=self._name,
            )
        return capability.parse_response(data)

    async def check_stream_response(self, response: httpx.Response) -> None:
        """Fail and release the body if a streaming response is not 200.

        Raises:
            RemoteError: If the status is not 200
        """
        if response.status_code == httpx.codes.OK:
            return
        try:
            body = (await response.aread()).decode("utf-8", errors="replace")
        except httpx.HTTPError:
            body = ""
        finally:
            await response.aclose()
        raise RemoteError.from_status(response.status_code, body, provider=self._name)

    def frame_payload(self, line: str) -> str | None:
        """Extract the data payload of an SSE line, None to skip it.

        Bare JSON lines are accepted as well as ``data:`` frames.
        """
        if line.startswith(SSE_PREFIX):
            return line[len(SSE_PREFIX) :].strip()
        if line.startswith(":"):
            return None
        return line

    async def process_stream(
        self,
        response: httpx.Response,
        capability: StreamingCapability,
    ) -> AsyncIterator[StreamingChunk]:
        """Decode a streaming body into chunks, one SSE line at a time.

        Empty lines, comments and undecodable frames are skipped. The
        ``[DONE]`` sentinel ends the sequence. A read failure yields one
        final chunk carrying a TransportError. The response is closed when
        the sequence ends or is closed early.
        """
        try:
            async for raw in response.aiter_lines():
                line = raw.strip()
                if not line:
                    continue
                payload = self.frame_payload(line)
                if payload is None:
                    continue
                if capability.is_stream_complete(payload):
                    return
                try:
                    chunk = capability.parse_chunk(payload)
                except DecodeError:
                    continue
                yield chunk
        except httpx.HTTPError as e:
            yield StreamingChunk.from_error(
                TransportError(
                    f"provider '{self._name}': stream read failed: {e}",
                    url=str(response.request.url),
                    cause=e,
                )
            )
        finally:
            await response.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, base_url={self._base_url!r})"
