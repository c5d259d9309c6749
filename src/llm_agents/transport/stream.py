"""
Chunk stream returned by streaming calls.

Wraps the provider's chunk sequence. Iteration ends when the upstream sends
``[DONE]`` or closes, right after a chunk that carries an error, or as soon
as the cancel token fires. Closing the stream releases the HTTP body.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Any

from llm_agents.errors import RequestCancelledError
from llm_agents.transport.cancel import run_cancellable
from llm_agents.types.events import StreamingChunk

if TYPE_CHECKING:
    from llm_agents.transport.cancel import CancelToken


class ChunkStream:
    """Async iterator over StreamingChunk values.

    Example:
        >>> async with await client.execute_stream(request) as stream:
        ...     async for chunk in stream:
        ...         print(chunk.content, end="")
    """

    def __init__(
        self,
        chunks: AsyncIterator[StreamingChunk],
        *,
        token: CancelToken | None = None,
        on_finish: Callable[[bool, int], Any] | None = None,
        on_close: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        """Initialize the stream.

        Args:
            chunks: Provider chunk sequence (an async generator)
            token: Optional cancel token
            on_finish: Called once with (healthy, chunk_count) when the
                upstream ends normally or delivers an error chunk
            on_close: Awaited once by aclose() to release the HTTP body,
                whether or not iteration ever started
        """
        self._chunks = chunks
        self._token = token
        self._on_finish = on_finish
        self._on_close = on_close
        self._closed = False
        self._finished = False
        self._cancelled = False
        self._close_after_current = False
        self._count = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        """Whether the stream ended because the cancel token fired."""
        return self._cancelled

    @property
    def chunk_count(self) -> int:
        """Chunks delivered so far."""
        return self._count

    def __aiter__(self) -> ChunkStream:
        return self

    async def __anext__(self) -> StreamingChunk:
        if self._closed:
            raise StopAsyncIteration
        if self._close_after_current:
            await self.aclose()
            raise StopAsyncIteration
        if self._token is not None and self._token.is_cancelled:
            self._cancelled = True
            await self.aclose()
            raise StopAsyncIteration

        try:
            chunk = await run_cancellable(self._chunks.__anext__(), self._token)
        except StopAsyncIteration:
            self._finish(True)
            await self.aclose()
            raise
        except RequestCancelledError:
            self._cancelled = True
            await self.aclose()
            raise StopAsyncIteration from None
        except asyncio.CancelledError:
            await self.aclose()
            raise
        except Exception:
            self._finish(False)
            await self.aclose()
            raise

        self._count += 1
        if chunk.error is not None:
            self._finish(False)
            self._close_after_current = True
        return chunk

    def _finish(self, healthy: bool) -> None:
        if self._finished:
            return
        self._finished = True
        if self._on_finish is not None:
            self._on_finish(healthy, self._count)

    async def aclose(self) -> None:
        """Stop the stream and release the underlying response."""
        if self._closed:
            return
        self._closed = True
        try:
            aclose = getattr(self._chunks, "aclose", None)
            if aclose is not None:
                await aclose()
        finally:
            if self._on_close is not None:
                await self._on_close()

    async def collect(self) -> list[StreamingChunk]:
        """Drain the stream into a list."""
        return [chunk async for chunk in self]

    async def text(self) -> str:
        """Drain the stream and join the delta contents."""
        return "".join([chunk.content async for chunk in self])

    async def __aenter__(self) -> ChunkStream:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
