"""Tests for ChunkStream."""

import asyncio
from collections.abc import AsyncIterator

import pytest

from llm_agents.errors import TransportError
from llm_agents.transport import CancelToken, ChunkStream
from llm_agents.types import StreamingChunk


def chunk(text: str) -> StreamingChunk:
    return StreamingChunk.model_validate({"choices": [{"delta": {"content": text}}]})


class Source:
    """Async generator source that records whether it was closed."""

    def __init__(self, *items: StreamingChunk) -> None:
        self.items = items
        self.closed = False
        self.produced = 0

    async def generate(self) -> AsyncIterator[StreamingChunk]:
        try:
            for item in self.items:
                self.produced += 1
                yield item
        finally:
            self.closed = True


class Finished:
    """Records on_finish calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[bool, int]] = []

    def __call__(self, healthy: bool, count: int) -> None:
        self.calls.append((healthy, count))


class Released:
    """Records how many times the body release callback was awaited."""

    def __init__(self) -> None:
        self.count = 0

    async def __call__(self) -> None:
        self.count += 1


class TestChunkStream:
    """Tests for ChunkStream iteration and closing."""

    @pytest.mark.asyncio
    async def test_normal_end(self) -> None:
        """Test chunks are delivered in order and completion is reported healthy."""
        source = Source(chunk("Hel"), chunk("lo"))
        finished = Finished()
        stream = ChunkStream(source.generate(), on_finish=finished)

        assert await stream.text() == "Hello"
        assert stream.closed
        assert stream.chunk_count == 2
        assert source.closed
        assert finished.calls == [(True, 2)]

    @pytest.mark.asyncio
    async def test_error_chunk_ends_stream(self) -> None:
        """Test the error chunk is delivered and then the stream closes."""
        source = Source(chunk("a"), StreamingChunk.from_error(TransportError("reset")), chunk("b"))
        finished = Finished()
        stream = ChunkStream(source.generate(), on_finish=finished)

        chunks = await stream.collect()

        assert [c.content for c in chunks] == ["a", ""]
        assert isinstance(chunks[-1].error, TransportError)
        assert finished.calls == [(False, 2)]
        assert source.closed
        assert source.produced == 2

    @pytest.mark.asyncio
    async def test_cancel_closes_within_one_chunk(self) -> None:
        """Test cancelling ends iteration quietly and releases the source."""
        source = Source(chunk("1"), chunk("2"), chunk("3"))
        token = CancelToken()
        finished = Finished()
        stream = ChunkStream(source.generate(), token=token, on_finish=finished)

        received = []
        async for item in stream:
            received.append(item.content)
            token.cancel()

        assert received == ["1"]
        assert stream.cancelled
        assert stream.closed
        assert source.closed
        assert finished.calls == []

    @pytest.mark.asyncio
    async def test_aclose_early(self) -> None:
        """Test closing before the end releases the source without reporting."""
        source = Source(chunk("1"), chunk("2"))
        finished = Finished()
        async with ChunkStream(source.generate(), on_finish=finished) as stream:
            first = await stream.__anext__()
            assert first.content == "1"
        assert stream.closed
        assert source.closed
        assert finished.calls == []
        assert await stream.collect() == []

    @pytest.mark.asyncio
    async def test_aclose_idempotent(self) -> None:
        stream = ChunkStream(Source().generate())
        await stream.aclose()
        await stream.aclose()
        assert stream.closed

    @pytest.mark.asyncio
    async def test_source_exception_reported(self) -> None:
        """Test an unexpected source failure is reported unhealthy and re-raised."""

        async def broken() -> AsyncIterator[StreamingChunk]:
            yield chunk("a")
            raise RuntimeError("boom")

        finished = Finished()
        stream = ChunkStream(broken(), on_finish=finished)
        with pytest.raises(RuntimeError, match="boom"):
            await stream.collect()
        assert finished.calls == [(False, 1)]
        assert stream.closed


class TestChunkStreamRelease:
    """Tests for releasing the body behind a stream."""

    @pytest.mark.asyncio
    async def test_close_before_iterating(self) -> None:
        """Test closing an unread stream still releases the body."""
        released = Released()
        stream = ChunkStream(Source(chunk("1")).generate(), on_close=released)
        await stream.aclose()
        await stream.aclose()
        assert released.count == 1

    @pytest.mark.asyncio
    async def test_token_fired_before_iterating(self) -> None:
        """Test a token cancelled before the first read releases the body."""
        released = Released()
        token = CancelToken()
        token.cancel()
        stream = ChunkStream(Source(chunk("1")).generate(), token=token, on_close=released)

        assert await stream.collect() == []
        assert stream.cancelled
        assert released.count == 1

    @pytest.mark.asyncio
    async def test_released_after_normal_end(self) -> None:
        released = Released()
        stream = ChunkStream(Source(chunk("a")).generate(), on_close=released)
        assert await stream.text() == "a"
        assert released.count == 1

    @pytest.mark.asyncio
    async def test_task_cancel_during_read(self) -> None:
        """Test cancelling the consuming task propagates CancelledError and releases."""
        reading = asyncio.Event()
        unwound = False

        async def slow() -> AsyncIterator[StreamingChunk]:
            nonlocal unwound
            try:
                yield chunk("first")
                reading.set()
                await asyncio.sleep(10)
                yield chunk("never")
            finally:
                unwound = True

        released = Released()
        stream = ChunkStream(slow(), token=CancelToken(), on_close=released)

        async def consume() -> None:
            async for _ in stream:
                pass

        task = asyncio.create_task(consume())
        await reading.wait()
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert unwound
        assert stream.closed
        assert released.count == 1
