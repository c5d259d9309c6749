"""
Integration tests for retries, upstream errors and health.
"""

import logging

import httpx
import pytest

from llm_agents import Agent, DecodeError, RemoteError, TransportError

CHAT_URL = "http://h:11434/v1/chat/completions"


class TestRetry:
    """Retry behavior against transient and terminal upstream failures."""

    @pytest.mark.asyncio
    async def test_retries_503_then_succeeds(self, httpx_mock, agent_config, chat_completion) -> None:
        """Test two 503s followed by a 200 make three attempts."""
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=503, text="busy")
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=503, text="busy")
        httpx_mock.add_response(url=CHAT_URL, method="POST", json=chat_completion("finally"))

        async with Agent(agent_config(max_retries=3, backoff="10ms")) as agent:
            response = await agent.chat("hi")
            assert agent.client.is_healthy

        assert response.content == "finally"
        assert len(httpx_mock.get_requests()) == 3

    @pytest.mark.asyncio
    async def test_400_is_terminal(self, httpx_mock, agent_config) -> None:
        """Test a 400 fails after exactly one attempt."""
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=400, text="bad request")

        async with Agent(agent_config(max_retries=3, backoff="10ms")) as agent:
            with pytest.raises(RemoteError) as exc:
                await agent.chat("hi")
            assert not agent.client.is_healthy

        assert exc.value.status_code == 400
        assert exc.value.body == "bad request"
        assert exc.value.retryable is False
        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, httpx_mock, agent_config) -> None:
        for _ in range(3):
            httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=429, text="slow down")

        async with Agent(agent_config(max_retries=2, backoff="1ms")) as agent:
            with pytest.raises(RemoteError, match="status 429"):
                await agent.chat("hi")

        assert len(httpx_mock.get_requests()) == 3

    @pytest.mark.asyncio
    async def test_no_retries(self, httpx_mock, agent_config) -> None:
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=503, text="busy")

        async with Agent(agent_config(max_retries=0)) as agent:
            with pytest.raises(RemoteError):
                await agent.chat("hi")

        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_transport_error_retried(self, httpx_mock, agent_config, chat_completion) -> None:
        """Test connection failures are retried and wrapped."""
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=CHAT_URL)
        httpx_mock.add_response(url=CHAT_URL, method="POST", json=chat_completion())

        async with Agent(agent_config(max_retries=1, backoff="1ms")) as agent:
            response = await agent.chat("hi")

        assert response.content == "ok"
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_transport_error_surfaces(self, httpx_mock, agent_config) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=CHAT_URL)

        async with Agent(agent_config(max_retries=0)) as agent:
            with pytest.raises(TransportError, match="connection refused") as exc:
                await agent.chat("hi")
            assert not agent.client.health.healthy

        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_retry_logged(self, httpx_mock, agent_config, chat_completion, caplog) -> None:
        """Test scheduled retries are logged with the status code."""
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=502, text="bad gateway")
        httpx_mock.add_response(url=CHAT_URL, method="POST", json=chat_completion())

        with caplog.at_level(logging.WARNING, logger="llm_agents.transport"):
            async with Agent(agent_config(backoff="1ms")) as agent:
                await agent.chat("hi")

        retries = [r for r in caplog.records if r.getMessage().startswith("retrying after error")]
        assert len(retries) == 1
        assert retries[0].extra_fields["status_code"] == 502
        assert retries[0].extra_fields["attempt"] == 1


class TestUpstreamFailures:
    """Non-retryable upstream failures and health tracking."""

    @pytest.mark.asyncio
    async def test_undecodable_body(self, httpx_mock, agent_config) -> None:
        httpx_mock.add_response(url=CHAT_URL, method="POST", text="<html>oops</html>")

        async with Agent(agent_config()) as agent:
            with pytest.raises(DecodeError):
                await agent.chat("hi")
            assert not agent.client.is_healthy

        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_health_recovers(self, httpx_mock, agent_config, chat_completion) -> None:
        """Test health follows the most recent attempt."""
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=500, text="error")
        httpx_mock.add_response(url=CHAT_URL, method="POST", json=chat_completion())

        async with Agent(agent_config()) as agent:
            with pytest.raises(RemoteError):
                await agent.chat("hi")
            unhealthy = agent.client.health
            await agent.chat("hi")
            healthy = agent.client.health

        assert not unhealthy.healthy
        assert healthy.healthy
        assert healthy.last_updated >= unhealthy.last_updated

    @pytest.mark.asyncio
    async def test_stream_not_retried(self, httpx_mock, agent_config) -> None:
        """Test a failing stream start is reported once without retrying."""
        httpx_mock.add_response(url=CHAT_URL, method="POST", status_code=503, text="busy")

        async with Agent(agent_config(max_retries=3)) as agent:
            with pytest.raises(RemoteError, match="status 503: busy"):
                await agent.chat_stream("hi")
            assert not agent.client.is_healthy

        assert len(httpx_mock.get_requests()) == 1
