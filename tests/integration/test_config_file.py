"""
Integration tests for agents built from configuration files.
"""

import json
from pathlib import Path

import pytest

from llm_agents import Agent

CONFIG_YAML = """\
name: file-agent
system_prompt: Answer in one word.
transport:
  timeout: 30s
  max_retries: 1
  retry_backoff_base: 5ms
  provider:
    name: ollama
    base_url: http://h:11434/
    model:
      name: llama3.2
      capabilities:
        chat:
          format: chat
          options:
            temperature: 0.1
        vision:
          format: vision
          options:
            detail: low
"""


class TestConfigFile:
    """End-to-end calls from a YAML configuration."""

    @pytest.mark.asyncio
    async def test_chat_from_yaml(self, httpx_mock, chat_completion, tmp_path: Path) -> None:
        path = tmp_path / "agent.yaml"
        path.write_text(CONFIG_YAML)
        httpx_mock.add_response(url="http://h:11434/v1/chat/completions", method="POST", status_code=503)
        httpx_mock.add_response(
            url="http://h:11434/v1/chat/completions", method="POST", json=chat_completion("Yes")
        )

        async with Agent.from_config(path) as agent:
            response = await agent.chat("Ready?")

        assert response.content == "Yes"
        requests = httpx_mock.get_requests()
        assert len(requests) == 2
        body = json.loads(requests[-1].content)
        assert body["model"] == "llama3.2"
        assert body["temperature"] == 0.1
        assert body["messages"][0] == {"role": "system", "content": "Answer in one word."}

    @pytest.mark.asyncio
    async def test_stored_vision_options(self, httpx_mock, chat_completion, tmp_path: Path) -> None:
        """Test configured defaults apply and per-call options override them."""
        path = tmp_path / "agent.yaml"
        path.write_text(CONFIG_YAML)
        httpx_mock.add_response(url="http://h:11434/v1/chat/completions", method="POST", json=chat_completion())
        httpx_mock.add_response(url="http://h:11434/v1/chat/completions", method="POST", json=chat_completion())

        async with Agent.from_config(path) as agent:
            await agent.vision("what?", ["http://x/a.png"])
            await agent.vision("what?", ["http://x/a.png"], {"detail": "high"})

        first, second = (json.loads(r.content) for r in httpx_mock.get_requests())
        assert first["messages"][-1]["content"][1]["image_url"]["detail"] == "low"
        assert second["messages"][-1]["content"][1]["image_url"]["detail"] == "high"
