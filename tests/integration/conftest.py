"""
Integration test fixtures.

Builders for agent configurations and upstream payloads used with the
``httpx_mock`` fixture.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from llm_agents.config import (
    AgentConfig,
    CapabilityConfig,
    ModelConfig,
    ProviderConfig,
    TransportConfig,
)

OLLAMA_BASE = "http://h:11434"
OLLAMA_CHAT_URL = f"{OLLAMA_BASE}/v1/chat/completions"
OLLAMA_EMBEDDINGS_URL = f"{OLLAMA_BASE}/v1/embeddings"

AZURE_BASE = "https://r.openai.azure.com/openai"
AZURE_OPTIONS = {
    "deployment": "gpt4o",
    "auth_type": "api_key",
    "token": "azure-secret",
    "api_version": "2024-02-01",
}

DEFAULT_CAPABILITIES = {
    "chat": CapabilityConfig(format="chat", options={"temperature": 0.7, "max_tokens": 4096}),
    "vision": CapabilityConfig(format="vision"),
    "tools": CapabilityConfig(format="tools"),
    "embeddings": CapabilityConfig(format="embeddings"),
}


def _agent_config(
    *,
    provider: str = "ollama",
    base_url: str = OLLAMA_BASE,
    model: str = "m",
    options: dict[str, Any] | None = None,
    capabilities: dict[str, CapabilityConfig] | None = None,
    system_prompt: str = "",
    max_retries: int = 3,
    backoff: str = "10ms",
) -> AgentConfig:
    return AgentConfig(
        name="test-agent",
        system_prompt=system_prompt,
        transport=TransportConfig(
            max_retries=max_retries,
            retry_backoff_base=backoff,
            provider=ProviderConfig(
                name=provider,
                base_url=base_url,
                options=options or {},
                model=ModelConfig(
                    name=model,
                    capabilities=capabilities or dict(DEFAULT_CAPABILITIES),
                ),
            ),
        ),
    )


def _chat_completion(
    content: str | None = "ok",
    model: str = "m",
    finish_reason: str = "stop",
    tool_calls: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1699012345,
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 1, "total_tokens": 6},
    }


def _sse(*frames: dict[str, Any] | str, done: bool = True) -> bytes:
    lines = [f"data: {f if isinstance(f, str) else json.dumps(f)}\n" for f in frames]
    if done:
        lines.append("data: [DONE]\n")
    return "".join(lines).encode()


def _delta(content: str, finish_reason: str | None = None) -> dict[str, Any]:
    return {"choices": [{"index": 0, "delta": {"content": content}, "finish_reason": finish_reason}]}


@pytest.fixture
def agent_config() -> Callable[..., AgentConfig]:
    """Build an agent configuration against the mocked upstream."""
    return _agent_config


@pytest.fixture
def azure_config() -> Callable[..., AgentConfig]:
    """Build an agent configuration for the cloud-hosted provider."""

    def build(**kwargs: Any) -> AgentConfig:
        options = {**AZURE_OPTIONS, **kwargs.pop("options", {})}
        return _agent_config(provider="azure", base_url=AZURE_BASE, options=options, **kwargs)

    return build


@pytest.fixture
def chat_completion() -> Callable[..., dict[str, Any]]:
    """Build a buffered chat completion payload."""
    return _chat_completion


@pytest.fixture
def sse() -> Callable[..., bytes]:
    """Build an SSE body from chunk payloads."""
    return _sse


@pytest.fixture
def delta() -> Callable[..., dict[str, Any]]:
    """Build a streaming chunk payload."""
    return _delta
