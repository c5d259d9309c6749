"""Tests for the error hierarchy and classification."""

import asyncio

import httpx
import pytest

from llm_agents.agent import AgentError, AgentErrorType, client_label
from llm_agents.config import ModelConfig, ProviderConfig, TransportConfig
from llm_agents.errors import (
    AgentsError,
    ConfigError,
    DecodeError,
    ErrorContext,
    ErrorKind,
    RemoteError,
    RequestCancelledError,
    TransportError,
    UnsupportedError,
    ValidationError,
    classify_error,
    is_retryable,
    is_retryable_status,
)


class TestHierarchy:
    """Tests for the error classes."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("v"),
            UnsupportedError("u"),
            TransportError("t"),
            RemoteError("r", status_code=500),
            DecodeError("d"),
            RequestCancelledError(),
            ConfigError("c"),
            AgentError.init("a"),
        ],
    )
    def test_all_derive_from_base(self, error: AgentsError) -> None:
        assert isinstance(error, AgentsError)

    def test_context_rendering(self) -> None:
        """Test the context is rendered into the message."""
        error = ValidationError("bad option", field="options.images")
        assert str(error) == "bad option [validation] at 'options.images'"
        error.with_hint("pass a list")
        assert str(error).endswith("(hint: pass a list)")
        assert str(ErrorContext()) == ""

    def test_cause_is_chained(self) -> None:
        cause = httpx.ConnectError("refused")
        error = TransportError("send failed", url="http://h", cause=cause)
        assert error.__cause__ is cause
        assert error.context.details["url"] == "http://h"

    def test_remote_error(self) -> None:
        error = RemoteError.from_status(429, "slow down", provider="azure")
        assert error.message == "provider 'azure' request failed with status 429: slow down"
        assert error.retryable is True
        assert error.context.details["status_code"] == 429
        assert RemoteError.from_status(404).message == "request failed with status 404:"


class TestClassification:
    """Tests for error classification."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (ValidationError("v"), ErrorKind.VALIDATION),
            (ConfigError("c"), ErrorKind.VALIDATION),
            (UnsupportedError("u"), ErrorKind.UNSUPPORTED),
            (TransportError("t"), ErrorKind.TRANSPORT),
            (httpx.ReadTimeout("slow"), ErrorKind.TRANSPORT),
            (RemoteError("r", status_code=503), ErrorKind.UPSTREAM_STATUS),
            (DecodeError("d"), ErrorKind.DECODE),
            (RequestCancelledError(), ErrorKind.CANCELLATION),
            (asyncio.CancelledError(), ErrorKind.CANCELLATION),
            (KeyError("k"), ErrorKind.VALIDATION),
        ],
    )
    def test_classify(self, error: BaseException, kind: ErrorKind) -> None:
        assert classify_error(error) == kind

    def test_retryable(self) -> None:
        assert is_retryable(TransportError("t"))
        assert is_retryable(RemoteError("r", status_code=502))
        assert not is_retryable(RemoteError("r", status_code=500))
        assert not is_retryable(DecodeError("d"))
        assert not is_retryable(RequestCancelledError())
        assert [s for s in range(400, 600) if is_retryable_status(s)] == [429, 502, 503, 504]

    def test_marks_unhealthy(self) -> None:
        assert {k for k in ErrorKind if k.marks_unhealthy} == {
            ErrorKind.TRANSPORT,
            ErrorKind.UPSTREAM_STATUS,
            ErrorKind.DECODE,
        }


class TestAgentError:
    """Tests for AgentError."""

    def test_format_with_client_and_name(self) -> None:
        error = AgentError.init("boom", name="helper", client="ollama/llama3.2")
        assert str(error) == "Agent error [ollama/llama3.2/helper]: boom"
        assert error.type is AgentErrorType.INIT

    def test_format_with_name(self) -> None:
        assert str(AgentError.llm("boom", name="helper")) == "Agent error [helper]: boom"

    def test_format_bare(self) -> None:
        assert str(AgentError.llm("boom")) == "Agent error: boom"

    def test_fields(self) -> None:
        cause = ValueError("inner")
        error = AgentError.llm("boom", code="E42", cause=cause)
        assert error.__cause__ is cause
        assert error.id != AgentError.llm("boom").id
        data = error.to_dict()
        assert data["type"] == "llm"
        assert data["code"] == "E42"
        assert "name" not in data

    @pytest.mark.parametrize(
        ("provider", "model", "label"),
        [
            ("ollama", "llama3.2", "ollama/llama3.2"),
            ("ollama", "", "ollama"),
            ("", "llama3.2", "llama3.2"),
            ("", "", "unknown"),
        ],
    )
    def test_client_label(self, provider: str, model: str, label: str) -> None:
        config = TransportConfig(provider=ProviderConfig(name=provider, model=ModelConfig(name=model)))
        assert client_label(config) == label
