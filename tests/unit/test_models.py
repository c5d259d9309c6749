"""Tests for Model and ProtocolHandler."""

import pytest

from llm_agents.capabilities import CapabilityRegistry
from llm_agents.capabilities.chat import ChatCapability
from llm_agents.capabilities.formats import CHAT_OPTIONS
from llm_agents.config import CapabilityConfig, ModelConfig
from llm_agents.errors import UnsupportedError, ValidationError
from llm_agents.models import Model, ProtocolHandler
from llm_agents.types import Protocol


def build_model(registry: CapabilityRegistry, **capabilities: CapabilityConfig) -> Model:
    return Model.from_config(ModelConfig(name="m", capabilities=capabilities), registry)


class TestProtocolHandler:
    """Tests for ProtocolHandler."""

    def test_copies_initial_options(self) -> None:
        options = {"temperature": 0.7}
        handler = ProtocolHandler(ChatCapability("chat", CHAT_OPTIONS), options)
        options["temperature"] = 0.1
        assert handler.options == {"temperature": 0.7}

    def test_merge_and_update(self) -> None:
        handler = ProtocolHandler(ChatCapability("chat", CHAT_OPTIONS), {"temperature": 0.7})
        assert handler.merge_options({"top_p": 0.5}) == {"temperature": 0.7, "top_p": 0.5}
        handler.update_options({"temperature": 0.2})
        assert handler.options == {"temperature": 0.2}


class TestModelFromConfig:
    """Tests for building models from configuration."""

    def test_handlers(self, capability_registry: CapabilityRegistry) -> None:
        model = build_model(
            capability_registry,
            chat=CapabilityConfig(format="chat", options={"temperature": 0.7}),
            embeddings=CapabilityConfig(format="embeddings"),
        )
        assert model.name == "m"
        assert model.protocols == [Protocol.CHAT, Protocol.EMBEDDINGS]
        assert model.supports(Protocol.CHAT)
        assert not model.supports(Protocol.VISION)
        assert model.options(Protocol.CHAT) == {"temperature": 0.7}
        assert model.options(Protocol.VISION) == {}

    def test_invalid_protocol(self, capability_registry: CapabilityRegistry) -> None:
        with pytest.raises(
            UnsupportedError,
            match=r"invalid protocol in configuration: audio \(valid protocols: chat, vision, tools, embeddings\)",
        ):
            build_model(capability_registry, audio=CapabilityConfig(format="chat"))

    def test_unknown_format(self, capability_registry: CapabilityRegistry) -> None:
        with pytest.raises(UnsupportedError, match="failed to get capability format 'x' for protocol chat"):
            build_model(capability_registry, chat=CapabilityConfig(format="x"))

    def test_format_protocol_mismatch(self, capability_registry: CapabilityRegistry) -> None:
        with pytest.raises(UnsupportedError, match="serves protocol embeddings, not chat"):
            build_model(capability_registry, chat=CapabilityConfig(format="embeddings"))

    def test_initial_options_checked(self, capability_registry: CapabilityRegistry) -> None:
        """Test undeclared initial options are rejected but required keys are not enforced."""
        with pytest.raises(ValidationError, match="unsupported option: images"):
            build_model(
                capability_registry,
                chat=CapabilityConfig(format="chat", options={"images": ["a"]}),
            )
        build_model(capability_registry, vision=CapabilityConfig(format="vision", options={"detail": "low"}))


class TestModelOptions:
    """Tests for option storage and merging."""

    @pytest.fixture
    def model(self, capability_registry: CapabilityRegistry) -> Model:
        return build_model(
            capability_registry,
            chat=CapabilityConfig(format="chat", options={"temperature": 0.7, "max_tokens": 4096}),
            embeddings=CapabilityConfig(format="embeddings"),
        )

    def test_merge_empty_equals_stored(self, model: Model) -> None:
        assert model.merge_request_options(Protocol.CHAT, {}) == model.options(Protocol.CHAT)
        assert model.merge_request_options(Protocol.CHAT) == {"temperature": 0.7, "max_tokens": 4096}

    def test_merge_does_not_mutate(self, model: Model) -> None:
        """Test neither the stored options nor the request options change."""
        overlay = {"temperature": 0.9}
        merged = model.merge_request_options(Protocol.CHAT, overlay)
        assert merged == {"temperature": 0.9, "max_tokens": 4096}
        assert overlay == {"temperature": 0.9}
        assert model.options(Protocol.CHAT) == {"temperature": 0.7, "max_tokens": 4096}
        merged["top_p"] = 1.0
        assert "top_p" not in model.options(Protocol.CHAT)

    def test_merge_unsupported_protocol(self, model: Model) -> None:
        assert model.merge_request_options(Protocol.VISION, {"images": ["a"]}) == {"images": ["a"]}

    def test_update_options(self, model: Model) -> None:
        model.update_options(Protocol.CHAT, {"temperature": 0.1})
        assert model.options(Protocol.CHAT)["temperature"] == 0.1

    def test_update_options_invalid(self, model: Model) -> None:
        with pytest.raises(ValidationError, match="invalid options for chat protocol"):
            model.update_options(Protocol.CHAT, {"images": ["a"]})
        with pytest.raises(UnsupportedError, match="protocol vision not supported by model m"):
            model.update_options(Protocol.VISION, {"detail": "low"})

    def test_capability_lookup(self, model: Model) -> None:
        assert model.capability(Protocol.CHAT).name == "chat"
        assert model.streaming_capability(Protocol.CHAT).supports_streaming
        with pytest.raises(UnsupportedError, match="protocol tools not supported by model m"):
            model.capability(Protocol.TOOLS)

    def test_embeddings_cannot_stream(self, model: Model) -> None:
        with pytest.raises(UnsupportedError, match="protocol embeddings does not support streaming"):
            model.streaming_capability(Protocol.EMBEDDINGS)
