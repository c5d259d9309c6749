"""模型：绑定模型名称与各协议的能力处理器。

Model: a named binding from protocols to capability handlers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from llm_agents.capabilities.base import Capability, StreamingCapability
from llm_agents.capabilities.registry import default_registry
from llm_agents.errors import UnsupportedError, ValidationError
from llm_agents.models.handler import ProtocolHandler
from llm_agents.types.protocol import Protocol

if TYPE_CHECKING:
    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.config.core import ModelConfig


class Model:
    """A model name plus one handler per supported protocol.

    Example:
        >>> config = ModelConfig(
        ...     name="llama3.2",
        ...     capabilities={"chat": CapabilityConfig(format="chat", options={"temperature": 0.7})},
        ... )
        >>> model = Model.from_config(config)
        >>> model.supports(Protocol.CHAT)
        True
    """

    def __init__(self, name: str, handlers: Mapping[Protocol, ProtocolHandler] | None = None) -> None:
        self._name = name
        self._handlers: dict[Protocol, ProtocolHandler] = dict(handlers or {})

    @classmethod
    def from_config(
        cls,
        config: ModelConfig,
        registry: CapabilityRegistry | None = None,
    ) -> Model:
        """Build a model, resolving every format against the registry.

        Args:
            config: Model name and per-protocol capability bindings
            registry: Capability registry (defaults to the process-wide one)

        Returns:
            Model with one handler per configured protocol

        Raises:
            UnsupportedError: If a protocol or format name is unknown
            ValidationError: If initial options name undeclared keys
        """
        registry = registry or default_registry()
        handlers: dict[Protocol, ProtocolHandler] = {}
        for proto_name, binding in config.capabilities.items():
            if not Protocol.is_valid(proto_name):
                raise UnsupportedError(
                    f"invalid protocol in configuration: {proto_name} "
                    f"(valid protocols: {Protocol.names()})",
                    name=proto_name,
                )
            protocol = Protocol(proto_name)
            try:
                capability = registry.get(binding.format)
            except UnsupportedError as e:
                raise UnsupportedError(
                    f"failed to get capability format '{binding.format}' for protocol {protocol.value}: "
                    f"{e.message}",
                    name=binding.format,
                ) from e
            if capability.protocol is not protocol:
                raise UnsupportedError(
                    f"capability format '{binding.format}' serves protocol "
                    f"{capability.protocol.value}, not {protocol.value}",
                    name=binding.format,
                )
            capability.validate(binding.options, partial=True)
            handlers[protocol] = ProtocolHandler(capability, binding.options)
        return cls(config.name, handlers)

    @property
    def name(self) -> str:
        return self._name

    @property
    def protocols(self) -> list[Protocol]:
        """Protocols this model has handlers for."""
        return [p for p in Protocol if p in self._handlers]

    def supports(self, protocol: Protocol) -> bool:
        return protocol in self._handlers

    def _handler(self, protocol: Protocol) -> ProtocolHandler:
        handler = self._handlers.get(protocol)
        if handler is None:
            raise UnsupportedError(
                f"protocol {protocol.value} not supported by model {self._name}",
                name=protocol.value,
            )
        return handler

    def capability(self, protocol: Protocol) -> Capability:
        """Capability bound to a protocol.

        Raises:
            UnsupportedError: If the model has no handler for the protocol
        """
        return self._handler(protocol).capability

    def streaming_capability(self, protocol: Protocol) -> StreamingCapability:
        """Capability bound to a protocol, narrowed to the streaming variant.

        Raises:
            UnsupportedError: If the protocol is unsupported or cannot stream
        """
        capability = self.capability(protocol)
        if not isinstance(capability, StreamingCapability):
            raise UnsupportedError(
                f"protocol {protocol.value} does not support streaming "
                f"(capability '{capability.name}')",
                name=protocol.value,
            )
        return capability

    def options(self, protocol: Protocol) -> dict[str, Any]:
        """Stored options for a protocol; empty when unsupported.

        The returned mapping is the handler's own, for inspection only.
        """
        handler = self._handlers.get(protocol)
        return handler.options if handler else {}

    def update_options(self, protocol: Protocol, options: Mapping[str, Any]) -> None:
        """Validate and overlay options onto the stored ones.

        Keys must be declared by the capability; required keys may still be
        supplied per request.

        Raises:
            UnsupportedError: If the protocol is unsupported
            ValidationError: If an option is not accepted
        """
        handler = self._handler(protocol)
        try:
            handler.capability.validate(options, partial=True)
        except ValidationError as e:
            raise ValidationError(
                f"invalid options for {protocol.value} protocol: {e.message}",
                field=e.field,
            ) from e
        handler.update_options(options)

    def merge_request_options(
        self, protocol: Protocol, options: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Stored options overlaid with request options, as a fresh dict.

        Neither the stored options nor ``options`` are modified.
        """
        handler = self._handlers.get(protocol)
        if handler is None:
            return dict(options or {})
        return handler.merge_options(options)

    def __repr__(self) -> str:
        names = ", ".join(p.value for p in self.protocols)
        return f"Model(name={self._name!r}, protocols=[{names}])"
