"""配置模型：智能体、传输、提供方与模型的声明式配置。

Configuration records.

Each record has a ``default()`` constructor and a ``merge(source)`` that
overlays every field the source explicitly set, recursing into nested
records and overlaying option maps key by key.
"""

from __future__ import annotations

import copy
from typing import Any, ClassVar

from pydantic import AliasChoices, BaseModel, Field

from llm_agents.config.duration import Duration


class _MergeableConfig(BaseModel):
    """Shared merge behavior for configuration records."""

    # Fields whose dict values are overlaid key by key instead of replaced.
    _overlay_fields: ClassVar[frozenset[str]] = frozenset()

    def merge(self, source: _MergeableConfig) -> _MergeableConfig:
        """Overlay explicitly-set fields of ``source`` onto this record.

        Args:
            source: Record of the same type

        Returns:
            Self for chaining
        """
        for name in source.model_fields_set:
            incoming = getattr(source, name)
            current = getattr(self, name)
            if isinstance(current, _MergeableConfig) and isinstance(incoming, _MergeableConfig):
                current.merge(incoming)
            elif name in self._overlay_fields and isinstance(current, dict):
                current.update(copy.deepcopy(incoming))
            else:
                setattr(self, name, copy.deepcopy(incoming))
            self.model_fields_set.add(name)
        return self


class CapabilityConfig(BaseModel):
    """Binds a protocol to a capability format with initial options."""

    format: str = Field(description="Registered capability format name")
    options: dict[str, Any] = Field(default_factory=dict, description="Default options")


class ModelConfig(_MergeableConfig):
    """Model name plus protocol -> capability bindings."""

    _overlay_fields: ClassVar[frozenset[str]] = frozenset({"capabilities"})

    name: str = Field(default="", description="Model name sent upstream")
    capabilities: dict[str, CapabilityConfig] = Field(
        default_factory=dict, description="Capability per protocol name"
    )

    @classmethod
    def default(cls) -> ModelConfig:
        return cls()


class ProviderConfig(_MergeableConfig):
    """Upstream service selection, endpoint and provider options."""

    _overlay_fields: ClassVar[frozenset[str]] = frozenset({"options"})

    name: str = Field(default="ollama", description="Registered provider name")
    base_url: str = Field(default="http://localhost:11434", description="Service base URL")
    model: ModelConfig = Field(default_factory=ModelConfig.default)
    options: dict[str, Any] = Field(
        default_factory=dict, description="Provider options (auth_type, token, deployment, ...)"
    )

    @classmethod
    def default(cls) -> ProviderConfig:
        return cls()


class TransportConfig(_MergeableConfig):
    """HTTP transport settings."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig.default)
    timeout: Duration = Field(default=120.0, description="Per-request timeout")
    max_retries: int = Field(default=3, ge=0, description="Retries after the first attempt")
    retry_backoff_base: Duration = Field(default=1.0, description="First retry delay")
    connection_pool_size: int = Field(default=10, ge=1, description="Idle connections kept")
    connection_timeout: Duration = Field(default=90.0, description="Idle connection lifetime")

    @classmethod
    def default(cls) -> TransportConfig:
        return cls()


class AgentConfig(_MergeableConfig):
    """Agent name, system prompt and transport."""

    name: str = Field(default="default-agent")
    system_prompt: str = Field(default="")
    transport: TransportConfig = Field(
        default_factory=TransportConfig.default,
        validation_alias=AliasChoices("transport", "client"),
    )

    @classmethod
    def default(cls) -> AgentConfig:
        return cls()
