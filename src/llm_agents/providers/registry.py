"""
Provider factory registry.

Factories are keyed by the provider name used in configuration.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from llm_agents.errors import UnsupportedError
from llm_agents.providers.azure import AzureProvider
from llm_agents.providers.base import Provider
from llm_agents.providers.ollama import OllamaProvider

if TYPE_CHECKING:
    from llm_agents.capabilities.registry import CapabilityRegistry
    from llm_agents.config.core import ProviderConfig

ProviderFactory = Callable[["ProviderConfig", "CapabilityRegistry | None"], Provider]


class ProviderRegistry:
    """Thread-safe registry of provider factories.

    Example:
        >>> registry = ProviderRegistry().register("ollama", OllamaProvider)
        >>> provider = registry.create(ProviderConfig(name="ollama"))
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> ProviderRegistry:
        """Register or replace a provider factory.

        Returns:
            Self for chaining
        """
        with self._lock:
            self._factories[name] = factory
        return self

    def create(
        self,
        config: ProviderConfig,
        capabilities: CapabilityRegistry | None = None,
    ) -> Provider:
        """Create the provider named by ``config.name``.

        Args:
            config: Provider configuration
            capabilities: Capability registry used to build the model

        Raises:
            UnsupportedError: If no factory is registered under the name
        """
        with self._lock:
            factory = self._factories.get(config.name)
        if factory is None:
            raise UnsupportedError(
                f"unknown provider: {config.name}", name=config.name
            ).with_hint(f"registered providers: {', '.join(self.list_providers())}")
        return factory(config, capabilities)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._factories

    def list_providers(self) -> list[str]:
        """Registered provider names, sorted."""
        with self._lock:
            return sorted(self._factories)


def register_builtin_providers(registry: ProviderRegistry) -> ProviderRegistry:
    """Register ``ollama`` and ``azure``."""
    return registry.register("ollama", OllamaProvider).register("azure", AzureProvider)


_default_registry: ProviderRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> ProviderRegistry:
    """Process-wide registry preloaded with the built-in providers."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = register_builtin_providers(ProviderRegistry())
        return _default_registry


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Register a provider in the process-wide registry."""
    default_registry().register(name, factory)


def create_provider(
    config: ProviderConfig,
    capabilities: CapabilityRegistry | None = None,
) -> Provider:
    """Create a provider from the process-wide registry."""
    return default_registry().create(config, capabilities)


def list_providers() -> list[str]:
    """Provider names in the process-wide registry."""
    return default_registry().list_providers()
