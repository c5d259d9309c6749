"""
Capability format registry.

Maps format names to factories. Each lookup calls the factory, so callers
get their own Capability instance.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from llm_agents.capabilities.base import Capability
from llm_agents.errors import UnsupportedError

CapabilityFactory = Callable[[], Capability]


class CapabilityRegistry:
    """Thread-safe registry of capability formats.

    Example:
        >>> registry = CapabilityRegistry()
        >>> registry.register("chat", lambda: ChatCapability("chat", CHAT_OPTIONS))
        >>> registry.get("chat").protocol
        <Protocol.CHAT: 'chat'>
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._factories: dict[str, CapabilityFactory] = {}

    def register(self, name: str, factory: CapabilityFactory) -> CapabilityRegistry:
        """Register or replace a format.

        Args:
            name: Format name referenced from model configuration
            factory: Callable producing a fresh Capability

        Returns:
            Self for chaining
        """
        with self._lock:
            self._factories[name] = factory
        return self

    def get(self, name: str) -> Capability:
        """Create the capability registered under ``name``.

        Raises:
            UnsupportedError: If the format is unknown
        """
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            raise UnsupportedError(
                f"unknown format: capability format '{name}' not registered",
                name=name,
            ).with_hint(f"registered formats: {', '.join(self.list_formats())}")
        return factory()

    def has(self, name: str) -> bool:
        """Check if a format is registered."""
        with self._lock:
            return name in self._factories

    def list_formats(self) -> list[str]:
        """Registered format names, sorted."""
        with self._lock:
            return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)


_default_registry: CapabilityRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> CapabilityRegistry:
    """Process-wide registry preloaded with the built-in formats."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            from llm_agents.capabilities.formats import register_builtin_formats

            _default_registry = register_builtin_formats(CapabilityRegistry())
        return _default_registry


def register_format(name: str, factory: CapabilityFactory) -> None:
    """Register a format in the process-wide registry."""
    default_registry().register(name, factory)


def get_format(name: str) -> Capability:
    """Create a capability from the process-wide registry."""
    return default_registry().get(name)


def list_formats() -> list[str]:
    """Format names in the process-wide registry."""
    return default_registry().list_formats()
