"""
Protocol handler: a capability plus the model's stored options for it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from llm_agents.capabilities.base import Capability


class ProtocolHandler:
    """Holds one capability and its default options.

    The handler keeps its own copy of the options it was given, so later
    changes to the caller's mapping do not leak in.
    """

    def __init__(self, capability: Capability, options: Mapping[str, Any] | None = None) -> None:
        self._capability = capability
        self._options: dict[str, Any] = dict(options or {})

    @property
    def capability(self) -> Capability:
        return self._capability

    @property
    def options(self) -> dict[str, Any]:
        """Stored options. This is the live mapping, not a copy."""
        return self._options

    def update_options(self, options: Mapping[str, Any]) -> None:
        """Overlay options onto the stored ones."""
        self._options.update(options)

    def merge_options(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return stored options overlaid with ``options`` as a new dict."""
        merged = dict(self._options)
        if options:
            merged.update(options)
        return merged
