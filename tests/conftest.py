"""Root pytest fixtures for llm-agents tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from llm_agents.capabilities import CapabilityRegistry, register_builtin_formats
from llm_agents.providers import ProviderRegistry, register_builtin_providers
from llm_agents.telemetry import AgentsLogger


@pytest.fixture
def capability_registry() -> CapabilityRegistry:
    """A fresh registry with the built-in formats, isolated from the process-wide one."""
    return register_builtin_formats(CapabilityRegistry())


@pytest.fixture
def provider_registry() -> ProviderRegistry:
    """A fresh registry with the built-in providers."""
    return register_builtin_providers(ProviderRegistry())


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Leave library loggers unconfigured between tests."""
    yield
    AgentsLogger.reset()


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: end-to-end tests against a mocked HTTP upstream",
    )
