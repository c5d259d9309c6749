"""
Connection pool settings for the HTTP transport.

Maps transport configuration onto ``httpx`` limits and timeouts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from llm_agents.config.core import TransportConfig


@dataclass
class PoolConfig:
    """Configuration for the connection pool.

    Attributes:
        max_connections: Maximum total connections
        max_keepalive_connections: Maximum idle connections to keep
        keepalive_expiry: Seconds before an idle connection is dropped
        timeout: Overall per-request timeout in seconds
        connect_timeout: Connection timeout in seconds (defaults to ``timeout``)
    """

    max_connections: int = 100
    max_keepalive_connections: int = 10
    keepalive_expiry: float = 90.0
    timeout: float = 120.0
    connect_timeout: float | None = None

    @classmethod
    def from_transport(cls, config: TransportConfig) -> PoolConfig:
        """Derive pool settings from transport configuration."""
        return cls(
            max_connections=max(cls.max_connections, config.connection_pool_size),
            max_keepalive_connections=config.connection_pool_size,
            keepalive_expiry=config.connection_timeout,
            timeout=config.timeout,
        )

    def to_httpx_limits(self) -> httpx.Limits:
        """Convert to httpx Limits."""
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive_connections,
            keepalive_expiry=self.keepalive_expiry,
        )

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Convert to httpx Timeout."""
        return httpx.Timeout(
            self.timeout,
            connect=self.connect_timeout if self.connect_timeout is not None else self.timeout,
        )

    def create_client(self) -> httpx.AsyncClient:
        """Create an async client with these settings."""
        return httpx.AsyncClient(
            limits=self.to_httpx_limits(),
            timeout=self.to_httpx_timeout(),
        )
