"""
Client health tracking.

Health is a single flag plus the time it last changed hands. It is advisory:
nothing in the pipeline refuses requests while unhealthy.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class HealthStatus(str, Enum):
    """Health status levels."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class HealthSnapshot:
    """Read-only view of client health.

    Attributes:
        healthy: Outcome of the most recent completed HTTP attempt
        last_updated: When the flag was last written (UTC)
    """

    healthy: bool
    last_updated: datetime

    @property
    def status(self) -> HealthStatus:
        return HealthStatus.HEALTHY if self.healthy else HealthStatus.UNHEALTHY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "healthy": self.healthy,
            "last_updated": self.last_updated.isoformat(),
        }


class HealthTracker:
    """Thread-safe health flag.

    Example:
        >>> tracker = HealthTracker()
        >>> tracker.mark_unhealthy()
        >>> tracker.snapshot().healthy
        False
    """

    def __init__(self, healthy: bool = True) -> None:
        self._lock = threading.Lock()
        self._healthy = healthy
        self._last_updated = datetime.now(timezone.utc)

    def set(self, healthy: bool) -> None:
        """Record the outcome of an attempt."""
        with self._lock:
            self._healthy = healthy
            self._last_updated = datetime.now(timezone.utc)

    def mark_healthy(self) -> None:
        self.set(True)

    def mark_unhealthy(self) -> None:
        self.set(False)

    @property
    def is_healthy(self) -> bool:
        with self._lock:
            return self._healthy

    def snapshot(self) -> HealthSnapshot:
        """Consistent copy of the flag and its timestamp."""
        with self._lock:
            return HealthSnapshot(healthy=self._healthy, last_updated=self._last_updated)
