"""
Retry policy with exponential backoff.

A retry is attempted for transport failures and for upstream statuses
429, 502, 503 and 504. Everything else is returned as-is. A cancel token,
when given, interrupts the backoff sleep.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from llm_agents.errors import (
    RETRYABLE_STATUS_CODES,
    RemoteError,
    RequestCancelledError,
    is_retryable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from llm_agents.config.core import TransportConfig
    from llm_agents.transport.cancel import CancelToken

T = TypeVar("T")

MAX_BACKOFF_SECONDS = 30.0


@dataclass
class RetryConfig:
    """Configuration for retry policy.

    Attributes:
        max_retries: Retries after the first attempt (0 = no retries)
        backoff_base: Delay before the first retry, in seconds
        max_backoff: Upper bound for any single delay, in seconds
        retry_on_status: HTTP status codes to retry on
        exponential_base: Growth factor between consecutive delays
    """

    max_retries: int = 3
    backoff_base: float = 1.0
    max_backoff: float = MAX_BACKOFF_SECONDS
    retry_on_status: frozenset[int] = field(default_factory=lambda: RETRYABLE_STATUS_CODES)
    exponential_base: float = 2.0

    @classmethod
    def from_transport(cls, config: TransportConfig) -> RetryConfig:
        """Create config from transport settings."""
        return cls(max_retries=config.max_retries, backoff_base=config.retry_backoff_base)


@dataclass
class RetryResult:
    """Result of a retry operation.

    Attributes:
        success: Whether the operation succeeded
        value: The result value (if success)
        error: The last error (if failed)
        attempts: Number of attempts made
        total_delay: Total backoff slept, in seconds
    """

    success: bool
    value: Any = None
    error: Exception | None = None
    attempts: int = 0
    total_delay: float = 0.0


class RetryPolicy:
    """Retry policy with exponential backoff.

    Example:
        >>> policy = RetryPolicy(RetryConfig(max_retries=3, backoff_base=0.01))
        >>> result = await policy.execute(send_once)
        >>> if not result.success:
        ...     raise result.error
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self._config = config or RetryConfig()

    @property
    def config(self) -> RetryConfig:
        return self._config

    def calculate_delay(self, attempt: int) -> float:
        """Delay before retry ``attempt`` (0-based), in seconds."""
        delay = self._config.backoff_base * (self._config.exponential_base**attempt)
        return min(delay, self._config.max_backoff)

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """Check if an error should trigger a retry.

        Args:
            error: The exception that occurred
            attempt: Retries already made
        """
        if attempt >= self._config.max_retries:
            return False
        if isinstance(error, RemoteError):
            return error.status_code in self._config.retry_on_status
        return is_retryable(error)

    async def _sleep(self, delay: float, token: CancelToken | None) -> None:
        if token is None:
            await asyncio.sleep(delay)
            return
        if await token.wait_with_timeout(delay):
            raise RequestCancelledError(
                "request cancelled during retry backoff",
                reason=token.reason.value if token.reason else None,
            )

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        on_retry: Callable[[int, Exception, float], None] | None = None,
        token: CancelToken | None = None,
    ) -> RetryResult:
        """Execute an operation with retry.

        Args:
            operation: Async operation to execute
            on_retry: Called with (attempt, error, delay) before each retry
            token: Optional cancel token; cancellation ends the loop

        Returns:
            RetryResult with success status and value/error
        """
        total_delay = 0.0
        attempt = 0

        while True:
            try:
                value = await operation()
                return RetryResult(
                    success=True, value=value, attempts=attempt + 1, total_delay=total_delay
                )
            except RequestCancelledError as e:
                return RetryResult(
                    success=False, error=e, attempts=attempt + 1, total_delay=total_delay
                )
            except Exception as e:
                if not self.should_retry(e, attempt):
                    return RetryResult(
                        success=False, error=e, attempts=attempt + 1, total_delay=total_delay
                    )

                delay = self.calculate_delay(attempt)
                attempt += 1
                total_delay += delay
                if on_retry:
                    on_retry(attempt, e, delay)

                try:
                    await self._sleep(delay, token)
                except RequestCancelledError as cancelled:
                    return RetryResult(
                        success=False,
                        error=cancelled,
                        attempts=attempt,
                        total_delay=total_delay,
                    )
