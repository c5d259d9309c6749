"""
Request cancellation control.

A CancelToken is threaded through every client call. Cancelling it (or
letting its deadline pass) aborts the in-flight HTTP request, stops retry
backoff, and closes any open chunk stream. Cancelling the owning asyncio
task has the same effect.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from llm_agents.errors import RequestCancelledError

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")


class CancelReason(str, Enum):
    """Reasons for cancellation."""

    USER_REQUEST = "user_request"
    TIMEOUT = "timeout"


@dataclass
class CancelState:
    """State of a cancellation token.

    Attributes:
        cancelled: Whether cancellation was requested
        reason: Reason for cancellation
        timestamp: Time of cancellation
    """

    cancelled: bool = False
    reason: CancelReason | None = None
    timestamp: float | None = None


class CancelToken:
    """Cancellation token with an optional deadline.

    Example:
        >>> token = CancelToken(timeout=30.0)
        >>> stream = await agent.chat_stream("hi", token=token)
        >>> # from another task
        >>> token.cancel()
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize cancellation token.

        Args:
            timeout: Optional deadline, in seconds from now
        """
        self._state = CancelState()
        self._event = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self, reason: CancelReason = CancelReason.USER_REQUEST) -> bool:
        """Request cancellation.

        Returns:
            True if cancellation was newly requested, False if already cancelled
        """
        if self._state.cancelled:
            return False

        self._state.cancelled = True
        self._state.reason = reason
        self._state.timestamp = time.time()
        self._event.set()
        return True

    def _check_deadline(self) -> None:
        if self._deadline is not None and not self._state.cancelled:
            if time.monotonic() >= self._deadline:
                self.cancel(CancelReason.TIMEOUT)

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested or the deadline passed."""
        self._check_deadline()
        return self._state.cancelled

    @property
    def reason(self) -> CancelReason | None:
        return self._state.reason

    @property
    def state(self) -> CancelState:
        return self._state

    @property
    def remaining(self) -> float | None:
        """Seconds until the deadline, None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    async def wait(self) -> CancelReason:
        """Wait until cancellation is requested or the deadline passes."""
        while not self.is_cancelled:
            remaining = self.remaining
            try:
                await asyncio.wait_for(self._event.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                continue
        return self._state.reason or CancelReason.USER_REQUEST

    async def wait_with_timeout(self, timeout: float) -> bool:
        """Wait for cancellation with a timeout.

        Returns:
            True if cancelled, False if the timeout elapsed first
        """
        try:
            await asyncio.wait_for(self.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return self.is_cancelled

    def raise_if_cancelled(self) -> None:
        """Raise if cancelled.

        Raises:
            RequestCancelledError: If cancellation was requested
        """
        if self.is_cancelled:
            reason = self._state.reason or CancelReason.USER_REQUEST
            message = (
                "request deadline exceeded"
                if reason is CancelReason.TIMEOUT
                else "request cancelled"
            )
            raise RequestCancelledError(message, reason=reason.value)


async def run_cancellable(awaitable: Awaitable[T], token: CancelToken | None) -> T:
    """Await ``awaitable`` unless ``token`` fires first.

    When the token fires, or the calling task is itself cancelled, the
    underlying task is cancelled and awaited so its resources are released
    before the cancellation propagates.

    Raises:
        RequestCancelledError: If the token was or becomes cancelled
    """
    if token is None:
        return await awaitable
    if token.is_cancelled:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        token.raise_if_cancelled()

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        await asyncio.gather(task, waiter, return_exceptions=True)
        raise

    waiter.cancel()
    if task in done:
        await asyncio.gather(waiter, return_exceptions=True)
        return task.result()

    task.cancel()
    await asyncio.gather(task, waiter, return_exceptions=True)
    token.raise_if_cancelled()
    raise RequestCancelledError()
