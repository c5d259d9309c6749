"""错误分类模块：将异常映射到六种行为类别并判定是否可重试。

Error classification for the request pipeline.

Maps exceptions raised anywhere in the pipeline onto the six behavioral
kinds the transport client reasons about when deciding whether to retry.
"""

from __future__ import annotations

import asyncio
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    """Behavioral error kind."""

    VALIDATION = "validation"
    """Unknown option, missing required option, malformed vision/tools input."""

    UNSUPPORTED = "unsupported"
    """Unknown protocol, capability format or provider."""

    TRANSPORT = "transport"
    """DNS/TCP/TLS failure, connection or request timeout."""

    UPSTREAM_STATUS = "upstream_status"
    """Non-200 response from the upstream service."""

    DECODE = "decode"
    """Response body could not be decoded."""

    CANCELLATION = "cancellation"
    """Caller cancelled or the deadline elapsed."""

    @property
    def marks_unhealthy(self) -> bool:
        """Whether an error of this kind flips the client to unhealthy."""
        return self in (ErrorKind.TRANSPORT, ErrorKind.UPSTREAM_STATUS, ErrorKind.DECODE)


RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 502, 503, 504})


def is_retryable_status(status_code: int) -> bool:
    """Check whether an HTTP status is transient.

    Args:
        status_code: HTTP status code

    Returns:
        True for 429, 502, 503 and 504
    """
    return status_code in RETRYABLE_STATUS_CODES


def classify_error(exc: BaseException) -> ErrorKind:
    """Classify an exception into a behavioral error kind.

    Library errors map directly. Raw ``httpx`` transport errors are treated
    as transport failures and ``asyncio.CancelledError`` as cancellation.
    Anything else is treated as a validation failure, which is terminal.

    Args:
        exc: Exception to classify

    Returns:
        ErrorKind for the exception
    """
    from llm_agents.errors.base import (
        DecodeError,
        RemoteError,
        RequestCancelledError,
        TransportError,
        UnsupportedError,
    )

    if isinstance(exc, RequestCancelledError | asyncio.CancelledError):
        return ErrorKind.CANCELLATION
    if isinstance(exc, TransportError | httpx.TransportError):
        return ErrorKind.TRANSPORT
    if isinstance(exc, RemoteError):
        return ErrorKind.UPSTREAM_STATUS
    if isinstance(exc, DecodeError):
        return ErrorKind.DECODE
    if isinstance(exc, UnsupportedError):
        return ErrorKind.UNSUPPORTED
    return ErrorKind.VALIDATION


def is_retryable(exc: BaseException) -> bool:
    """Check whether a failed attempt should be retried.

    Transport failures are always retryable. Upstream status errors are
    retryable only for 429, 502, 503 and 504. Everything else is terminal.

    Args:
        exc: Exception raised by the attempt

    Returns:
        True if the attempt may be retried
    """
    kind = classify_error(exc)
    if kind == ErrorKind.TRANSPORT:
        return True
    if kind == ErrorKind.UPSTREAM_STATUS:
        return bool(getattr(exc, "retryable", False))
    return False
