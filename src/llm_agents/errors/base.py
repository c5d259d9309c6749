"""错误基类：提供分层错误体系和结构化错误上下文。

Base error classes for llm-agents.

Provides a layered error hierarchy:
- AgentsError: Base class for all library errors
- ValidationError: Option / input validation errors
- UnsupportedError: Unknown protocol, format or provider
- TransportError: HTTP/network errors
- RemoteError: Non-200 upstream responses
- DecodeError: Response bodies that cannot be decoded
- RequestCancelledError: Caller cancellation or deadline
- ConfigError: Configuration loading errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    field_path: str | None = None
    """Path to the problematic field (e.g., 'options.images')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'capability', 'provider', 'transport')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class AgentsError(Exception):
    """Base class for all llm-agents errors.

    All errors from this library inherit from this class, making it easy
    to catch all library errors with a single except clause.

    Attributes:
        message: Human-readable error message
        context: Optional structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> AgentsError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class ValidationError(AgentsError):
    """Validation error for options or request inputs.

    Raised when:
    - An option key is not declared by the capability
    - A required option is missing
    - Vision images or tool definitions are malformed
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="validation")
        if field:
            ctx.field_path = field
        if expected is not None:
            ctx.details["expected"] = expected
        if actual is not None:
            ctx.details["actual"] = actual
        super().__init__(message, ctx)
        self.field = field
        self.expected = expected
        self.actual = actual


class UnsupportedError(AgentsError):
    """A protocol, capability format or provider is not available.

    Raised when:
    - A model has no handler for the requested protocol
    - A provider has no endpoint for the requested protocol
    - A capability format or provider name is not registered
    - Streaming is requested for a protocol that cannot stream
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        name: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="unsupported")
        if name:
            ctx.details["name"] = name
        super().__init__(message, ctx)
        self.name = name


class TransportError(AgentsError):
    """Error during HTTP transport.

    Raised when:
    - Network connection failure
    - Timeout
    - SSL/TLS errors
    - Read failure while consuming a streaming body
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        super().__init__(message, ctx)
        self.url = url
        self.__cause__ = cause


class RemoteError(AgentsError):
    """Non-200 response from the upstream service.

    Attributes:
        status_code: HTTP status code
        body: Raw response body text
        retryable: Whether the status is transient
        provider: Name of the provider that received the response
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        provider: str | None = None,
    ) -> None:
        from llm_agents.errors.classification import is_retryable_status

        ctx = ErrorContext(source="remote")
        ctx.details["status_code"] = status_code
        if provider:
            ctx.details["provider"] = provider

        self.status_code = status_code
        self.body = body
        self.provider = provider
        self.retryable = is_retryable_status(status_code)
        ctx.details["retryable"] = self.retryable

        super().__init__(message, ctx)

    @classmethod
    def from_status(
        cls,
        status_code: int,
        body: str = "",
        *,
        provider: str | None = None,
    ) -> RemoteError:
        """Create a RemoteError in the ``status N: <body>`` form."""
        label = f"provider '{provider}' " if provider else ""
        return cls(
            f"{label}request failed with status {status_code}: {body}".strip(),
            status_code=status_code,
            body=body,
            provider=provider,
        )


class DecodeError(AgentsError):
    """A response body could not be decoded into the protocol's response shape."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        capability: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="decode")
        if capability:
            ctx.details["capability"] = capability
        super().__init__(message, ctx)
        self.capability = capability
        self.__cause__ = cause


class RequestCancelledError(AgentsError):
    """The caller cancelled the request or its deadline elapsed."""

    def __init__(
        self,
        message: str = "request cancelled",
        context: ErrorContext | None = None,
        *,
        reason: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="cancellation")
        if reason:
            ctx.details["reason"] = reason
        super().__init__(message, ctx)
        self.reason = reason


class ConfigError(AgentsError):
    """Configuration could not be read, parsed or validated."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        path: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="config")
        if path:
            ctx.details["path"] = path
        super().__init__(message, ctx)
        self.path = path
