"""
Structured logging for llm-agents.

Loggers accept keyword fields (``logger.info("sent", attempt=2)``), pick up
the request-scoped LogContext, and mask credentials before anything is
written. Until ``AgentsLogger.configure`` is called, records propagate to
the standard ``logging`` hierarchy and the library emits nothing itself.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar

_log_context: ContextVar[LogContext | None] = ContextVar("llm_agents_log_context", default=None)

REDACTED = "***REDACTED***"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass(frozen=True)
class LogContext:
    """Request-scoped logging context.

    Attributes:
        request_id: Identifier of the client call
        agent: Agent name
        provider: Provider name
        model: Model name
        protocol: Protocol of the call
        extra: Additional context fields
    """

    request_id: str | None = None
    agent: str | None = None
    provider: str | None = None
    model: str | None = None
    protocol: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Non-empty fields, extras flattened in."""
        data = {k: v for k, v in asdict(self).items() if k != "extra" and v}
        data.update(self.extra)
        return data

    def with_fields(self, **kwargs: Any) -> LogContext:
        """Copy with known fields replaced and unknown ones added to extra."""
        known = {k: v for k, v in kwargs.items() if k in _CONTEXT_FIELDS}
        extra = {**self.extra, **{k: v for k, v in kwargs.items() if k not in _CONTEXT_FIELDS}}
        current = {k: getattr(self, k) for k in _CONTEXT_FIELDS}
        return LogContext(**{**current, **known}, extra=extra)


_CONTEXT_FIELDS = ("request_id", "agent", "provider", "model", "protocol")


def get_log_context() -> LogContext:
    """Get current logging context."""
    return _log_context.get() or LogContext()


@contextmanager
def log_context(**fields: Any) -> Iterator[LogContext]:
    """Extend the logging context for the duration of a block.

    Example:
        >>> with log_context(provider="ollama", protocol="chat"):
        ...     logger.debug("sending")
    """
    context = get_log_context().with_fields(**fields)
    reset_token = _log_context.set(context)
    try:
        yield context
    finally:
        _log_context.reset(reset_token)


class SensitiveDataMasker:
    """Masks credentials in log messages and fields."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        (r"(Bearer\s+)([^\s\"',]+)", rf"\1{REDACTED}"),
        (r"((?:x-)?api[_-]?key[\"']?\s*[:=]\s*[\"']?)([^\"'\s,}]+)", rf"\1{REDACTED}"),
        (r"(token[\"']?\s*[:=]\s*[\"']?)([^\"'\s,}]+)", rf"\1{REDACTED}"),
        (r"(sk-[a-zA-Z0-9]{20,})", f"sk-{REDACTED}"),
    ]

    SENSITIVE_KEYS: ClassVar[tuple[str, ...]] = ("key", "token", "secret", "password", "auth")

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r) for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask credentials in free text."""
        result = text
        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self.mask(value)
        if isinstance(value, dict):
            return self.mask_dict(value)
        if isinstance(value, list | tuple):
            return [self.mask_value(v) for v in value]
        return value

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask a mapping; values under credential-like keys are replaced."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if any(s in str(key).lower() for s in self.SENSITIVE_KEYS):
                result[key] = REDACTED
            else:
                result[key] = self.mask_value(value)
        return result


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__()
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }

        if context := get_log_context().to_dict():
            log_data["context"] = self._masker.mask_dict(context)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_data.update(self._masker.mask_dict(extra_fields))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """``time | LEVEL | logger | message | k=v ...`` lines."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        result = self._masker.mask(super().format(record))

        fields = dict(get_log_context().to_dict())
        fields.update(getattr(record, "extra_fields", None) or {})
        if fields:
            masked = self._masker.mask_dict(fields)
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in masked.items())
        return result


class AgentsLogger:
    """Logger with keyword fields.

    Example:
        >>> logger = AgentsLogger.get_logger("llm_agents.transport")
        >>> logger.debug("request started", protocol="chat", attempt=1)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _handler: ClassVar[logging.Handler | None] = None
    _level: ClassVar[LogLevel | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "json",
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Send library logs to a stream.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        formatter: logging.Formatter = (
            JsonFormatter(masker=masker) if format == "json" else TextFormatter(masker=masker)
        )
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        handler.setLevel(level.to_logging_level())

        cls._handler = handler
        cls._level = level
        for logger in cls._loggers.values():
            cls._attach(logger)

    @classmethod
    def reset(cls) -> None:
        """Drop the configured handler; records propagate again."""
        cls._handler = None
        cls._level = None
        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(logging.NullHandler())
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    @classmethod
    def _attach(cls, logger: logging.Logger) -> None:
        logger.handlers.clear()
        if cls._handler is None or cls._level is None:
            logger.addHandler(logging.NullHandler())
            logger.propagate = True
            return
        logger.addHandler(cls._handler)
        logger.setLevel(cls._level.to_logging_level())
        logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> AgentsLogger:
        """Get or create a logger."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._attach(logger)
            cls._loggers[name] = logger
        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(level.to_logging_level())

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra, stacklevel=3)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an error with the current traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)


def get_logger(name: str) -> AgentsLogger:
    """Get a logger instance."""
    return AgentsLogger.get_logger(name)
