"""错误体系：提供请求管线的结构化错误类型与分类。

Error hierarchy for llm-agents.
"""

from llm_agents.errors.base import (
    AgentsError,
    ConfigError,
    DecodeError,
    ErrorContext,
    RemoteError,
    RequestCancelledError,
    TransportError,
    UnsupportedError,
    ValidationError,
)
from llm_agents.errors.classification import (
    RETRYABLE_STATUS_CODES,
    ErrorKind,
    classify_error,
    is_retryable,
    is_retryable_status,
)

__all__ = [
    # Base errors
    "AgentsError",
    "ConfigError",
    "DecodeError",
    "ErrorContext",
    "RemoteError",
    "RequestCancelledError",
    "TransportError",
    "UnsupportedError",
    "ValidationError",
    # Classification
    "ErrorKind",
    "RETRYABLE_STATUS_CODES",
    "classify_error",
    "is_retryable",
    "is_retryable_status",
]
