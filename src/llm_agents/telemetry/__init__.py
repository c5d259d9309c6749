"""
Telemetry: structured logging and health tracking.
"""

from llm_agents.telemetry.health import HealthSnapshot, HealthStatus, HealthTracker
from llm_agents.telemetry.logger import (
    AgentsLogger,
    JsonFormatter,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    TextFormatter,
    get_log_context,
    get_logger,
    log_context,
)

__all__ = [
    # Logging
    "AgentsLogger",
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_log_context",
    "get_logger",
    "log_context",
    # Health
    "HealthSnapshot",
    "HealthStatus",
    "HealthTracker",
]
