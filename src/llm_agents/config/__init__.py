"""
Configuration records, durations and file loading.
"""

from llm_agents.config.core import (
    AgentConfig,
    CapabilityConfig,
    ModelConfig,
    ProviderConfig,
    TransportConfig,
)
from llm_agents.config.duration import Duration, format_duration, parse_duration
from llm_agents.config.loader import agent_config_from_dict, load_agent_config

__all__ = [
    "AgentConfig",
    "CapabilityConfig",
    "Duration",
    "ModelConfig",
    "ProviderConfig",
    "TransportConfig",
    "agent_config_from_dict",
    "format_duration",
    "load_agent_config",
    "parse_duration",
]
