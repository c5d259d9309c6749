"""
Agent façade and agent errors.
"""

from llm_agents.agent.agent import Agent
from llm_agents.agent.errors import AgentError, AgentErrorType, client_label

__all__ = ["Agent", "AgentError", "AgentErrorType", "client_label"]
