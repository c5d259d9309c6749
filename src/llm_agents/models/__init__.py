"""
Models: protocol handlers and option merging.
"""

from llm_agents.models.handler import ProtocolHandler
from llm_agents.models.model import Model

__all__ = ["Model", "ProtocolHandler"]
