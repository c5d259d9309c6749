"""
Resilience patterns for the transport client.
"""

from llm_agents.resilience.retry import RetryConfig, RetryPolicy, RetryResult

__all__ = [
    "RetryConfig",
    "RetryPolicy",
    "RetryResult",
]
