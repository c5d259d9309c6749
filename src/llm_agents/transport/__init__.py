"""传输层：请求编排、取消控制与连接池。

Transport: request orchestration, cancellation and connection pooling.
"""

from llm_agents.transport.cancel import (
    CancelReason,
    CancelState,
    CancelToken,
    run_cancellable,
)
from llm_agents.transport.client import TransportClient
from llm_agents.transport.pool import PoolConfig
from llm_agents.transport.stream import ChunkStream

__all__ = [
    "CancelReason",
    "CancelState",
    "CancelToken",
    "ChunkStream",
    "PoolConfig",
    "TransportClient",
    "run_cancellable",
]
