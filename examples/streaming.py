#!/usr/bin/env python3
"""
Streaming response example.

Streams a story chunk by chunk and stops it after a deadline.

Usage:
    python examples/streaming.py
"""

import asyncio
from pathlib import Path

from llm_agents import Agent, CancelToken


async def main() -> None:
    """Run streaming example."""
    async with Agent.from_config(Path(__file__).with_name("agent.yaml")) as agent:
        print("Streaming response:\n")
        print("-" * 50)

        token = CancelToken(timeout=20.0)
        async with await agent.chat_stream(
            "Tell me a very short story about a robot learning to paint.",
            {"max_tokens": 300},
            token=token,
        ) as stream:
            async for chunk in stream:
                if chunk.error is not None:
                    print(f"\n\n[Error: {chunk.error}]")
                    break
                print(chunk.content, end="", flush=True)

        if stream.cancelled:
            print("\n\n[Stopped at deadline]")
        print(f"\n{'-' * 50}\nChunks received: {stream.chunk_count}")


if __name__ == "__main__":
    asyncio.run(main())
