#!/usr/bin/env python3
"""
Basic chat example.

Loads an agent from a YAML file and asks a question against a local
Ollama server.

Usage:
    ollama pull llama3.2
    python examples/basic_chat.py
"""

import asyncio
from pathlib import Path

from llm_agents import Agent, AgentsError
from llm_agents.telemetry import AgentsLogger, LogLevel


async def main() -> None:
    """Run basic chat example."""
    AgentsLogger.configure(level=LogLevel.INFO, format="text")

    async with Agent.from_config(Path(__file__).with_name("agent.yaml")) as agent:
        try:
            response = await agent.chat("What is the capital of France?")
        except AgentsError as e:
            print(f"Request failed: {e}")
            return

        print(f"Response: {response.content}")
        print(f"Finish reason: {response.finish_reason}")
        if response.usage:
            print(f"Tokens: {response.usage.total_tokens}")

        embeddings = await agent.embed(["Paris", "Lyon"])
        print(f"Embedding sizes: {[len(v) for v in embeddings.vectors]}")
        print(f"Client health: {agent.client.health.to_dict()}")


if __name__ == "__main__":
    asyncio.run(main())
