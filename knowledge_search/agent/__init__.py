"""Hosted agent access for question answering.

Responsibilities:
    - Sending questions with the session context to the hosted RAG agent
    - Normalizing transport and parsing failures into uniform results

Maintains clean separation from the presentation layer.
"""

from knowledge_search.agent.client import AgentClient, get_agent_client

__all__ = ["AgentClient", "get_agent_client"]
