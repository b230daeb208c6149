"""Pytest fixtures and shared test configuration.

Fixtures:
    - config: Assistant configuration with instant indexing and display delays
    - mock_session_id: Consistent session ID for tests
    - agent_response_body: Successful agent payload
    - async_client: HTTPX client for the FastAPI host
    - wait_until: Polls the event loop until a condition holds
    - mock_http: Factory for HTTPX clients backed by a MockTransport handler
"""

import asyncio
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient, MockTransport, Request

from knowledge_search.api import app
from knowledge_search.config import AssistantConfig
from knowledge_search.models.schemas import CandidateFile


@pytest.fixture
def config() -> AssistantConfig:
    """Return configuration pointing at fake endpoints with no waiting.

    Returns:
        AssistantConfig safe to use without network access.
    """
    return AssistantConfig(
        agent_api_url="https://agent.test/v3/inference/chat/",
        agent_id="agent-test",
        agent_api_key="test-key",
        rag_base_url="https://rag.test",
        rag_id="rag-test",
        rag_upload_url=None,
        agent_timeout=5.0,
        upload_timeout=5.0,
        indexing_delay=0.0,
        success_display_delay=0.0,
    )


@pytest.fixture
def mock_session_id() -> str:
    """Generate consistent session ID for testing.

    Returns:
        Predictable session ID for test assertions.
    """
    return "test-session-12345"


@pytest.fixture
def agent_response_body() -> dict[str, Any]:
    """Return a successful agent response payload."""
    return {
        "status": "success",
        "result": {
            "answer": "Findings X, Y, Z",
            "sources": [{"document_name": "a.pdf", "excerpt": "..."}],
            "confidence": 0.82,
            "context_maintained": True,
            "follow_up_suggestions": ["Tell me more about X"],
        },
        "metadata": {
            "agent_name": "Research Agent",
            "timestamp": "2026-01-15T10:30:00Z",
            "documents_searched": 3,
            "retrieval_method": "semantic_search",
        },
    }


@pytest.fixture
def pdf_file() -> Callable[[str], CandidateFile]:
    """Return a factory for small PDF candidate files."""

    def make(name: str) -> CandidateFile:
        return CandidateFile(
            name=name,
            content_type="application/pdf",
            content=b"%PDF-1.4 " + name.encode(),
        )

    return make


@pytest.fixture
def wait_until() -> Callable[[Callable[[], bool]], Awaitable[None]]:
    """Return a helper that yields to the event loop until a condition holds."""

    async def wait(predicate: Callable[[], bool], attempts: int = 200) -> None:
        for _ in range(attempts):
            if predicate():
                return
            await asyncio.sleep(0)
        raise AssertionError("Condition not reached")

    return wait


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the FastAPI host.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def mock_http() -> AsyncGenerator[Callable[[Callable[[Request], Any]], AsyncClient]]:
    """Return a factory for HTTPX clients served by a MockTransport handler.

    Yields:
        Factory taking a request handler. Every client it creates is closed
        when the test finishes.
    """
    clients: list[AsyncClient] = []

    def make(handler: Callable[[Request], Any]) -> AsyncClient:
        client = AsyncClient(transport=MockTransport(handler))
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.aclose()
