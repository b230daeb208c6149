"""Hosted RAG agent client.

Single request/response call per question. Every failure mode is folded into
an AgentResult so callers never handle httpx or pydantic exceptions:

- AgentSuccess: the agent answered with a structured result.
- AgentServiceError: the agent answered with status "error".
- AgentTransportError: network failure, non-2xx, malformed JSON or a payload
  without a readable status or answer. Display-only fields never reject an
  answer; see StructuredAnswer and ResponseMetadata.

No retries happen here. Cancelling the calling task aborts the request.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from knowledge_search.config import AssistantConfig, get_config
from knowledge_search.models.schemas import (
    AgentResponse,
    AgentResult,
    AgentServiceError,
    AgentSuccess,
    AgentTransportError,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_MESSAGE = "Could not get a response from the research agent"


class AgentClient:
    """Client for the hosted agent inference endpoint."""

    def __init__(
        self,
        config: AssistantConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the agent client.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            http_client: Optional shared HTTP client. A short-lived client with
                the configured timeout is opened per call when omitted.
        """
        self._config = config or get_config()
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.agent_api_key:
            headers["x-api-key"] = self._config.agent_api_key
        return headers

    async def _post(self, payload: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(
                self._config.agent_api_url,
                json=payload,
                headers=self._headers(),
                timeout=self._config.agent_timeout,
            )
        async with httpx.AsyncClient(timeout=self._config.agent_timeout) as client:
            return await client.post(
                self._config.agent_api_url,
                json=payload,
                headers=self._headers(),
            )

    async def ask(
        self,
        question: str,
        agent_id: str,
        context: Mapping[str, str],
    ) -> AgentResult:
        """Ask the agent a question within a session.

        Args:
            question: The user's question. Must be non-blank.
            agent_id: Identifier of the agent to invoke.
            context: Conversation context; must carry "session_id".

        Returns:
            AgentSuccess, AgentServiceError or AgentTransportError.

        Raises:
            ValueError: If the question is blank.
        """
        question = question.strip()
        if not question:
            raise ValueError("Question must not be empty")

        payload = {
            "agent_id": agent_id,
            "session_id": context["session_id"],
            "question": question,
        }

        try:
            response = await self._post(payload)
            response.raise_for_status()
            body = _unwrap_envelope(response.json())
            agent_response = AgentResponse.model_validate(body)
        except httpx.HTTPStatusError as e:
            logger.warning(f"Agent call failed with HTTP {e.response.status_code}")
            return AgentTransportError(message=TRANSPORT_ERROR_MESSAGE)
        except httpx.RequestError as e:
            logger.warning(f"Agent call failed: {e!r}")
            return AgentTransportError(message=TRANSPORT_ERROR_MESSAGE)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Agent returned an unreadable response: {e}")
            return AgentTransportError(message=TRANSPORT_ERROR_MESSAGE)

        if agent_response.status == "error":
            logger.info(f"Agent reported an error: {agent_response.message}")
            return AgentServiceError(message=agent_response.message)

        if agent_response.result is None:
            logger.warning("Agent reported success without a result")
            return AgentTransportError(message=TRANSPORT_ERROR_MESSAGE)

        return AgentSuccess(
            result=agent_response.result,
            metadata=agent_response.metadata,
        )


def _unwrap_envelope(body: Any) -> Any:
    """Strip the hosted platform's {"response": ...} wrapper if present.

    The wrapped value may be the agent response itself or a JSON string of it.
    """
    if not isinstance(body, dict) or "status" in body or "response" not in body:
        return body

    inner = body["response"]
    if isinstance(inner, str):
        return json.loads(inner)
    return inner


# Module-level singleton instance
_agent_client: AgentClient | None = None


def get_agent_client() -> AgentClient:
    """Get or create the global agent client.

    Returns:
        The AgentClient instance.
    """
    global _agent_client
    if _agent_client is None:
        _agent_client = AgentClient()
    return _agent_client
