"""Research assistant controller.

Ties the conversation, the hosted agent and the document registry together
for one UI instance. Questions are single-flight: while an answer is pending,
further submissions are dropped rather than queued.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from knowledge_search.agent.client import AgentClient
from knowledge_search.config import AssistantConfig, get_config
from knowledge_search.conversation.store import ConversationStore
from knowledge_search.documents.registry import DocumentRegistry, documents_from_files
from knowledge_search.models.schemas import (
    AgentResult,
    AgentServiceError,
    AgentSuccess,
    CandidateFile,
    Session,
    Turn,
)
from knowledge_search.notifications import StatusNotifier

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error occurred. Please try again."
AGENT_FAILURE_MESSAGE = "Failed to get response from agent"

STATUS_CLEAR_DELAY = 2.0
UPLOAD_STATUS_CLEAR_DELAY = 3.0


class ClipboardUnavailable(Exception):
    """Raised when a clipboard mechanism cannot be used."""

    pass


class Clipboard(Protocol):
    """Clipboard access for the page.

    write() uses the primary clipboard API; write_legacy() the selection-based
    copy. Both raise ClipboardUnavailable when they cannot copy.
    """

    async def write(self, text: str) -> None: ...

    async def write_legacy(self, text: str) -> None: ...


class ResearchAssistant:
    """State and actions behind the research assistant page.

    Attributes:
        session: Conversation scope sent with every agent call.
        conversation: Transcript of the current conversation.
        documents: Documents uploaded during this UI instance.
        status: Transient status line.
        is_loading: Whether an agent call is pending.
    """

    def __init__(
        self,
        agent_client: AgentClient,
        config: AssistantConfig | None = None,
        clipboard: Clipboard | None = None,
        session: Session | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._config = config or get_config()
        self._agent_client = agent_client
        self._clipboard = clipboard
        self._on_change = on_change
        self._pending: asyncio.Task | None = None
        self._disposed = False

        self.session = session or Session()
        self.conversation = ConversationStore()
        self.documents = DocumentRegistry()
        self.status = StatusNotifier(on_change=self._notify)
        self.is_loading = False

    async def submit_question(self, text: str) -> Turn | None:
        """Ask the agent a question and record both sides of the exchange.

        Args:
            text: The question as typed.

        Returns:
            The assistant turn appended, or None if the submission was dropped.
        """
        question = (text or "").strip()
        if not question or self.is_loading or self._disposed:
            return None

        self.status.clear()
        self.conversation.append_user_turn(question)
        self.is_loading = True
        self._pending = asyncio.current_task()
        self._notify()

        try:
            result = await self._agent_client.ask(
                question,
                self._config.agent_id,
                {"session_id": self.session.session_id},
            )
        except asyncio.CancelledError:
            logger.info("Pending question cancelled")
            raise
        except Exception:
            logger.exception("Agent call raised unexpectedly")
            return self._record_network_error()
        else:
            return self._record_result(result)
        finally:
            self.is_loading = False
            self._pending = None
            self._notify()

    def _record_result(self, result: AgentResult) -> Turn:
        if isinstance(result, AgentSuccess):
            return self.conversation.append_assistant_turn(
                result.result.answer,
                response=result.result,
                metadata=result.metadata,
            )

        if isinstance(result, AgentServiceError):
            self.status.show("Error: Failed to get response")
            return self.conversation.append_assistant_turn(
                result.message or AGENT_FAILURE_MESSAGE
            )

        return self._record_network_error()

    def _record_network_error(self) -> Turn:
        self.status.show("Error: Network error")
        return self.conversation.append_assistant_turn(NETWORK_ERROR_MESSAGE)

    def start_new_conversation(self) -> None:
        """Clear the transcript. The session id is kept."""
        self.conversation.reset()
        self.status.show("Started new conversation", STATUS_CLEAR_DELAY)
        self._notify()

    async def copy_to_clipboard(self, text: str) -> None:
        """Copy text, falling back to the legacy mechanism when needed."""
        if self._clipboard is not None:
            try:
                await self._clipboard.write(text)
            except ClipboardUnavailable:
                try:
                    await self._clipboard.write_legacy(text)
                except ClipboardUnavailable as e:
                    logger.warning(f"Clipboard copy failed: {e}")
        self.status.show("Copied to clipboard", STATUS_CLEAR_DELAY)

    def documents_uploaded(self, files: list[CandidateFile]) -> None:
        """Register files accepted by a successful upload run."""
        self.documents.add(documents_from_files(files))
        self.status.show(
            f"Successfully uploaded {len(files)} document(s)",
            UPLOAD_STATUS_CLEAR_DELAY,
        )
        self._notify()

    def remove_document(self, index: int) -> bool:
        """Forget a document locally. Out-of-range indices are ignored."""
        removed = self.documents.remove_at(index)
        if removed:
            self.status.show("Document removed", STATUS_CLEAR_DELAY)
            self._notify()
        return removed

    def dispose(self) -> None:
        """Tear down: abort a pending agent call and drop the status timer."""
        if self._disposed:
            return
        self._disposed = True
        self.status.cancel()
        pending = self._pending
        if pending is not None and not pending.done():
            pending.cancel()

    def _notify(self) -> None:
        if self._on_change is not None and not self._disposed:
            self._on_change()
