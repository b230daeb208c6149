"""Append-only conversation transcript."""

import logging
import uuid
from collections.abc import Iterator

from knowledge_search.models.schemas import ResponseMetadata, Role, StructuredAnswer, Turn

logger = logging.getLogger(__name__)


class ConversationStore:
    """Ordered log of user and assistant turns for one session.

    Turns are frozen once appended; the only removal is a full reset.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    @staticmethod
    def _new_id(role: Role) -> str:
        return f"{role.value}-{uuid.uuid4().hex}"

    def append_user_turn(self, text: str) -> Turn:
        turn = Turn(id=self._new_id(Role.USER), role=Role.USER, content=text)
        self._turns.append(turn)
        return turn

    def append_assistant_turn(
        self,
        content: str,
        response: StructuredAnswer | None = None,
        metadata: ResponseMetadata | None = None,
    ) -> Turn:
        """Append an assistant turn.

        Used for both structured answers and synthesized error turns; error
        turns carry only the user-facing message as content.
        """
        turn = Turn(
            id=self._new_id(Role.ASSISTANT),
            role=Role.ASSISTANT,
            content=content,
            response=response,
            metadata=metadata,
        )
        self._turns.append(turn)
        return turn

    def reset(self) -> None:
        logger.debug(f"Clearing {len(self._turns)} turns")
        self._turns.clear()

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def is_empty(self) -> bool:
        return not self._turns

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)
