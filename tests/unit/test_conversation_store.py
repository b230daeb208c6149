"""Unit tests for ConversationStore."""

import pytest
from pydantic import ValidationError

from knowledge_search.conversation.store import ConversationStore
from knowledge_search.models.schemas import ResponseMetadata, Role, StructuredAnswer


class TestConversationStore:
    """Test suite for ConversationStore."""

    @pytest.fixture
    def store(self) -> ConversationStore:
        """Create an empty store."""
        return ConversationStore()

    def test_new_store_is_empty(self, store: ConversationStore) -> None:
        """A fresh store has no turns."""
        assert store.is_empty
        assert len(store) == 0
        assert store.turns == ()

    def test_turns_keep_append_order(self, store: ConversationStore) -> None:
        """Turns come back in the order they were appended."""
        store.append_user_turn("first")
        store.append_assistant_turn("second")
        store.append_user_turn("third")

        assert [t.content for t in store] == ["first", "second", "third"]
        assert [t.role for t in store] == [Role.USER, Role.ASSISTANT, Role.USER]

    def test_turn_ids_are_unique_and_role_prefixed(self, store: ConversationStore) -> None:
        """Every turn gets its own id."""
        user = store.append_user_turn("q")
        assistant = store.append_assistant_turn("a")
        again = store.append_user_turn("q")

        assert user.id.startswith("user-")
        assert assistant.id.startswith("assistant-")
        assert len({user.id, assistant.id, again.id}) == 3

    def test_assistant_turn_carries_structured_answer(self, store: ConversationStore) -> None:
        """Structured answers and metadata are kept on the turn."""
        answer = StructuredAnswer(answer="A", confidence=0.5)
        metadata = ResponseMetadata(agent_name="agent", documents_searched=2)

        turn = store.append_assistant_turn("A", response=answer, metadata=metadata)

        assert turn.response == answer
        assert turn.metadata == metadata

    def test_error_turn_has_no_response(self, store: ConversationStore) -> None:
        """Synthesized error turns carry only content."""
        turn = store.append_assistant_turn("Network error occurred. Please try again.")

        assert turn.response is None
        assert turn.metadata is None

    def test_turns_are_immutable(self, store: ConversationStore) -> None:
        """Appended turns cannot be modified."""
        turn = store.append_user_turn("q")

        with pytest.raises(ValidationError):
            turn.content = "changed"

    def test_turns_view_is_a_snapshot(self, store: ConversationStore) -> None:
        """The turns view cannot be used to mutate the store."""
        store.append_user_turn("q")
        snapshot = store.turns

        store.append_user_turn("r")

        assert len(snapshot) == 1
        assert len(store) == 2

    def test_reset_clears_all_turns(self, store: ConversationStore) -> None:
        """reset empties the transcript and appending starts over."""
        store.append_user_turn("q")
        store.append_assistant_turn("a")

        store.reset()
        store.append_user_turn("fresh")

        assert [t.content for t in store] == ["fresh"]
