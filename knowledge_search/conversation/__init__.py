"""Conversation transcript for the current session."""

from knowledge_search.conversation.store import ConversationStore

__all__ = ["ConversationStore"]
