"""Conversation store module."""

from .store import ConversationStore, IConversationStore

__all__ = ["ConversationStore", "IConversationStore"]
