"""In-memory conversation store."""

import asyncio
from typing import Protocol

from ..models import ConversationState, MenuNode, TranscriptEntry


class IConversationStore(Protocol):
    """Per-user conversation state, keyed by platform user id."""

    def get(self, user_id: str) -> ConversationState:
        """Return the user's state, creating a fresh MAIN_MENU state if absent."""
        ...

    def append_transcript(self, user_id: str, entry: TranscriptEntry) -> None:
        """Append a transcript entry."""
        ...

    def set_node(self, user_id: str, node: MenuNode) -> None:
        """Move the user to a menu node."""
        ...

    def lock(self, user_id: str) -> asyncio.Lock:
        """Lock guarding one user's read-modify-write turn."""
        ...

    def user_ids(self) -> list[str]:
        """Ids of all known users."""
        ...

    def clear(self) -> None:
        """Forget all conversations."""
        ...


class ConversationStore:
    """Process-lifetime conversation store. Nothing is persisted."""

    def __init__(self):
        self._states: dict[str, ConversationState] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, user_id: str) -> ConversationState:
        state = self._states.get(user_id)
        if state is None:
            state = ConversationState(user_id=user_id)
            self._states[user_id] = state
        return state

    def append_transcript(self, user_id: str, entry: TranscriptEntry) -> None:
        self.get(user_id).transcript.append(entry)

    def set_node(self, user_id: str, node: MenuNode) -> None:
        self.get(user_id).node = MenuNode(node)

    def lock(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def user_ids(self) -> list[str]:
        return list(self._states)

    def clear(self) -> None:
        self._states.clear()
        # A turn still in flight keeps its lock so the next event waits for it
        self._locks = {
            user_id: lock for user_id, lock in self._locks.items() if lock.locked()
        }
