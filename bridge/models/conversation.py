"""Conversation-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal


class MenuNode(str, Enum):
    """Menu positions a conversation can be in.

    Values double as the postback payloads that open the node.
    """

    MAIN_MENU = "MAIN_MENU"
    TOUR_PACKAGES = "TOUR_PACKAGES"
    BOOK_TOUR = "BOOK_TOUR"
    CONTACT_US = "CONTACT_US"


TranscriptRole = Literal["user", "bot", "postback"]


@dataclass
class TranscriptEntry:
    """A single turn in a user's conversation."""

    role: TranscriptRole
    text: str
    timestamp: datetime


@dataclass
class ConversationState:
    """Per-user conversation state."""

    user_id: str
    node: MenuNode = MenuNode.MAIN_MENU
    transcript: list[TranscriptEntry] = field(default_factory=list)
