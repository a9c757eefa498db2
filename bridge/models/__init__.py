"""Core data models for the webhook bridge."""

from .conversation import ConversationState, MenuNode, TranscriptEntry
from .events import Attachment, Event, MessageEvent, PostbackEvent
from .replies import CardAction, CardItem, CardReply, Choice, Effect, Reply, TextReply
from .tracing import TraceEvent

__all__ = [
    # Conversation
    "ConversationState",
    "MenuNode",
    "TranscriptEntry",
    # Events
    "Attachment",
    "Event",
    "MessageEvent",
    "PostbackEvent",
    # Replies
    "CardAction",
    "CardItem",
    "CardReply",
    "Choice",
    "Effect",
    "Reply",
    "TextReply",
    # Tracing
    "TraceEvent",
]
