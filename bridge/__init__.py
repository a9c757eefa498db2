"""Tour webhook bridge."""

from .app import Application, IApplication
from .catalog import ReplyCatalog
from .config import Settings
from .delivery import GraphDeliveryGateway, IDeliveryGateway
from .dispatch import DispatchRouter
from .errors import (
    BridgeError,
    DelegateFailure,
    DeliveryFailure,
    MalformedInputError,
    UnsupportedObjectError,
)
from .llm import (
    ChatCompletionsProvider,
    CompletionDelegate,
    ICompletionDelegate,
    ILLMProvider,
    LLMProvider,
)
from .models import (
    Attachment,
    CardAction,
    CardItem,
    CardReply,
    Choice,
    ConversationState,
    Effect,
    Event,
    MenuNode,
    MessageEvent,
    PostbackEvent,
    Reply,
    TextReply,
    TraceEvent,
    TranscriptEntry,
)
from .normalizer import normalize_payload
from .result import Result
from .store import ConversationStore, IConversationStore
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Attachment",
    "CardAction",
    "CardItem",
    "CardReply",
    "Choice",
    "ConversationState",
    "Effect",
    "Event",
    "MenuNode",
    "MessageEvent",
    "PostbackEvent",
    "Reply",
    "TextReply",
    "TraceEvent",
    "TranscriptEntry",
    "Result",
    # Errors
    "BridgeError",
    "DelegateFailure",
    "DeliveryFailure",
    "MalformedInputError",
    "UnsupportedObjectError",
    # Components
    "normalize_payload",
    "IConversationStore",
    "ConversationStore",
    "ReplyCatalog",
    "DispatchRouter",
    "ILLMProvider",
    "LLMProvider",
    "ChatCompletionsProvider",
    "ICompletionDelegate",
    "CompletionDelegate",
    "IDeliveryGateway",
    "GraphDeliveryGateway",
    "ITracker",
    "Tracker",
]
