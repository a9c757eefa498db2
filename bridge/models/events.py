"""Inbound event data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass
class Attachment:
    """An attachment sent by a user (image, video, audio, file...)."""

    type: str  # "image", "video", "audio", "file", "location"...
    url: str | None = None


@dataclass
class MessageEvent:
    """A user typed a message, tapped a quick reply or sent an attachment."""

    sender_id: str
    timestamp: datetime
    text: str | None = None
    attachments: list[Attachment] = field(default_factory=list)
    quick_reply_payload: str | None = None


@dataclass
class PostbackEvent:
    """A user clicked a postback button."""

    sender_id: str
    payload: str
    timestamp: datetime
    title: str | None = None


Event = Union[MessageEvent, PostbackEvent]
