"""Outbound reply data models."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Choice:
    """A quick-reply option offered under a text reply."""

    label: str
    payload: str


@dataclass(frozen=True)
class TextReply:
    """Text with an ordered set of quick-reply choices."""

    text: str
    choices: tuple[Choice, ...] = ()

    @property
    def transcript_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class CardAction:
    """A card button: postback when payload is set, web link when url is set."""

    title: str
    payload: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class CardItem:
    """One card of a carousel."""

    title: str
    subtitle: str
    image_ref: str | None = None
    actions: tuple[CardAction, ...] = ()


@dataclass(frozen=True)
class CardReply:
    """A carousel of cards."""

    items: tuple[CardItem, ...]

    @property
    def transcript_text(self) -> str:
        titles = ", ".join(item.title for item in self.items)
        return f"[cards: {titles}]"


Reply = Union[TextReply, CardReply]


@dataclass
class Effect:
    """A reply the router decided to send to a user."""

    user_id: str
    reply: Reply
