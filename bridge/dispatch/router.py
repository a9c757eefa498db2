"""DispatchRouter: the per-user menu state machine."""

import asyncio
from datetime import datetime, timezone
from functools import partial
from typing import Callable

from ..catalog import ReplyCatalog
from ..llm import ICompletionDelegate
from ..logging_config import get_logger
from ..models import (
    Effect,
    Event,
    MenuNode,
    MessageEvent,
    PostbackEvent,
    Reply,
    TranscriptEntry,
)
from ..result import Result
from ..store import IConversationStore
from ..tracker import ITracker

logger = get_logger(__name__)

GET_STARTED = "GET_STARTED"

# user_id -> reply; handlers set the next node themselves
PayloadHandler = Callable[[str], Reply]


class DispatchRouter:
    """Decides the reply and next menu node for each inbound event."""

    def __init__(
        self,
        store: IConversationStore,
        catalog: ReplyCatalog,
        delegate: ICompletionDelegate | None = None,
        tracker: ITracker | None = None,
        delegate_timeout: float = 8.0,
    ):
        self._store = store
        self._catalog = catalog
        self._delegate = delegate
        self._tracker = tracker
        self._delegate_timeout = delegate_timeout
        self._payload_handlers = self._build_payload_table()

    def _build_payload_table(self) -> dict[str, PayloadHandler]:
        table: dict[str, PayloadHandler] = {
            payload: partial(self._leaf, payload)
            for payload in self._catalog.leaf_payloads()
        }
        for node in MenuNode:
            table[node.value] = partial(self._enter, node)
        table[GET_STARTED] = self._welcome
        return table

    @property
    def payloads(self) -> list[str]:
        """Payloads with a dedicated handler."""
        return list(self._payload_handlers)

    async def process(self, events: list[Event]) -> list[Effect]:
        """Dispatch a batch of events in order and collect the replies."""
        effects = []
        for event in events:
            reply = await self.dispatch(event)
            if reply is not None:
                effects.append(Effect(user_id=event.sender_id, reply=reply))
        return effects

    async def dispatch(self, event: Event) -> Reply | None:
        """Run one conversation turn. Returns None when there is nothing to answer."""
        user_id = event.sender_id

        async with self._store.lock(user_id):
            if isinstance(event, PostbackEvent):
                reply = await self._handle_postback(event)
            elif isinstance(event, MessageEvent):
                reply = await self._handle_message(event)
            else:
                raise TypeError(f"Unsupported event type: {type(event).__name__}")

            if reply is None:
                return None

            self._store.append_transcript(
                user_id,
                TranscriptEntry(
                    role="bot",
                    text=reply.transcript_text,
                    timestamp=datetime.now(timezone.utc),
                ),
            )
            node = self._store.get(user_id).node

        logger.info(
            "Reply dispatched to %s (node=%s)",
            user_id,
            node.value,
            extra={"user_id": user_id, "node": node.value},
        )
        await self._track(
            "reply_dispatched",
            {"user_id": user_id, "node": node.value, "reply": reply.transcript_text[:100]},
        )
        return reply

    async def _handle_postback(self, event: PostbackEvent) -> Reply:
        user_id = event.sender_id
        self._store.append_transcript(
            user_id,
            TranscriptEntry(role="postback", text=event.payload, timestamp=event.timestamp),
        )
        await self._track(
            "event_received",
            {"user_id": user_id, "kind": "postback", "payload": event.payload},
        )

        handler = self._payload_handlers.get(event.payload)
        if handler is None:
            logger.info(
                "Unknown payload %r from %s, back to main menu",
                event.payload,
                user_id,
                extra={"user_id": user_id, "payload": event.payload},
            )
            self._store.set_node(user_id, MenuNode.MAIN_MENU)
            return self._catalog.fallback_reply()

        return handler(user_id)

    async def _handle_message(self, event: MessageEvent) -> Reply | None:
        user_id = event.sender_id

        # A quick-reply tap is a menu selection; its payload wins over its label.
        payload = event.quick_reply_payload
        if payload and payload in self._payload_handlers:
            self._append_user_entry(event, event.text or payload)
            await self._track(
                "event_received",
                {"user_id": user_id, "kind": "quick_reply", "payload": payload},
            )
            return self._payload_handlers[payload](user_id)

        if event.text:
            history = list(self._store.get(user_id).transcript)
            self._append_user_entry(event, event.text)
            await self._track(
                "event_received",
                {"user_id": user_id, "kind": "text", "text": event.text[:100]},
            )
            return await self._handle_text(user_id, event.text, history)

        if event.attachments:
            kinds = ", ".join(attachment.type for attachment in event.attachments)
            self._append_user_entry(event, f"[attachment: {kinds}]")
            await self._track(
                "event_received",
                {"user_id": user_id, "kind": "attachment", "types": kinds},
            )
            return self._catalog.attachment_reply()

        logger.debug("Ignoring empty message from %s", user_id)
        return None

    async def _handle_text(
        self, user_id: str, text: str, history: list[TranscriptEntry]
    ) -> Reply:
        node = self._store.get(user_id).node

        if node is MenuNode.MAIN_MENU:
            target = self._catalog.classify(text)
            if target is not None:
                return self._enter(target, user_id)

        if self._delegate is None:
            return self._catalog.node_prompt(node)

        result = await self._generate(user_id, text, history)
        if not result.ok:
            await self._track(
                "delegate_failed",
                {"user_id": user_id, "error": result.error, "code": result.error_code},
            )
            return self._catalog.apology_reply()

        return self._catalog.delegate_reply(result.value)

    async def _generate(
        self, user_id: str, text: str, history: list[TranscriptEntry]
    ) -> Result[str]:
        try:
            return await asyncio.wait_for(
                self._delegate.generate(text, history),
                timeout=self._delegate_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Completion for %s timed out after %.1fs", user_id, self._delegate_timeout
            )
            return Result.failure("Completion timed out", code="timeout")
        except Exception as e:
            logger.error(
                "Completion for %s failed: %s",
                user_id,
                e,
                exc_info=True,
                extra={"user_id": user_id},
            )
            return Result.failure(str(e), code="delegate_error")

    def _enter(self, node: MenuNode, user_id: str) -> Reply:
        self._store.set_node(user_id, node)
        return self._catalog.node_prompt(node)

    def _welcome(self, user_id: str) -> Reply:
        self._store.set_node(user_id, MenuNode.MAIN_MENU)
        return self._catalog.welcome_reply()

    def _leaf(self, payload: str, user_id: str) -> Reply:
        return self._catalog.leaf_reply(payload)

    def _append_user_entry(self, event: MessageEvent, text: str) -> None:
        self._store.append_transcript(
            event.sender_id,
            TranscriptEntry(role="user", text=text, timestamp=event.timestamp),
        )

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type, "dispatch_router", data)
