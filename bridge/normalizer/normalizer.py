"""Turns raw webhook payloads into typed events."""

from datetime import datetime, timezone
from typing import Any

from ..errors import MalformedInputError, UnsupportedObjectError
from ..logging_config import get_logger
from ..models import Attachment, Event, MessageEvent, PostbackEvent

logger = get_logger(__name__)


def normalize_payload(payload: Any, expected_object: str = "page") -> list[Event]:
    """
    Convert a decoded webhook body into an ordered list of events.

    Malformed entries and messaging items are dropped and logged; only a
    structurally unusable body or a foreign object type rejects the batch.

    Args:
        payload: Decoded JSON body of the webhook call.
        expected_object: Value the top-level "object" field must have.

    Returns:
        Events in delivery order (possibly empty).

    Raises:
        UnsupportedObjectError: "object" is not expected_object.
        MalformedInputError: Body is not an object or "entry" is not a list.
    """
    if not isinstance(payload, dict):
        raise MalformedInputError("Webhook body must be a JSON object")

    if payload.get("object") != expected_object:
        raise UnsupportedObjectError(payload.get("object"), expected_object)

    entries = payload.get("entry")
    if not isinstance(entries, list):
        raise MalformedInputError("Webhook body has no entry list")

    events: list[Event] = []
    for index, entry in enumerate(entries):
        messaging = entry.get("messaging") if isinstance(entry, dict) else None
        if not isinstance(messaging, list):
            logger.warning("Skipping entry %s without messaging list", index)
            continue

        for item in messaging:
            event = _normalize_item(item)
            if event is not None:
                events.append(event)

    return events


def _normalize_item(item: Any) -> Event | None:
    """Classify one messaging item, or return None to drop it."""
    if not isinstance(item, dict):
        logger.warning("Dropping messaging item that is not an object")
        return None

    sender = item.get("sender")
    sender_id = sender.get("id") if isinstance(sender, dict) else None
    if not sender_id:
        logger.warning("Dropping messaging item without sender id")
        return None
    sender_id = str(sender_id)

    timestamp = _parse_timestamp(item.get("timestamp"))

    # postback first: a button click is never free text
    postback = item.get("postback")
    if isinstance(postback, dict):
        payload = postback.get("payload")
        if not payload:
            logger.warning("Dropping postback without payload from %s", sender_id)
            return None
        return PostbackEvent(
            sender_id=sender_id,
            payload=str(payload),
            title=postback.get("title"),
            timestamp=timestamp,
        )

    message = item.get("message")
    if isinstance(message, dict):
        quick_reply = message.get("quick_reply")
        quick_reply_payload = (
            quick_reply.get("payload") if isinstance(quick_reply, dict) else None
        )
        return MessageEvent(
            sender_id=sender_id,
            timestamp=timestamp,
            text=message.get("text") or None,
            attachments=_parse_attachments(message.get("attachments")),
            quick_reply_payload=quick_reply_payload or None,
        )

    # delivery/read receipts and other notifications
    logger.debug("Ignoring messaging item from %s with no message or postback", sender_id)
    return None


def _parse_attachments(raw: Any) -> list[Attachment]:
    if not isinstance(raw, list):
        return []

    attachments = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        payload = item.get("payload")
        url = payload.get("url") if isinstance(payload, dict) else None
        attachments.append(Attachment(type=str(item.get("type", "file")), url=url))
    return attachments


def _parse_timestamp(raw: Any) -> datetime:
    """Platform timestamps are epoch milliseconds."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("Invalid event timestamp %r, using current time", raw)
    return datetime.now(timezone.utc)
