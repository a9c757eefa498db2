"""Delivery gateway: sends replies through the Messenger Send API."""

import os
from typing import Protocol

import httpx

from ..errors import DeliveryFailure
from ..logging_config import get_logger
from ..models import CardReply, Reply, TextReply
from ..result import Result

logger = get_logger(__name__)

GRAPH_API_URL = "https://graph.facebook.com/{version}/me/messages"


class IDeliveryGateway(Protocol):
    """Transmits replies to the messaging platform."""

    async def send(self, recipient_id: str, reply: Reply) -> Result[str]:
        """Send one reply. Never raises; failures come back as a Result."""
        ...

    async def start(self) -> None:
        ...

    async def stop(self) -> None:
        ...


def to_platform_message(reply: Reply) -> dict:
    """Serialize a reply into a Send API message object."""
    if isinstance(reply, TextReply):
        message: dict = {"text": reply.text}
        if reply.choices:
            message["quick_replies"] = [
                {"content_type": "text", "title": choice.label, "payload": choice.payload}
                for choice in reply.choices
            ]
        return message

    if isinstance(reply, CardReply):
        elements = []
        for item in reply.items:
            element: dict = {"title": item.title, "subtitle": item.subtitle}
            if item.image_ref:
                element["image_url"] = item.image_ref
            buttons = []
            for action in item.actions:
                if action.url:
                    buttons.append({"type": "web_url", "url": action.url, "title": action.title})
                elif action.payload:
                    buttons.append(
                        {"type": "postback", "title": action.title, "payload": action.payload}
                    )
            if buttons:
                element["buttons"] = buttons
            elements.append(element)

        return {
            "attachment": {
                "type": "template",
                "payload": {"template_type": "generic", "elements": elements},
            }
        }

    raise TypeError(f"Unsupported reply type: {type(reply).__name__}")


class GraphDeliveryGateway:
    """At-most-once delivery through the Graph API. No retries."""

    def __init__(
        self,
        page_access_token: str | None = None,
        api_version: str = "v19.0",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._token = page_access_token or os.getenv("PAGE_ACCESS_TOKEN")
        if not self._token:
            raise ValueError("PAGE_ACCESS_TOKEN environment variable not set")

        self._url = GRAPH_API_URL.format(version=api_version)
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True

    async def stop(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send(self, recipient_id: str, reply: Reply) -> Result[str]:
        """Send a reply; log and return a failure instead of raising."""
        try:
            message_id = await self._post(recipient_id, to_platform_message(reply))
        except DeliveryFailure as e:
            logger.error(
                "Delivery to %s failed: %s",
                recipient_id,
                e,
                extra={"user_id": recipient_id, "status_code": e.status_code},
            )
            return Result.failure(str(e), code="delivery_failed")

        logger.info("Message delivered to %s: %s", recipient_id, message_id)
        return Result.success(message_id)

    async def _post(self, recipient_id: str, message: dict) -> str:
        if self._client is None:
            await self.start()

        try:
            response = await self._client.post(
                self._url,
                params={"access_token": self._token},
                json={
                    "recipient": {"id": recipient_id},
                    "messaging_type": "RESPONSE",
                    "message": message,
                },
            )
        except httpx.HTTPError as e:
            raise DeliveryFailure(f"Send API request failed: {e}") from e

        if not response.is_success:
            raise DeliveryFailure(
                f"Send API error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            return ""
        return str(data.get("message_id", "")) if isinstance(data, dict) else ""
