"""SIM implementation - hardcoded Messenger scenario for local testing."""

import asyncio
import random
import time
from typing import Protocol

import httpx

from bridge.logging_config import get_logger
from bridge.tracker import ITracker

logger = get_logger(__name__)

VIRTUAL_USERS = ["sim_user_001", "sim_user_002", "sim_user_003"]

# ("postback", payload) or ("message", text)
SCENARIO: list[tuple[str, str]] = [
    ("postback", "GET_STARTED"),
    ("message", "Show me your tour packages"),
    ("postback", "BORACAY_PACKAGES"),
    ("postback", "BOOK_WHITE_BEACH"),
    ("message", "What's the weather like in Palawan in March?"),
    ("postback", "XYZ_UNKNOWN"),
    ("message", "How can I contact you?"),
]


class ISim(Protocol):
    """Generate test traffic against the webhook."""

    async def start(self) -> None:
        """Start hardcoded scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


def build_webhook_body(user_id: str, kind: str, value: str) -> dict:
    """Wrap one simulated user action in a Messenger webhook body."""
    item: dict = {
        "sender": {"id": user_id},
        "recipient": {"id": "sim_page"},
        "timestamp": int(time.time() * 1000),
    }
    if kind == "postback":
        item["postback"] = {"title": value, "payload": value}
    else:
        item["message"] = {"mid": f"m_{random.getrandbits(32):x}", "text": value}

    return {"object": "page", "entry": [{"id": "sim_page", "messaging": [item]}]}


class Sim:
    """SIM with hardcoded scenario for testing."""

    def __init__(
        self,
        api_url: str = "http://localhost:3000",
        tracker: ITracker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        delay_range: tuple[float, float] = (1.0, 3.0),
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._transport = transport
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start hardcoded scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(transport=self._transport)

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def wait(self) -> None:
        """Wait for the scenario to finish."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        """Run hardcoded scenario: each step for every user, then the next step."""
        summary = {"user_count": len(VIRTUAL_USERS), "step_count": len(SCENARIO)}
        try:
            if self._tracker:
                await self._tracker.track("sim_started", "sim", summary)

            for kind, value in SCENARIO:
                if not self._running:
                    break

                for user_id in VIRTUAL_USERS:
                    if not self._running:
                        break

                    await self._send_event(user_id, kind, value)
                    await asyncio.sleep(random.uniform(*self._delay_range))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track("sim_completed", "sim", summary)

    async def _send_event(self, user_id: str, kind: str, value: str) -> None:
        """Post one simulated event to the webhook."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/webhook",
                json=build_webhook_body(user_id, kind, value),
                timeout=10.0,
            )

            if response.status_code == 200:
                logger.info("SIM: %s -> %s %s", user_id, kind, value)
            else:
                logger.error("SIM: Webhook returned %s", response.status_code)

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to post event: %s", e)
