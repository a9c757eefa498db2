"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bridge.result import Result  # noqa: E402


@pytest.fixture
def store():
    """Create an empty conversation store."""
    from bridge.store import ConversationStore

    return ConversationStore()


@pytest.fixture
def catalog():
    """Create the default reply catalog."""
    from bridge.catalog import ReplyCatalog

    return ReplyCatalog.default()


@pytest.fixture
def tracker():
    """Create in-memory tracker."""
    from bridge.tracker import Tracker

    return Tracker()


@pytest.fixture
def mock_delegate():
    """Create mock completion delegate that always answers."""
    delegate = Mock()
    delegate.generate = AsyncMock(return_value=Result.success("Generated answer"))
    delegate.close = AsyncMock()
    return delegate


@pytest.fixture
def failing_delegate():
    """Create mock completion delegate that always fails."""
    delegate = Mock()
    delegate.generate = AsyncMock(
        return_value=Result.failure("upstream 500", code="delegate_error")
    )
    delegate.close = AsyncMock()
    return delegate


@pytest.fixture
def router(store, catalog, tracker):
    """Create DispatchRouter without a delegate."""
    from bridge.dispatch import DispatchRouter

    return DispatchRouter(store=store, catalog=catalog, tracker=tracker)


@pytest.fixture
def delegating_router(store, catalog, tracker, mock_delegate):
    """Create DispatchRouter backed by the mock delegate."""
    from bridge.dispatch import DispatchRouter

    return DispatchRouter(
        store=store, catalog=catalog, delegate=mock_delegate, tracker=tracker
    )


@pytest.fixture
def mock_gateway():
    """Create mock delivery gateway that always succeeds."""
    gateway = Mock()
    gateway.send = AsyncMock(return_value=Result.success("mid.1"))
    gateway.start = AsyncMock()
    gateway.stop = AsyncMock()
    return gateway


@pytest.fixture
def settings():
    """Settings for tests (no real credentials)."""
    from bridge.config import Settings

    return Settings(verify_token="test-verify-token", page_access_token="test-page-token")


@pytest_asyncio.fixture
async def application(settings, mock_gateway):
    """Create and start an Application with a mock gateway."""
    from bridge.app import Application

    app = Application(settings=settings, delivery_gateway=mock_gateway)
    await app.start()
    yield app
    await app.stop()


def message_body(sender_id: str, text: str, timestamp: int = 1000) -> dict:
    """Webhook body with one text message."""
    return {
        "object": "page",
        "entry": [
            {
                "messaging": [
                    {"sender": {"id": sender_id}, "message": {"text": text}, "timestamp": timestamp}
                ]
            }
        ],
    }


def postback_body(sender_id: str, payload: str, timestamp: int = 1000) -> dict:
    """Webhook body with one postback."""
    return {
        "object": "page",
        "entry": [
            {
                "messaging": [
                    {
                        "sender": {"id": sender_id},
                        "postback": {"payload": payload},
                        "timestamp": timestamp,
                    }
                ]
            }
        ],
    }
