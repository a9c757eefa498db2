"""Tests for Tracker."""

import asyncio
from datetime import datetime, timezone

import pytest

from bridge.tracker import Tracker


class TestTrackerTrack:
    """Tests for Tracker.track()."""

    @pytest.mark.asyncio
    async def test_track_creates_event(self, tracker):
        """Test that track() creates a TraceEvent."""
        await tracker.track("event_received", "dispatch_router", {"user_id": "U1"})

        events = await tracker.get_events()
        assert len(events) == 1
        assert events[0].event_type == "event_received"
        assert events[0].actor == "dispatch_router"
        assert events[0].data == {"user_id": "U1"}
        assert events[0].id
        assert events[0].timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_max_events_keeps_newest(self):
        """Test that old events are evicted."""
        tracker = Tracker(max_events=3)
        for i in range(5):
            await tracker.track("e", "a", {"i": i})

        events = await tracker.get_events()
        assert [e.data["i"] for e in events] == [2, 3, 4]


class TestTrackerQuery:
    """Tests for Tracker.get_events() filters."""

    @pytest.mark.asyncio
    async def test_filter_by_type_and_actor(self, tracker):
        """Test event_types and actor filters."""
        await tracker.track("event_received", "dispatch_router", {})
        await tracker.track("delivery_failed", "delivery_gateway", {})
        await tracker.track("reply_dispatched", "dispatch_router", {})

        by_type = await tracker.get_events(event_types=["delivery_failed"])
        by_actor = await tracker.get_events(actor="dispatch_router")

        assert [e.event_type for e in by_type] == ["delivery_failed"]
        assert [e.event_type for e in by_actor] == ["event_received", "reply_dispatched"]

    @pytest.mark.asyncio
    async def test_filter_after(self, tracker):
        """Test the after filter."""
        await tracker.track("old", "a", {})
        await asyncio.sleep(0.01)
        cutoff = datetime.now(timezone.utc)
        await asyncio.sleep(0.01)
        await tracker.track("new", "a", {})

        events = await tracker.get_events(after=cutoff)
        assert [e.event_type for e in events] == ["new"]

    @pytest.mark.asyncio
    async def test_limit(self, tracker):
        """Test the limit."""
        for _ in range(5):
            await tracker.track("e", "a", {})

        assert len(await tracker.get_events(limit=2)) == 2

    @pytest.mark.asyncio
    async def test_clear(self, tracker):
        """Test that clear drops everything."""
        await tracker.track("e", "a", {})
        await tracker.clear()
        assert await tracker.get_events() == []
