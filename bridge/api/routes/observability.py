"""Observability API routes."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


class TranscriptEntryResponse(BaseModel):
    """Response model for one transcript entry."""

    role: str
    text: str
    timestamp: datetime


class ConversationResponse(BaseModel):
    """Response model for a user's conversation."""

    user_id: str
    node: str
    transcript: list[TranscriptEntryResponse]


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid after timestamp format")
            if after_dt.tzinfo is None:
                after_dt = after_dt.replace(tzinfo=timezone.utc)

        event_types = [event_type] if event_type else None

        events = await app.tracker.get_events(
            after=after_dt,
            event_types=event_types,
            actor=actor,
            limit=limit,
        )

        return [
            {
                "id": e.id,
                "event_type": e.event_type,
                "actor": e.actor,
                "data": e.data,
                "timestamp": e.timestamp,
            }
            for e in events
        ]

    @router.get("/conversations/{user_id}", response_model=ConversationResponse)
    async def get_conversation(user_id: str) -> dict:
        """Current node and transcript of one user."""
        if user_id not in app.store.user_ids():
            raise HTTPException(status_code=404, detail="Unknown user")

        state = app.store.get(user_id)
        return {
            "user_id": state.user_id,
            "node": state.node.value,
            "transcript": [
                {"role": entry.role, "text": entry.text, "timestamp": entry.timestamp}
                for entry in state.transcript
            ],
        }

    return router
