"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single operator-facing record of something the bridge did."""

    id: str
    event_type: str  # e.g. "event_received", "reply_dispatched"
    actor: str  # component that recorded it
    data: dict
    timestamp: datetime
