from __future__ import annotations

import time
from typing import Any

EVENT_RECOMMENDATIONS = "recommendations"
EVENT_QUIZ_COMPLETED = "quiz_completed"

EVENT_TYPES = (EVENT_RECOMMENDATIONS, EVENT_QUIZ_COMPLETED)

# In-memory only; lost on restart.
_events: list[dict[str, Any]] = []


def record_event(event_type: str, data: dict[str, Any]) -> None:
    """Append one event; *data* is flattened into the event record."""
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type!r}")
    _events.append({
        **data,
        "type": event_type,
        "timestamp": time.time(),
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return list(_events)
    return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
