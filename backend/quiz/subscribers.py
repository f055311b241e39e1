from __future__ import annotations

import time
from typing import Any

from .models import QuizResult

_subscribers: list[dict[str, Any]] = []


def record_subscription(email: str, result: QuizResult | None = None) -> None:
    """Store an email address with the quiz result it was captured after."""
    normalized = email.strip().lower()
    for sub in _subscribers:
        if sub["email"] == normalized:
            sub["result"] = result.model_dump() if result else sub["result"]
            sub["timestamp"] = time.time()
            return
    _subscribers.append({
        "email": normalized,
        "result": result.model_dump() if result else None,
        "timestamp": time.time(),
    })


def get_subscribers() -> list[dict[str, Any]]:
    return _subscribers


def clear_subscribers() -> None:
    _subscribers.clear()
