from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.analytics.aggregator import compute_analytics
from backend.analytics.store import EVENT_QUIZ_COMPLETED, EVENT_RECOMMENDATIONS, clear_events, record_event
from backend.app import app
from backend.catalog.data_store import reset_catalog
from backend.quiz.subscribers import clear_subscribers, record_subscription

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def test_analytics_returns_empty_initially():
    clear_events()
    clear_subscribers()
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_recommendation_requests"] == 0
    assert body["total_quiz_completions"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["empty_result_rate"] == 0.0
    assert body["subscribers"] == 0


def test_analytics_tracks_recommendation_request():
    reset_catalog()
    clear_events()
    client.post("/recommendations", json={"primary_use": "architectural", "budget": 500})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_recommendation_requests"] == 1
    assert body["avg_response_time_ms"] >= 0
    assert body["avg_results_returned"] > 0
    assert any(use["name"] == "architectural" for use in body["top_primary_uses"])
    assert body["budget_distribution"] == {"500": 1}


def test_analytics_tracks_multiple_requests():
    reset_catalog()
    clear_events()
    client.post("/recommendations", json={"primary_use": "mechanical"})
    client.post("/recommendations", json={"primary_use": "jewelry"})
    client.post("/recommendations", json={"primary_use": "mechanical"})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_recommendation_requests"] == 3
    assert body["top_primary_uses"][0] == {"name": "mechanical", "count": 2}


def test_compute_analytics_aggregates_preferences():
    events = [
        {"type": EVENT_RECOMMENDATIONS, "primary_use": "mechanical", "experience": "beginner",
         "budget": 50.0, "platform": "windows", "features": ["parametric", "simulation"],
         "results_returned": 4, "response_time_ms": 10.0},
        {"type": EVENT_RECOMMENDATIONS, "primary_use": "mechanical", "experience": "advanced",
         "budget": 0.0, "platform": "mac", "features": ["parametric"],
         "results_returned": 0, "response_time_ms": 20.0},
        {"type": EVENT_QUIZ_COMPLETED, "primary_use": "mechanical"},
    ]
    clear_subscribers()
    body = compute_analytics(events)

    assert body["total_recommendation_requests"] == 2
    assert body["total_quiz_completions"] == 1
    assert body["avg_response_time_ms"] == 15.0
    assert body["avg_results_returned"] == 2.0
    assert body["empty_result_rate"] == 50.0
    assert body["top_features"][0] == {"name": "parametric", "count": 2}
    assert body["experience_distribution"] == {"beginner": 1, "advanced": 1}
    assert body["budget_distribution"] == {"50": 1, "0": 1}
    assert {p["name"] for p in body["top_platforms"]} == {"windows", "mac"}


def test_analytics_counts_subscribers():
    clear_events()
    clear_subscribers()
    record_subscription("a@example.com")
    record_subscription("b@example.com")
    record_event(EVENT_QUIZ_COMPLETED, {"primary_use": "any"})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["subscribers"] == 2
    assert body["total_quiz_completions"] == 1
    clear_subscribers()
    clear_events()


def test_record_event_rejects_unknown_type():
    with pytest.raises(ValueError):
        record_event("page_view", {})
