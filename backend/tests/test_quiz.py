from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.analytics.store import EVENT_QUIZ_COMPLETED, clear_events, get_events
from backend.app import app
from backend.catalog.data_store import reset_catalog
from backend.quiz.models import NO_BUDGET_LIMIT, QuizAction, QuizAnswers, QuizState
from backend.quiz.questions import QUESTIONS
from backend.quiz.reducer import can_proceed, initial_state, progress, reduce
from backend.quiz.subscribers import clear_subscribers, get_subscribers

ANSWERS = [
    ("primary_use", "mechanical"),
    ("experience", "intermediate"),
    ("budget", 200),
    ("platform", "windows"),
    ("features", "parametric"),
]


def _select(question_id, value) -> QuizAction:
    return QuizAction(type="select", question_id=question_id, value=value)


def _complete(state: QuizState) -> QuizState:
    for question_id, value in ANSWERS:
        state = reduce(state, _select(question_id, value))
        state = reduce(state, QuizAction(type="next"))
    return state


# ── Reducer ──────────────────────────────────────────────────────────────


def test_initial_state_is_empty():
    state = initial_state()
    assert state.step == 0
    assert state.completed is False
    assert state.answers == QuizAnswers()
    assert progress(state) == 20.0
    assert can_proceed(state) is False


def test_select_does_not_mutate_previous_state():
    state = initial_state()
    new_state = reduce(state, _select("primary_use", "jewelry"))
    assert state.answers.primary_use is None
    assert new_state.answers.primary_use == "jewelry"
    assert can_proceed(new_state) is True


def test_next_requires_an_answer():
    with pytest.raises(ValueError):
        reduce(initial_state(), QuizAction(type="next"))


def test_select_rejects_unknown_question_and_option():
    with pytest.raises(ValueError):
        reduce(initial_state(), _select("colour", "red"))
    with pytest.raises(ValueError):
        reduce(initial_state(), _select("platform", "amiga"))


def test_budget_options_accept_numbers_and_strings():
    state = reduce(initial_state(), _select("budget", "500"))
    assert state.answers.budget == 500
    state = reduce(state, _select("budget", 0))
    assert state.answers.budget == 0


def test_multi_select_toggles_features():
    state = initial_state()
    state = reduce(state, _select("features", "rendering"))
    state = reduce(state, _select("features", "assembly"))
    assert state.answers.features == ["rendering", "assembly"]
    state = reduce(state, _select("features", "rendering"))
    assert state.answers.features == ["assembly"]


def test_prev_is_clamped_at_first_question():
    state = reduce(initial_state(), QuizAction(type="prev"))
    assert state.step == 0


def test_prev_keeps_answers():
    state = reduce(initial_state(), _select("primary_use", "industrial"))
    state = reduce(state, QuizAction(type="next"))
    state = reduce(state, QuizAction(type="prev"))
    assert state.step == 0
    assert state.answers.primary_use == "industrial"


def test_completing_the_quiz_finalizes_result():
    state = _complete(initial_state())
    assert state.completed is True
    assert progress(state) == 100.0
    assert state.result.primary_use == "mechanical"
    assert state.result.experience_level == 2
    assert state.result.budget == 200
    assert state.result.features == ["parametric"]


def test_completed_quiz_rejects_further_actions():
    state = _complete(initial_state())
    with pytest.raises(ValueError):
        reduce(state, QuizAction(type="next"))


def test_reset_after_completion_prefills_answers():
    done = _complete(initial_state())
    state = reduce(done, QuizAction(type="reset"))
    assert state.step == 0
    assert state.completed is False
    assert state.result is None
    assert state.answers == done.answers


def test_reset_midway_starts_empty():
    state = reduce(initial_state(), _select("primary_use", "jewelry"))
    state = reduce(state, QuizAction(type="reset"))
    assert state.answers == QuizAnswers()


def test_finalize_applies_defaults():
    result = QuizAnswers().finalize()
    assert result.primary_use == "any"
    assert result.experience == "beginner"
    assert result.experience_level == 1
    assert result.budget == 0
    assert result.platform == "any"
    assert result.features == []


def test_unknown_experience_maps_to_beginner_level():
    assert QuizAnswers(experience="wizard").finalize().experience_level == 1


def test_question_set():
    assert [q.id for q in QUESTIONS] == [
        "primary_use", "experience", "budget", "platform", "features",
    ]
    budget = QUESTIONS[2]
    assert budget.options[0].value == 0
    assert budget.options[-1].value == NO_BUDGET_LIMIT
    assert QUESTIONS[-1].multiple is True


# ── API flow ─────────────────────────────────────────────────────────────


def _run_quiz(c):
    resp = None
    for question_id, value in ANSWERS:
        c.post("/quiz/action", json={"type": "select", "question_id": question_id, "value": value})
        resp = c.post("/quiz/action", json={"type": "next"})
    return resp


def test_quiz_questions_endpoint():
    c = TestClient(app)
    body = c.get("/quiz/questions").json()
    assert len(body) == 5
    assert body[0]["id"] == "primary_use"
    assert {"value", "label", "description"} <= set(body[0]["options"][0])


def test_quiz_state_starts_fresh():
    c = TestClient(app)
    body = c.get("/quiz/state").json()
    assert body["question_id"] == "primary_use"
    assert body["state"]["step"] == 0
    assert body["can_proceed"] is False
    assert body["results"] is None


def test_quiz_state_survives_between_requests():
    c = TestClient(app)
    c.post("/quiz/action", json={"type": "select", "question_id": "primary_use", "value": "mechanical"})
    c.post("/quiz/action", json={"type": "next"})
    body = c.get("/quiz/state").json()
    assert body["question_id"] == "experience"
    assert body["state"]["answers"]["primary_use"] == "mechanical"


def test_quiz_invalid_action_returns_400():
    c = TestClient(app)
    resp = c.post("/quiz/action", json={"type": "next"})
    assert resp.status_code == 400
    resp = c.post("/quiz/action", json={"type": "select", "question_id": "budget", "value": 7})
    assert resp.status_code == 400


def test_quiz_completion_returns_recommendations():
    reset_catalog()
    clear_events()
    c = TestClient(app)
    resp = _run_quiz(c)
    assert resp.status_code == 200
    body = resp.json()
    assert body["state"]["completed"] is True
    assert body["progress"] == 100.0
    results = body["results"]
    assert results is not None
    assert len(results["recommendations"]) > 0
    for item in results["recommendations"]:
        assert item["score"] >= 10
        price = item["software"]["price"]
        assert price is None or price <= 400

    completions = get_events(EVENT_QUIZ_COMPLETED)
    assert len(completions) == 1
    assert completions[0]["primary_use"] == "mechanical"
    clear_events()


def test_quiz_reset_prefills_previous_answers():
    c = TestClient(app)
    _run_quiz(c)
    body = c.post("/quiz/action", json={"type": "reset"}).json()
    assert body["state"]["completed"] is False
    assert body["state"]["step"] == 0
    assert body["state"]["answers"]["platform"] == "windows"
    assert body["can_proceed"] is True


def test_quiz_subscribe_stores_email_with_result():
    clear_subscribers()
    c = TestClient(app)
    _run_quiz(c)
    resp = c.post("/quiz/subscribe", json={"email": "Maker@Example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "subscribed", "total_subscribers": 1}

    # Same address again is not duplicated
    c.post("/quiz/subscribe", json={"email": "maker@example.com"})
    subscribers = get_subscribers()
    assert len(subscribers) == 1
    assert subscribers[0]["email"] == "maker@example.com"
    assert subscribers[0]["result"]["primary_use"] == "mechanical"
    clear_subscribers()


def test_quiz_subscribe_without_quiz_has_no_result():
    clear_subscribers()
    c = TestClient(app)
    c.post("/quiz/subscribe", json={"email": "early@example.org"})
    assert get_subscribers()[0]["result"] is None
    clear_subscribers()


def test_quiz_subscribe_rejects_bad_email():
    c = TestClient(app)
    resp = c.post("/quiz/subscribe", json={"email": "not-an-email"})
    assert resp.status_code == 422
