"""
Quiz state transitions.

The quiz is a pure reducer: ``reduce(state, action)`` never mutates *state*
and returns the next state. The API keeps the serialized state in the
session and derives recommendations from ``state.result`` once the quiz
completes.
"""
from __future__ import annotations

from .models import QuizAction, QuizActionType, QuizAnswers, QuizState
from .questions import QUESTIONS, QUESTIONS_BY_ID


def initial_state(previous: QuizAnswers | None = None) -> QuizState:
    """Start a quiz, pre-filled with the answers of a previous run if any."""
    answers = previous.model_copy(deep=True) if previous else QuizAnswers()
    return QuizState(answers=answers)


def current_question_id(state: QuizState) -> str:
    return QUESTIONS[min(state.step, len(QUESTIONS) - 1)].id


def can_proceed(state: QuizState) -> bool:
    question = QUESTIONS[state.step]
    answer = getattr(state.answers, question.id)
    if question.multiple:
        return bool(answer)
    return answer is not None


def progress(state: QuizState) -> float:
    if state.completed:
        return 100.0
    return round((state.step + 1) / len(QUESTIONS) * 100, 1)


def _select(state: QuizState, action: QuizAction) -> QuizState:
    question = QUESTIONS_BY_ID.get(action.question_id or "")
    if question is None:
        raise ValueError(f"Unknown question: {action.question_id!r}")
    value = question.option_value(action.value)
    if value is None:
        raise ValueError(f"Invalid option {action.value!r} for {question.id}")

    if question.multiple:
        current = list(getattr(state.answers, question.id) or [])
        if value in current:
            current.remove(value)
        else:
            current.append(value)
        new_value = current
    else:
        new_value = value

    answers = state.answers.model_copy(update={question.id: new_value})
    return state.model_copy(update={"answers": answers})


def _next(state: QuizState) -> QuizState:
    if not can_proceed(state):
        raise ValueError(f"Question {current_question_id(state)!r} needs an answer")
    if state.step < len(QUESTIONS) - 1:
        return state.model_copy(update={"step": state.step + 1})
    return state.model_copy(
        update={"completed": True, "result": state.answers.finalize()}
    )


def reduce(state: QuizState, action: QuizAction) -> QuizState:
    """Apply one quiz action and return the resulting state."""
    if action.type == QuizActionType.reset:
        return initial_state(state.answers if state.completed else None)
    if state.completed:
        raise ValueError("Quiz already completed; reset to start again")
    if action.type == QuizActionType.select:
        return _select(state, action)
    if action.type == QuizActionType.next:
        return _next(state)
    if action.type == QuizActionType.prev:
        return state.model_copy(update={"step": max(0, state.step - 1)})
    raise ValueError(f"Unsupported action: {action.type}")
