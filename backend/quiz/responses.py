from __future__ import annotations

from pydantic import BaseModel

from ..catalog.models import RecommendationResponse
from .models import QuizState


class QuizStateResponse(BaseModel):
    state: QuizState
    question_id: str
    progress: float
    can_proceed: bool
    results: RecommendationResponse | None = None
