from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

EXPERIENCE_LEVELS: dict[str, int] = {
    "beginner": 1,
    "intermediate": 2,
    "advanced": 3,
    "professional": 4,
}

# Budget option meaning "no budget constraint".
NO_BUDGET_LIMIT = 10000


class QuizAnswers(BaseModel):
    """Answers collected so far; any field may still be missing."""

    primary_use: str | None = None
    experience: str | None = None
    budget: float | None = Field(default=None, ge=0.0)
    platform: str | None = None
    features: list[str] | None = None

    def finalize(self) -> "QuizResult":
        experience = self.experience or "beginner"
        return QuizResult(
            primary_use=self.primary_use or "any",
            experience=experience,
            budget=self.budget or 0,
            platform=self.platform or "any",
            features=list(self.features or []),
            experience_level=EXPERIENCE_LEVELS.get(experience, 1),
        )


class QuizResult(BaseModel):
    primary_use: str = "any"
    experience: str = "beginner"
    budget: float = Field(default=0.0, ge=0.0)
    platform: str = "any"
    features: list[str] = Field(default_factory=list)
    experience_level: int = Field(default=1, ge=1, le=4)


class QuizActionType(str, Enum):
    select = "select"
    next = "next"
    prev = "prev"
    reset = "reset"


class QuizAction(BaseModel):
    type: QuizActionType
    question_id: str | None = None
    value: str | float | None = None


class QuizState(BaseModel):
    step: int = 0
    answers: QuizAnswers = Field(default_factory=QuizAnswers)
    completed: bool = False
    result: QuizResult | None = None


class SubscribeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SubscribeResponse(BaseModel):
    status: str
    total_subscribers: int
