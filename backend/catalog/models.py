from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..quiz.models import QuizAnswers

PriceType = Literal["subscription", "one-time", "free"]
PRICE_TYPES = ("subscription", "one-time", "free")

_LIST_FIELDS = (
    "categories",
    "platforms",
    "features",
    "primary_use",
    "pros",
    "cons",
    "best_for",
)


def _finite_or_none(value: Any) -> Any:
    """Treat NaN and infinities as a missing value."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class CatalogEntryBase(BaseModel):
    """Editable fields of one software version, with boundary defaults applied."""

    name: str = Field(..., min_length=1)
    version: str | None = None
    description: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    price: float | None = Field(default=None, ge=0.0)
    price_type: PriceType = "free"
    difficulty: int = Field(default=1, ge=1, le=4)
    categories: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    primary_use: list[str] = Field(default_factory=list)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    best_for: list[str] = Field(default_factory=list)
    image_url: str | None = None
    website_url: str | None = None
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in _LIST_FIELDS:
            if data.get(key) is None:
                data[key] = []
        if "price" in data:
            data["price"] = _finite_or_none(data["price"])
        if data.get("description") is None:
            data["description"] = ""
        version = data.get("version")
        if version is not None:
            # CSV round trips turn numeric versions ("2024") into numbers
            data["version"] = str(version).strip() or None
        if data.get("price_type") not in PRICE_TYPES:
            price = data.get("price")
            data["price_type"] = "free" if not price else "subscription"
        return data

    @field_validator("rating", mode="before")
    @classmethod
    def _clamp_rating(cls, value: Any) -> float:
        if value is None:
            return 0.0
        rating = float(value)
        if not math.isfinite(rating):
            return 0.0
        return max(0.0, min(5.0, rating))

    @field_validator("difficulty", mode="before")
    @classmethod
    def _clamp_difficulty(cls, value: Any) -> int:
        if value is None:
            return 1
        return max(1, min(4, int(value)))


class CatalogEntry(CatalogEntryBase):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    source_id: int | None = None

    @property
    def is_free(self) -> bool:
        return not self.price


class CatalogEntryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    version: str | None = None
    description: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    price: float | None = Field(default=None, ge=0.0)
    price_type: PriceType | None = None
    difficulty: int | None = Field(default=None, ge=1, le=4)
    categories: list[str] | None = None
    platforms: list[str] | None = None
    features: list[str] | None = None
    primary_use: list[str] | None = None
    pros: list[str] | None = None
    cons: list[str] | None = None
    best_for: list[str] | None = None
    image_url: str | None = None
    website_url: str | None = None
    is_active: bool | None = None

    @field_validator("rating", "price", mode="before")
    @classmethod
    def _drop_non_finite(cls, value: Any) -> Any:
        return _finite_or_none(value)


class SoftwareGroup(BaseModel):
    id: str
    name: str
    description: str
    price_range: str
    difficulty_range: str
    versions: list[CatalogEntry]
    main_version: CatalogEntry


class ScoredEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: CatalogEntry
    score: float


class RecommendationRequest(QuizAnswers):
    grouped: bool = False
    limit: int | None = Field(default=None, ge=1, le=100)
    explain: bool = False


class RecommendationItem(BaseModel):
    software: CatalogEntry
    score: float
    reason: str | None = None


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    groups: list[SoftwareGroup] | None = None
    total_candidates: int


class CatalogListResponse(BaseModel):
    software: list[CatalogEntry] = Field(default_factory=list)
    groups: list[SoftwareGroup] | None = None
    total: int


class TrendingItem(BaseModel):
    id: str
    name: str
    version: str | None = None
    rating: float
    price_display: str


class CompareRow(BaseModel):
    id: str
    name: str
    version: str | None = None
    price_display: str
    difficulty_label: str
    rating: float
    platforms: list[str]
    website_url: str | None = None
    feature_support: dict[str, bool]


class CompareResponse(BaseModel):
    features: list[str]
    software: list[CompareRow]


class SeedResponse(BaseModel):
    added: int
    total: int
