from __future__ import annotations

from typing import Iterable

from ..quiz.models import QuizResult
from .config import DEFAULT_SCORING_WEIGHTS, ScoringWeights
from .models import CatalogEntry, ScoredEntry


def _budget_score(price: float | None, budget: float, w: ScoringWeights) -> float:
    if price is None:
        return 0.0
    if price == 0 and budget == 0:
        return w.budget
    # budget == 0 with a paid entry falls through to the penalty
    if budget > 0 and price <= budget:
        return w.budget - (price / budget) * w.budget_ratio_span
    return w.over_budget_penalty


def _primary_use_score(entry: CatalogEntry, primary_use: str, w: ScoringWeights) -> float:
    if primary_use in entry.primary_use:
        return w.primary_use
    if primary_use == "any" or "any" in entry.primary_use:
        return w.primary_use_any
    return 0.0


def _experience_score(difficulty: int, experience_level: int, w: ScoringWeights) -> float:
    diff = abs(difficulty - experience_level)
    if diff < len(w.experience):
        return w.experience[diff]
    return 0.0


def _platform_score(platforms: list[str], platform: str, w: ScoringWeights) -> float:
    wanted = platform.lower()
    if wanted == "any" or any(wanted in p.lower() for p in platforms):
        return w.platform
    return 0.0


def _feature_score(features: list[str], wanted: list[str], w: ScoringWeights) -> float:
    if not wanted:
        return 0.0
    entry_features = [f.lower() for f in features]
    matches = sum(
        1 for feature in wanted
        if any(feature.lower() in ef for ef in entry_features)
    )
    return matches / len(wanted) * w.features


def score_entry(
    entry: CatalogEntry,
    result: QuizResult,
    weights: ScoringWeights | None = None,
) -> float:
    """Compute the heuristic match score of one catalog entry."""
    w = weights or DEFAULT_SCORING_WEIGHTS
    return (
        _budget_score(entry.price, result.budget, w)
        + _primary_use_score(entry, result.primary_use, w)
        + _experience_score(entry.difficulty, result.experience_level, w)
        + _platform_score(entry.platforms, result.platform, w)
        + _feature_score(entry.features, result.features, w)
        + entry.rating
    )


def _over_ceiling(entry: CatalogEntry, budget: float, w: ScoringWeights) -> bool:
    if budget <= 0 or entry.price is None:
        return False
    return entry.price > budget * w.budget_ceiling_multiplier


def score_entries(
    entries: Iterable[CatalogEntry],
    result: QuizResult,
    weights: ScoringWeights | None = None,
) -> list[ScoredEntry]:
    """
    Score every entry, drop non-matches and rank the rest.

    Entries priced above the budget ceiling or scoring below the threshold
    are dropped. The sort is stable, so equal scores keep input order.
    """
    w = weights or DEFAULT_SCORING_WEIGHTS
    scored = [
        ScoredEntry(entry=entry, score=score_entry(entry, result, w))
        for entry in entries
        if not _over_ceiling(entry, result.budget, w)
    ]
    kept = [s for s in scored if s.score >= w.min_score]
    return sorted(kept, key=lambda s: s.score, reverse=True)
