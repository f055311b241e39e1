"""
Quiz recommendation pipeline.

Responsibilities:
- Finalize quiz answers and score the active catalog against them.
- Optionally re-derive software families from the ranked entries.
- Attach LLM reasons without changing the ranking.
- Record a search event for the admin analytics.
"""
from __future__ import annotations

import time

from ..analytics.store import EVENT_RECOMMENDATIONS, record_event
from ..llm.groq_client import explain_recommendations
from ..quiz.models import QuizResult
from .data_store import get_catalog
from .grouping import regroup
from .models import (
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
    ScoredEntry,
)
from .scoring import score_entries


def _candidate_dict(item: ScoredEntry) -> dict:
    entry = item.entry
    return {
        "id": entry.id,
        "name": entry.name,
        "version": entry.version,
        "price": entry.price,
        "difficulty": entry.difficulty,
        "rating": entry.rating,
        "platforms": entry.platforms,
    }


def recommend(
    result: QuizResult,
    grouped: bool = False,
    limit: int | None = None,
    explain: bool = False,
) -> RecommendationResponse:
    start_time = time.time()

    entries = get_catalog(include_inactive=False)
    ranked = score_entries(entries, result)
    total_candidates = len(ranked)
    if limit:
        ranked = ranked[:limit]

    reasons: dict[str, str] = {}
    if explain and ranked:
        reasons = explain_recommendations(
            result.model_dump(), [_candidate_dict(s) for s in ranked],
        )

    items = [
        RecommendationItem(
            software=s.entry,
            score=round(s.score, 4),
            reason=reasons.get(s.entry.id),
        )
        for s in ranked
    ]

    response = RecommendationResponse(
        recommendations=items,
        groups=regroup(ranked) if grouped else None,
        total_candidates=total_candidates,
    )

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event(EVENT_RECOMMENDATIONS, {
        **result.model_dump(),
        "grouped": grouped,
        "total_candidates": total_candidates,
        "results_returned": len(items),
        "response_time_ms": elapsed_ms,
    })

    return response


def get_recommendations(request: RecommendationRequest) -> RecommendationResponse:
    return recommend(
        request.finalize(),
        grouped=request.grouped,
        limit=request.limit,
        explain=request.explain,
    )
