from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringWeights:
    """
    Product-tuning constants for the quiz recommendation heuristic.
    """

    budget: float = 30.0
    budget_ratio_span: float = 10.0
    over_budget_penalty: float = -20.0
    primary_use: float = 25.0
    primary_use_any: float = 15.0
    # Indexed by |difficulty - experience_level|; larger gaps score 0.
    experience: tuple[float, ...] = (20.0, 15.0, 5.0)
    platform: float = 10.0
    features: float = 10.0
    min_score: float = 10.0
    budget_ceiling_multiplier: float = 2.0


DEFAULT_SCORING_WEIGHTS = ScoringWeights()
