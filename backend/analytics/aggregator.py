from __future__ import annotations

from collections import Counter
from typing import Any

from ..quiz.subscribers import get_subscribers
from .store import EVENT_QUIZ_COMPLETED, EVENT_RECOMMENDATIONS


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == EVENT_RECOMMENDATIONS]
    quizzes = [e for e in events if e["type"] == EVENT_QUIZ_COMPLETED]
    total = len(requests)

    # Average response time
    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Result sizes
    returned = [r.get("results_returned", 0) for r in requests]
    avg_returned = round(sum(returned) / total, 1) if total else 0.0
    empty = sum(1 for n in returned if n == 0)

    # Preferences across every scored answer set
    use_counter: Counter[str] = Counter()
    experience_counter: Counter[str] = Counter()
    budget_counter: Counter[str] = Counter()
    platform_counter: Counter[str] = Counter()
    feature_counter: Counter[str] = Counter()
    for r in requests:
        use_counter[r.get("primary_use", "any")] += 1
        experience_counter[r.get("experience", "beginner")] += 1
        budget_counter[str(int(r.get("budget", 0) or 0))] += 1
        platform_counter[r.get("platform", "any")] += 1
        for f in r.get("features", []) or []:
            feature_counter[f] += 1

    return {
        "total_recommendation_requests": total,
        "total_quiz_completions": len(quizzes),
        "avg_response_time_ms": avg_time,
        "avg_results_returned": avg_returned,
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "top_primary_uses": _top(use_counter),
        "top_platforms": _top(platform_counter),
        "top_features": _top(feature_counter),
        "experience_distribution": dict(experience_counter),
        "budget_distribution": dict(budget_counter),
        "subscribers": len(get_subscribers()),
    }
