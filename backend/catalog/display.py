from __future__ import annotations

from typing import Iterable

from .grouping import format_price
from .models import CatalogEntry, CompareResponse, CompareRow, TrendingItem

DIFFICULTY_LABELS = {1: "Beginner", 2: "Intermediate", 3: "Advanced", 4: "Expert"}

MAX_COMPARE = 3


def price_display(price: float | None, price_type: str) -> str:
    if not price:
        return "Free"
    if price_type == "one-time":
        return f"{format_price(price)} one-time"
    return f"{format_price(price)}/month"


def difficulty_label(difficulty: int) -> str:
    return DIFFICULTY_LABELS.get(difficulty, "Unknown")


def trending(entries: Iterable[CatalogEntry], limit: int = 5) -> list[TrendingItem]:
    """Top-rated active entries; stands in for interaction-based trending."""
    active = [e for e in entries if e.is_active]
    top = sorted(active, key=lambda e: e.rating, reverse=True)[:limit]
    return [
        TrendingItem(
            id=e.id,
            name=e.name,
            version=e.version,
            rating=e.rating,
            price_display=price_display(e.price, e.price_type),
        )
        for e in top
    ]


def compare(entries: list[CatalogEntry]) -> CompareResponse:
    """Side-by-side view of up to three entries with a shared feature matrix."""
    if len(entries) > MAX_COMPARE:
        raise ValueError(f"At most {MAX_COMPARE} entries can be compared")

    features: list[str] = []
    for entry in entries:
        for feature in entry.features:
            if feature not in features:
                features.append(feature)

    rows = [
        CompareRow(
            id=e.id,
            name=e.name,
            version=e.version,
            price_display=price_display(e.price, e.price_type),
            difficulty_label=difficulty_label(e.difficulty),
            rating=e.rating,
            platforms=e.platforms,
            website_url=e.website_url,
            feature_support={f: f in e.features for f in features},
        )
        for e in entries
    ]
    return CompareResponse(features=features, software=rows)


def catalog_metadata(entries: Iterable[CatalogEntry]) -> dict[str, list[str]]:
    categories: set[str] = set()
    platforms: set[str] = set()
    uses: set[str] = set()
    for entry in entries:
        categories.update(entry.categories)
        platforms.update(entry.platforms)
        uses.update(entry.primary_use)
    return {
        "categories": sorted(categories),
        "platforms": sorted(platforms),
        "primary_uses": sorted(uses),
    }


def filter_entries(
    entries: Iterable[CatalogEntry],
    category: str | None = None,
    platform: str | None = None,
) -> list[CatalogEntry]:
    result = [e for e in entries if e.is_active]
    if category:
        wanted = category.lower()
        result = [e for e in result if any(c.lower() == wanted for c in e.categories)]
    if platform:
        wanted = platform.lower()
        result = [e for e in result if any(wanted in p.lower() for p in e.platforms)]
    return result
