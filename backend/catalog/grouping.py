from __future__ import annotations

import re
from typing import Iterable

from .models import CatalogEntry, ScoredEntry, SoftwareGroup


def format_price(amount: float | None) -> str:
    """Render a price as ``$20`` or ``$49.99``."""
    value = float(amount or 0)
    if value.is_integer():
        return f"${int(value)}"
    return f"${value:.2f}"


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def _price_key(entry: CatalogEntry) -> float:
    return entry.price or 0.0


def _build_group(name: str, versions: list[CatalogEntry]) -> SoftwareGroup:
    # sorted() is stable: equal prices keep their input order
    versions = sorted(versions, key=_price_key)
    main = versions[0]

    if len(versions) > 1:
        price_range = (
            f"{format_price(versions[0].price)} - {format_price(versions[-1].price)}"
        )
        difficulties = [v.difficulty for v in versions]
        difficulty_range = f"{min(difficulties)} - {max(difficulties)}"
    else:
        price_range = "Free" if main.is_free else format_price(main.price)
        difficulty_range = str(main.difficulty)

    return SoftwareGroup(
        id=_slug(name),
        name=name,
        description=main.description,
        price_range=price_range,
        difficulty_range=difficulty_range,
        versions=versions,
        main_version=main,
    )


def group_by_name(entries: Iterable[CatalogEntry]) -> list[SoftwareGroup]:
    """
    Cluster entries into software families keyed by their exact name.

    Groups come out in first-seen order; names are compared case-sensitively,
    so "FreeCAD" and "Freecad" form two families.
    """
    buckets: dict[str, list[CatalogEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.name, []).append(entry)
    return [_build_group(name, versions) for name, versions in buckets.items()]


def regroup(items: Iterable[ScoredEntry]) -> list[SoftwareGroup]:
    """Re-derive families from a ranked result; group order follows the ranking."""
    return group_by_name(item.entry for item in items)


def sort_flat(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Browse order: name, then the unversioned entry, then version label."""
    return sorted(
        entries,
        key=lambda e: (
            e.name.casefold(),
            e.version is not None,
            (e.version or "").casefold(),
        ),
    )
