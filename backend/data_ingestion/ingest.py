from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "source_id",
    "source",
    "name",
    "version",
    "description",
    "rating",
    "price",
    "price_type",
    "difficulty",
    "categories",
    "platforms",
    "features",
    "primary_use",
    "pros",
    "cons",
    "best_for",
    "image_url",
    "website_url",
    "is_active",
]

LIST_COLUMNS: List[str] = [
    "categories",
    "platforms",
    "features",
    "primary_use",
    "pros",
    "cons",
    "best_for",
]

# Separator for list columns in the processed CSV.
LIST_SEPARATOR = "|"

_PRICE_TYPES = {"subscription", "one-time", "free"}


def _is_missing(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _normalize_price(price: Any) -> float | None:
    if _is_missing(price):
        return None
    try:
        value = float(price)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def _normalize_rating(rating: Any) -> float:
    if _is_missing(rating):
        return 0.0
    raw = str(rating).strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(5.0, value))


def _normalize_difficulty(difficulty: Any) -> int:
    if _is_missing(difficulty):
        return 1
    try:
        value = int(float(difficulty))
    except (TypeError, ValueError):
        return 1
    return max(1, min(4, value))


def _normalize_price_type(price_type: Any, price: float | None) -> str:
    if isinstance(price_type, str) and price_type.strip().lower() in _PRICE_TYPES:
        return price_type.strip().lower()
    return "free" if _is_missing(price) or not price else "subscription"


def normalize_list(value: Any) -> list[str]:
    """Coerce a list column (list, separated string or missing) to a list of strings."""
    if isinstance(value, (list, tuple)):
        items = value
    elif _is_missing(value):
        return []
    else:
        items = str(value).split(LIST_SEPARATOR)
    return [str(item).strip() for item in items if str(item).strip()]


def _optional_str(value: Any) -> str | None:
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


def _read_source(path: Path) -> pd.DataFrame:
    df = pd.read_json(path, orient="records", convert_dates=False)
    df["source"] = path.stem
    return df


def build_catalog_frame(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> pd.DataFrame:
    """
    Concatenate the source lists into the canonical catalog frame.

    List columns hold Python lists; ``id`` is re-issued so it is unique
    across all sources while ``source_id`` keeps the authored id.
    """
    frames = [_read_source(config.raw_data_dir / name) for name in config.source_files]
    df = pd.concat(frames, ignore_index=True)

    # Source lists are authored in camelCase; admin exports use snake_case.
    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    col_id = _first_present(["id", "source_id"])
    col_price_type = _first_present(["price_type", "priceType"])
    col_primary_use = _first_present(["primary_use", "primaryUse"])
    col_best_for = _first_present(["best_for", "bestFor"])
    col_image = _first_present(["image_url", "imageUrl"])
    col_website = _first_present(["website_url", "websiteUrl"])

    def _column(col: str | None) -> pd.Series:
        if col and col in df.columns:
            return df[col]
        return pd.Series([None] * len(df), index=df.index, dtype=object)

    canonical = pd.DataFrame(index=df.index)
    canonical["id"] = (df.index + 1).astype(str)
    canonical["source_id"] = pd.to_numeric(_column(col_id), errors="coerce").astype("Int64")
    canonical["source"] = df["source"]
    canonical["name"] = _column("name").fillna("").astype(str).str.strip()
    canonical["version"] = _column("version").apply(_optional_str)
    canonical["description"] = _column("description").fillna("").astype(str)
    canonical["rating"] = _column("rating").apply(_normalize_rating)
    canonical["price"] = _column("price").apply(_normalize_price)
    canonical["price_type"] = [
        _normalize_price_type(pt, price)
        for pt, price in zip(_column(col_price_type), canonical["price"])
    ]
    canonical["difficulty"] = _column("difficulty").apply(_normalize_difficulty)

    sources = {
        "categories": "categories",
        "platforms": "platforms",
        "features": "features",
        "primary_use": col_primary_use,
        "pros": "pros",
        "cons": "cons",
        "best_for": col_best_for,
    }
    for column, source_col in sources.items():
        canonical[column] = _column(source_col).apply(normalize_list)

    canonical["image_url"] = _column(col_image).apply(_optional_str)
    canonical["website_url"] = _column(col_website).apply(_optional_str)
    canonical["is_active"] = _column("is_active").apply(
        lambda v: True if _is_missing(v) else bool(v)
    )

    dropped = canonical["name"] == ""
    if dropped.any():
        logger.warning("Dropping %d catalog rows without a name", int(dropped.sum()))
        canonical = canonical.loc[~dropped]

    return canonical[CANONICAL_COLUMNS]


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Read and concatenate the source lists.
    - Map raw fields into the canonical catalog schema.
    - Persist the cleaned catalog as CSV, list columns joined by ``|``.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    canonical = build_catalog_frame(config).copy()
    for column in LIST_COLUMNS:
        canonical[column] = canonical[column].apply(LIST_SEPARATOR.join)

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d catalog rows to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")
