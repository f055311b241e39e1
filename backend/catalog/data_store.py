from __future__ import annotations

import logging
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
from ..data_ingestion.ingest import LIST_COLUMNS, build_catalog_frame, normalize_list
from .exceptions import CatalogUnavailableError, EntryNotFoundError
from .models import CatalogEntry, CatalogEntryBase, CatalogEntryUpdate
from .samples import SAMPLE_ENTRIES

logger = logging.getLogger(__name__)

_entries: list[CatalogEntry] | None = None
_next_id: int = 1


def _load_frame() -> pd.DataFrame:
    processed = DEFAULT_INGESTION_CONFIG.processed_path
    if processed.exists():
        return pd.read_csv(processed)
    return build_catalog_frame(DEFAULT_INGESTION_CONFIG)


def _clean(value: Any) -> Any:
    if isinstance(value, list):
        return value
    try:
        return None if pd.isna(value) else value
    except (TypeError, ValueError):
        return value


def frame_to_entries(df: pd.DataFrame) -> list[CatalogEntry]:
    """Validate canonical catalog rows into ``CatalogEntry`` records."""
    entries: list[CatalogEntry] = []
    for record in df.to_dict(orient="records"):
        row = {key: _clean(value) for key, value in record.items()}
        for column in LIST_COLUMNS:
            row[column] = normalize_list(row.get(column))
        row["id"] = str(row["id"])
        if row.get("source_id") is not None:
            row["source_id"] = int(row["source_id"])
        entries.append(CatalogEntry.model_validate(row))
    return entries


def _load() -> list[CatalogEntry]:
    global _next_id
    try:
        entries = frame_to_entries(_load_frame())
    except (OSError, ValueError, KeyError) as exc:
        # pydantic's ValidationError is a ValueError
        logger.error("Failed to load catalog: %s", exc)
        raise CatalogUnavailableError("Catalog unavailable") from exc

    numeric_ids = [int(e.id) for e in entries if e.id.isdigit()]
    _next_id = max(numeric_ids, default=0) + 1
    logger.info("Loaded %d catalog entries", len(entries))
    return entries


def _catalog() -> list[CatalogEntry]:
    global _entries
    if _entries is None:
        _entries = _load()
    return _entries


def get_catalog(include_inactive: bool = True) -> list[CatalogEntry]:
    """Return the in-memory catalog, loading it on first call."""
    entries = list(_catalog())
    if include_inactive:
        return entries
    return [e for e in entries if e.is_active]


def get_entry(entry_id: str) -> CatalogEntry:
    for entry in _catalog():
        if entry.id == entry_id:
            return entry
    raise EntryNotFoundError(entry_id)


def create_entry(data: CatalogEntryBase) -> CatalogEntry:
    global _next_id
    entries = _catalog()
    entry = CatalogEntry(**data.model_dump(), id=str(_next_id))
    _next_id += 1
    entries.append(entry)
    logger.info("Created catalog entry %s (%s)", entry.id, entry.name)
    return entry


def update_entry(entry_id: str, changes: CatalogEntryUpdate) -> CatalogEntry:
    entries = _catalog()
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            update = changes.model_dump(exclude_unset=True)
            merged = {**entry.model_dump(), **update}
            if "price" in update and "price_type" not in update:
                # Re-derive when the entry flips between free and paid
                if (not update["price"]) != (entry.price_type == "free"):
                    merged.pop("price_type")
            updated = CatalogEntry.model_validate(merged)
            entries[index] = updated
            logger.info("Updated catalog entry %s", entry_id)
            return updated
    raise EntryNotFoundError(entry_id)


def delete_entry(entry_id: str) -> None:
    entries = _catalog()
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            del entries[index]
            logger.info("Deleted catalog entry %s", entry_id)
            return
    raise EntryNotFoundError(entry_id)


def seed_sample_entries() -> int:
    """Add the sample entries missing from the catalog; returns how many were added."""
    present = {(e.name, e.version) for e in _catalog()}
    added = 0
    for sample in SAMPLE_ENTRIES:
        try:
            data = CatalogEntryBase.model_validate(sample)
        except ValidationError:
            logger.warning("Skipping invalid sample entry %r", sample.get("name"), exc_info=True)
            continue
        if (data.name, data.version) in present:
            continue
        create_entry(data)
        present.add((data.name, data.version))
        added += 1
    return added


def reset_catalog() -> None:
    """Drop in-memory edits; the next access reloads from the source."""
    global _entries, _next_id
    _entries = None
    _next_id = 1
