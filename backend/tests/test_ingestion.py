import json
from pathlib import Path

import pandas as pd

from backend.catalog.data_store import frame_to_entries
from backend.data_ingestion.config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from backend.data_ingestion.ingest import (
    CANONICAL_COLUMNS,
    build_catalog_frame,
    normalize_list,
    run_ingestion,
)


def _write_source(directory: Path, name: str, records: list) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(json.dumps(records))


def test_run_ingestion_creates_non_empty_processed_file(tmp_path: Path):
    """
    End-to-end ingestion of the bundled source lists.

    Uses a temporary output directory so we don't pollute real data directories.
    """
    cfg = IngestionConfig(processed_data_dir=tmp_path / "processed")

    output_path = run_ingestion(config=cfg)

    assert output_path.is_file(), "Processed CSV should be created"

    df = pd.read_csv(output_path)
    assert len(df) == 25
    assert list(df.columns) == CANONICAL_COLUMNS


def test_processed_csv_loads_back_into_entries(tmp_path: Path):
    cfg = IngestionConfig(processed_data_dir=tmp_path / "processed")
    from_csv = frame_to_entries(pd.read_csv(run_ingestion(config=cfg)))
    direct = frame_to_entries(build_catalog_frame(DEFAULT_INGESTION_CONFIG))

    assert [e.id for e in from_csv] == [e.id for e in direct]
    blender = next(e for e in from_csv if e.name == "Blender")
    assert blender.version is None
    assert blender.platforms == ["Windows", "Mac", "Linux"]
    assert "any" in blender.primary_use
    assert [e.price for e in from_csv] == [e.price for e in direct]


def test_ids_are_reissued_and_source_ids_kept():
    df = build_catalog_frame(DEFAULT_INGESTION_CONFIG)
    assert list(df["id"]) == [str(i) for i in range(1, len(df) + 1)]
    revit = df[df["name"] == "Revit"].iloc[0]
    assert revit["source_id"] == 1
    assert revit["source"] == "architectural_cad"


def test_camel_case_fields_are_mapped():
    entries = frame_to_entries(build_catalog_frame(DEFAULT_INGESTION_CONFIG))
    bricscad = next(e for e in entries if e.name == "BricsCAD")
    assert bricscad.price_type == "one-time"
    assert bricscad.website_url
    assert bricscad.best_for


def test_boundary_defaults_for_sparse_records(tmp_path: Path):
    raw = tmp_path / "raw"
    _write_source(raw, "sparse.json", [
        {"id": 1, "name": "Bare"},
        {"id": 2, "name": "Rated", "rating": "4.1/5", "price": 15, "difficulty": 9,
         "platforms": "Windows|Mac", "version": ""},
        {"id": 3, "name": "  "},
    ])
    cfg = IngestionConfig(raw_data_dir=raw, source_files=("sparse.json",))

    entries = frame_to_entries(build_catalog_frame(cfg))

    assert [e.name for e in entries] == ["Bare", "Rated"]
    bare, rated = entries
    assert bare.price is None
    assert bare.price_type == "free"
    assert bare.rating == 0.0
    assert bare.difficulty == 1
    assert bare.features == []
    assert bare.description == ""

    assert rated.rating == 4.1
    assert rated.price_type == "subscription"
    assert rated.difficulty == 4
    assert rated.platforms == ["Windows", "Mac"]
    assert rated.version is None


def test_normalize_list():
    assert normalize_list(["a", " b ", ""]) == ["a", "b"]
    assert normalize_list("x|y") == ["x", "y"]
    assert normalize_list(None) == []
    assert normalize_list(float("nan")) == []
