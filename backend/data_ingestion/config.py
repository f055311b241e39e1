"""
Ingestion configuration for the CAD software catalog.
"""

from dataclasses import dataclass, field
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Where the source lists live and where the processed catalog is written.

    Source files are concatenated in the order listed; ids inside them are
    only unique per file.
    """

    raw_data_dir: Path = _DATA_DIR / "raw"
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "catalog.csv"
    source_files: tuple[str, ...] = field(
        default=(
            "cad_versions.json",
            "free_cad.json",
            "professional_cad.json",
            "architectural_cad.json",
            "free_cad_extended.json",
            "cloud_cad.json",
        )
    )

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
