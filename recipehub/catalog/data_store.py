from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import RecipeCreate
from .store import CatalogStore

logger = logging.getLogger(__name__)

LIST_COLUMNS = ["tags", "prerequisites", "toolstack"]
OPTIONAL_COLUMNS = ["demo_link", "thumbnail"]


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def read_seed_frame(path: Path) -> pd.DataFrame:
    """Read the seed CSV and parse its comma-joined list columns."""
    df = pd.read_csv(path, dtype={"featured": str})

    for col in LIST_COLUMNS:
        df[col] = df[col].fillna("").astype(str).apply(_split_list)

    for col in OPTIONAL_COLUMNS:
        df[col] = [v if isinstance(v, str) and v.strip() else None for v in df[col]]

    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0).astype(int)
    df["downloads"] = pd.to_numeric(df["downloads"], errors="coerce").fillna(0).astype(int)
    df["featured"] = df["featured"].fillna("false").str.strip().str.lower() == "true"

    return df


def seed_catalog(store: CatalogStore, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> int:
    """Load the sample recipes into ``store``. Returns the number created."""
    if not config.seed_path.is_file():
        logger.warning("Seed catalog %s not found, starting with an empty catalog", config.seed_path)
        return 0

    df = read_seed_frame(config.seed_path)
    for row in df.to_dict(orient="records"):
        rating = int(row.pop("rating"))
        downloads = int(row.pop("downloads"))
        row["featured"] = bool(row["featured"])
        store.create_recipe(RecipeCreate(**row), rating=rating, downloads=downloads)

    logger.info("Seeded %d recipes from %s", len(df), config.seed_path)
    return len(df)
