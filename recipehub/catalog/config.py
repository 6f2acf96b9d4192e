from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_SEED = Path(__file__).resolve().parent.parent / "data" / "seed_recipes.csv"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for the in-memory recipe catalog.
    """

    seed_path: Path = Path(os.getenv("RECIPEHUB_SEED_PATH", str(_BUNDLED_SEED)))
    seed_on_startup: bool = os.getenv("RECIPEHUB_SEED_ON_STARTUP", "1") != "0"
    log_level: str = os.getenv("RECIPEHUB_LOG_LEVEL", "INFO").upper()


def resolve_log_level(name: str) -> int:
    """Map a level name to its number, falling back to INFO for unknown names."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    logging.getLogger(__name__).warning("Unknown log level %r, using INFO", name)
    return logging.INFO


DEFAULT_CATALOG_CONFIG = CatalogConfig()
