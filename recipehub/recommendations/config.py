from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecommendationConfig:
    top_n: int = int(os.getenv("RECIPEHUB_TOP_N", "20"))
    goal_weight: int = 3
    tool_weight: int = 2
    experience_weight: int = 1
    featured_weight: int = 1


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
