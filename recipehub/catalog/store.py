from __future__ import annotations

import itertools
import logging
import threading
from datetime import datetime, timezone

from ..recommendations.models import Survey, SurveyAnswers
from .models import Recipe, RecipeCreate

logger = logging.getLogger(__name__)


class IdSequence:
    """Monotonic positive id generator. Ids are never reused."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


class CatalogStore:
    """In-memory recipe and survey storage.

    Reads return list copies so callers always get a consistent snapshot,
    taken either entirely before or entirely after any concurrent write.
    """

    def __init__(self) -> None:
        self._recipes: dict[int, Recipe] = {}
        self._surveys: dict[int, Survey] = {}
        self._recipe_ids = IdSequence()
        self._survey_ids = IdSequence()
        self._lock = threading.Lock()

    # ── Recipes ──────────────────────────────────────────────────────────

    def get_all_recipes(self) -> list[Recipe]:
        with self._lock:
            return list(self._recipes.values())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        with self._lock:
            return self._recipes.get(recipe_id)

    def get_recipes_by_category(self, category: str) -> list[Recipe]:
        wanted = category.lower()
        return [r for r in self.get_all_recipes() if r.category.lower() == wanted]

    def get_recipes_by_tags(self, tags: list[str]) -> list[Recipe]:
        wanted = [t.lower() for t in tags]
        return [
            r
            for r in self.get_all_recipes()
            if any(w in tag.lower() for w in wanted for tag in r.tags)
        ]

    def search_recipes(self, query: str) -> list[Recipe]:
        """Match ``query`` against title, description, tags and toolstack."""
        q = query.lower()
        return [
            r
            for r in self.get_all_recipes()
            if q in r.title.lower()
            or q in r.description.lower()
            or any(q in tag.lower() for tag in r.tags)
            or any(q in tool.lower() for tool in r.toolstack)
        ]

    def create_recipe(
        self,
        data: RecipeCreate,
        rating: int = 0,
        downloads: int = 0,
    ) -> Recipe:
        fields = data.model_dump()
        # Id assignment and insert share the lock so catalog order follows id order
        with self._lock:
            recipe_id = self._recipe_ids.next_id()
            recipe = Recipe(**fields, id=recipe_id, rating=rating, downloads=downloads)
            self._recipes[recipe_id] = recipe
        logger.info("Created recipe %d (%s)", recipe_id, recipe.title)
        return recipe

    @property
    def recipe_count(self) -> int:
        with self._lock:
            return len(self._recipes)

    # ── Surveys ──────────────────────────────────────────────────────────

    def create_survey(self, answers: SurveyAnswers) -> Survey:
        fields = answers.model_dump()
        with self._lock:
            survey_id = self._survey_ids.next_id()
            survey = Survey(
                **fields,
                id=survey_id,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._surveys[survey_id] = survey
        logger.info("Stored survey %d", survey_id)
        return survey

    def get_survey(self, survey_id: int) -> Survey | None:
        with self._lock:
            return self._surveys.get(survey_id)
