from __future__ import annotations

from collections.abc import Sequence

from ..catalog.models import Recipe
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import ScoredRecipe, SurveyAnswers


def _goal_matches(goal: str, recipe: Recipe) -> bool:
    return any(goal in tag.lower() for tag in recipe.tags) or goal in recipe.category.lower()


def _tool_matches(tool: str, recipe: Recipe) -> bool:
    return any(tool in recipe_tool.lower() for recipe_tool in recipe.toolstack)


def score_recipe(
    recipe: Recipe,
    survey: SurveyAnswers,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> int:
    """Compute the affinity score of a single recipe for a survey.

    Each goal found in a tag or the category adds ``goal_weight`` once,
    each tool found in the toolstack adds ``tool_weight``, a matching
    experience level adds ``experience_weight`` and featured recipes get
    ``featured_weight``.
    """
    score = 0

    for goal in survey.automation_goals:
        if _goal_matches(goal.lower(), recipe):
            score += config.goal_weight

    for tool in survey.tools_used:
        if _tool_matches(tool.lower(), recipe):
            score += config.tool_weight

    if recipe.difficulty.lower() == survey.experience_level.lower():
        score += config.experience_weight

    if recipe.featured:
        score += config.featured_weight

    return score


def score_recipes(
    catalog: Sequence[Recipe],
    survey: SurveyAnswers,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredRecipe]:
    """Score every recipe and order by descending score.

    ``sorted`` is stable, so recipes with equal scores keep catalog order.
    """
    scored = [
        ScoredRecipe(recipe=recipe, score=score_recipe(recipe, survey, config))
        for recipe in catalog
    ]
    return sorted(scored, key=lambda item: item.score, reverse=True)


def recommend(
    catalog: Sequence[Recipe],
    survey: SurveyAnswers,
    top_n: int | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[Recipe]:
    """Return the ``top_n`` best matching recipes for ``survey``."""
    limit = config.top_n if top_n is None else top_n
    ranked = score_recipes(catalog, survey, config)
    return [item.recipe for item in ranked[: max(limit, 0)]]
