"""
Catalog filter engine.

Every supplied criterion must hold for a recipe to be kept; empty criteria
are skipped. Matching is case-insensitive throughout. Filtering only removes
recipes, so the relative order of the input is preserved. Sorting is a
separate, stable step.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence

from .models import FilterCriteria, Recipe, SortKey

DIFFICULTY_ORDER: dict[str, int] = {"beginner": 1, "intermediate": 2, "advanced": 3}

# Difficulty values outside the enum sort after "Advanced"
_UNKNOWN_DIFFICULTY_RANK = len(DIFFICULTY_ORDER) + 1

Predicate = Callable[[Recipe], bool]


def _contains_any(needles: list[str], haystack: list[str]) -> bool:
    lowered = [h.lower() for h in haystack]
    return any(n.lower() in h for n in needles for h in lowered)


def _build_predicates(criteria: FilterCriteria) -> list[Predicate]:
    predicates: list[Predicate] = []

    if criteria.search:
        query = criteria.search.lower()
        predicates.append(
            lambda r: query in r.title.lower() or query in r.description.lower()
        )

    if criteria.category:
        category = criteria.category.lower()
        predicates.append(lambda r: r.category.lower() == category)

    if criteria.categories:
        categories = criteria.categories
        predicates.append(lambda r: _contains_any(categories, [r.category]))

    if criteria.toolstack:
        tools = criteria.toolstack
        predicates.append(lambda r: _contains_any(tools, r.toolstack))

    if criteria.difficulty:
        difficulty = criteria.difficulty.lower()
        predicates.append(lambda r: r.difficulty.lower() == difficulty)

    if criteria.tags:
        tags = criteria.tags
        predicates.append(lambda r: _contains_any(tags, r.tags))

    return predicates


def filter_recipes(catalog: Sequence[Recipe], criteria: FilterCriteria) -> list[Recipe]:
    """Return the recipes of ``catalog`` that satisfy every supplied criterion."""
    predicates = _build_predicates(criteria)
    return [r for r in catalog if all(p(r) for p in predicates)]


def difficulty_rank(difficulty: str) -> int:
    return DIFFICULTY_ORDER.get(difficulty.lower(), _UNKNOWN_DIFFICULTY_RANK)


def sort_recipes(recipes: Sequence[Recipe], sort_by: SortKey | str | None) -> list[Recipe]:
    """Stable sort by popularity, rating or difficulty. ``None`` keeps order."""
    if sort_by is None:
        return list(recipes)

    key = SortKey(sort_by)
    if key is SortKey.popularity:
        return sorted(recipes, key=lambda r: r.downloads or 0, reverse=True)
    if key is SortKey.rating:
        return sorted(recipes, key=lambda r: r.rating or 0, reverse=True)
    return sorted(recipes, key=lambda r: difficulty_rank(r.difficulty))


def apply_filters(
    catalog: Sequence[Recipe],
    criteria: FilterCriteria,
    sort_by: SortKey | str | None = None,
) -> list[Recipe]:
    return sort_recipes(filter_recipes(catalog, criteria), sort_by)
