from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from .models import Difficulty, Recipe


class _FacetCounter:
    """Counts labels case-insensitively, reporting the first spelling seen."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()
        self._labels: dict[str, str] = {}

    def add(self, values: Iterable[str]) -> None:
        seen: set[str] = set()
        for value in values:
            key = value.lower()
            # A recipe listing a value twice still counts once
            if key in seen:
                continue
            seen.add(key)
            self._labels.setdefault(key, value)
            self._counts[key] += 1

    def ranked(self) -> list[dict[str, Any]]:
        return [{"name": self._labels[k], "count": c} for k, c in self._counts.most_common()]


def compute_facets(recipes: Sequence[Recipe]) -> dict[str, Any]:
    """Count recipes per category, tool, tag and difficulty for the browse sidebar."""
    categories = _FacetCounter()
    tools = _FacetCounter()
    tags = _FacetCounter()
    difficulties: Counter[str] = Counter({d.value: 0 for d in Difficulty})

    for r in recipes:
        categories.add([r.category])
        tools.add(r.toolstack)
        tags.add(r.tags)
        difficulties[r.difficulty] += 1

    return {
        "total": len(recipes),
        "categories": categories.ranked(),
        "toolstack": tools.ranked(),
        "tags": tags.ranked(),
        "difficulties": [{"name": d.value, "count": difficulties[d.value]} for d in Difficulty],
    }
