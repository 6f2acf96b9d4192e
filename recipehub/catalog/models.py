from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"

    @classmethod
    def _missing_(cls, value: object) -> Difficulty | None:
        # Accept any casing, e.g. "advanced" or "ADVANCED"
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


def _parse_difficulty(value):
    if isinstance(value, str):
        try:
            return Difficulty(value)
        except ValueError:
            return value
    return value


DifficultyLevel = Annotated[Difficulty, BeforeValidator(_parse_difficulty)]


class SortKey(str, Enum):
    popularity = "popularity"
    rating = "rating"
    difficulty = "difficulty"


class RecipeCreate(BaseModel):
    """Client-submitted recipe. ``rating`` and ``downloads`` are not settable."""

    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    github_url: str = Field(..., min_length=1)
    demo_link: str | None = None
    prerequisites: list[str] = Field(default_factory=list)
    toolstack: list[str] = Field(default_factory=list)
    thumbnail: str | None = None
    difficulty: DifficultyLevel = Difficulty.beginner.value
    category: str = Field(..., min_length=1)
    featured: bool = False

    @field_validator("demo_link", "thumbnail", mode="before")
    @classmethod
    def _blank_link_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Recipe(RecipeCreate):
    """A catalog entry as held by the store."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    id: int = Field(..., gt=0)
    rating: int = Field(default=0, description="Rating in tenths, e.g. 48 == 4.8")
    downloads: int = Field(default=0, ge=0)


class FilterCriteria(BaseModel):
    """Optional filter predicates. Empty fields are not applied."""

    search: str | None = None
    category: str | None = Field(
        default=None, description="Exact (case-insensitive) category match"
    )
    categories: list[str] = Field(
        default_factory=list, description="Any label contained in the category"
    )
    toolstack: list[str] = Field(default_factory=list)
    difficulty: str | None = None
    tags: list[str] = Field(default_factory=list)


class FilterRequest(FilterCriteria):
    model_config = ConfigDict(use_enum_values=True)

    difficulty: DifficultyLevel | None = None
    sort_by: SortKey | None = None

    @field_validator("search", "category", "difficulty", "sort_by", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("categories", "toolstack", "tags", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value):
        return [] if value is None else value

    def criteria(self) -> FilterCriteria:
        return FilterCriteria(**self.model_dump(exclude={"sort_by"}))
