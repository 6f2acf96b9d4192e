from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import DifficultyLevel, Recipe


class SurveyAnswers(BaseModel):
    """Answers as consumed by the scorer. Empty lists are allowed here."""

    automation_goals: list[str] = Field(default_factory=list)
    tools_used: list[str] = Field(default_factory=list)
    experience_level: str = ""


class SurveyRequest(SurveyAnswers):
    model_config = ConfigDict(use_enum_values=True)

    automation_goals: list[str] = Field(..., min_length=1)
    tools_used: list[str] = Field(..., min_length=1)
    experience_level: DifficultyLevel


class Survey(SurveyAnswers):
    id: int
    created_at: str


class ScoredRecipe(BaseModel):
    recipe: Recipe
    score: int


class SurveyResult(BaseModel):
    survey: Survey
    recommendations: list[Recipe]
