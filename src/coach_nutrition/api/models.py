"""Pydantic models for coach API request bodies."""

from pydantic import BaseModel, Field

from coach_nutrition.domain.matching import NutritionalProfile


class MacroTargets(BaseModel):
    """Calories with optional macros in grams."""

    calories: float
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)

    def to_profile(self) -> NutritionalProfile:
        return NutritionalProfile(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )


class SimilarRecipesRequest(BaseModel):
    """Deduplication search for recipes close to a target."""

    target: MacroTargets
    tolerance: float | None = None
    dietary_tags: list[str] = Field(default_factory=list)
    meal_type: str | None = None
    limit: int | None = Field(default=None, ge=0)


class AdjustmentComparisonRequest(BaseModel):
    """Adjusted macros for a stored recipe and the target they aim for."""

    adjusted: MacroTargets
    target: MacroTargets
    tolerance: float | None = None
