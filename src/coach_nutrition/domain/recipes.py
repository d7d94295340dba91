"""Domain models for recipes and recipe matching."""

from dataclasses import dataclass, field
from uuid import UUID

from coach_nutrition.domain.matching import (
    CandidateItem,
    NutritionalProfile,
    ScoreBreakdown,
)
from coach_nutrition.domain.models import ClientRecord


@dataclass(frozen=True)
class RecipeRecord:
    """A recipe visible to a coach."""

    id: UUID
    coach_id: UUID | None
    title: str
    category: str | None
    calories: float
    protein: float | None
    carbs: float | None
    fats: float | None
    usage_count: int = 0
    dietary_tags: frozenset[str] = field(default_factory=frozenset)
    is_public: bool = False
    is_system: bool = False

    @property
    def profile(self) -> NutritionalProfile:
        return NutritionalProfile(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )

    def as_candidate(self) -> CandidateItem:
        """Return the recipe as a scoring candidate keyed by its id."""
        return CandidateItem(
            id=self.id,
            profile=self.profile,
            popularity=self.usage_count,
            tags=self.dietary_tags,
        )


@dataclass(frozen=True)
class RecipeMatch:
    """A recipe with its match score."""

    recipe: RecipeRecord
    score: float
    matched_factors: int


@dataclass(frozen=True)
class ClientRecommendations:
    """Recipe recommendations for a client's per-meal targets."""

    client: ClientRecord
    meal_targets: NutritionalProfile | None
    recommendations: list[RecipeMatch]
    has_more: bool = False
    message: str | None = None


@dataclass(frozen=True)
class AdjustmentComparison:
    """Scores of a stored recipe and its adjusted profile against one target."""

    recipe: RecipeRecord
    original: ScoreBreakdown
    adjusted: ScoreBreakdown

    @property
    def improved(self) -> bool:
        return self.adjusted.score > self.original.score
