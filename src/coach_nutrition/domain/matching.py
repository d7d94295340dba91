"""Domain models for nutritional match scoring."""

from collections.abc import Hashable
from dataclasses import dataclass, field

DIMENSIONS = ("calories", "protein", "carbs", "fats")


@dataclass(frozen=True)
class NutritionalProfile:
    """Target or actual nutrition values; ``None`` skips a dimension."""

    calories: float
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None

    def value(self, dimension: str) -> float | None:
        """Return the value for a named dimension."""
        return getattr(self, dimension)


@dataclass(frozen=True)
class CandidateItem:
    """A nutritional item being ranked against a target."""

    id: Hashable
    profile: NutritionalProfile
    popularity: int = 0
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class MatchQuery:
    """A scoring request."""

    target: NutritionalProfile
    tolerance: float
    required_tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of a single candidate."""

    score: float
    matched_factors: int


@dataclass(frozen=True)
class MatchResult:
    """A ranked candidate."""

    item: CandidateItem
    score: float
    matched_factors: int


@dataclass(frozen=True)
class WeightTable:
    """Per-dimension weights and the popularity bonus used for scoring."""

    calories: float
    protein: float
    carbs: float
    fats: float
    popularity_rate: float = 0.5
    popularity_cap: float = 10.0

    def __post_init__(self) -> None:
        weights = [self.calories, self.protein, self.carbs, self.fats]
        if any(w < 0 for w in weights) or self.popularity_rate < 0:
            raise ValueError("Scoring weights must be non-negative")
        if self.popularity_cap < 0:
            raise ValueError("Popularity cap must be non-negative")
        total = sum(weights)
        if total > 100:
            raise ValueError(f"Dimension weights must sum to at most 100, got {total}")
        if not self.calories >= self.protein >= self.carbs >= self.fats:
            raise ValueError(
                "Dimension weights must be ordered calories >= protein >= carbs >= fats"
            )

    def weight(self, dimension: str) -> float:
        """Return the weight for a named dimension."""
        return getattr(self, dimension)

    def popularity_bonus(self, popularity: int) -> float:
        """Return the capped bonus for a usage counter."""
        return min(popularity * self.popularity_rate, self.popularity_cap)


# Similar-recipe search: even weighting, no popularity bonus.
DEDUPLICATION_WEIGHTS = WeightTable(
    calories=25, protein=25, carbs=25, fats=25, popularity_cap=0
)

# Client recommendations: calories first, popular recipes get up to 10 points.
RECOMMENDATION_WEIGHTS = WeightTable(calories=30, protein=25, carbs=20, fats=15)
