"""Recipe matching workflows for coaches."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from coach_nutrition.domain.errors import RecipeNotFoundError
from coach_nutrition.domain.matching import (
    DEDUPLICATION_WEIGHTS,
    RECOMMENDATION_WEIGHTS,
    MatchQuery,
    MatchResult,
    NutritionalProfile,
)
from coach_nutrition.domain.models import ClientRecord
from coach_nutrition.domain.recipes import (
    AdjustmentComparison,
    ClientRecommendations,
    RecipeMatch,
    RecipeRecord,
)
from coach_nutrition.services.clients import ClientService
from coach_nutrition.services.matching import (
    MatchScorer,
    calorie_window,
    round_half_up,
    validate_query,
)

MAIN_MEALS_PER_DAY = 3
MEALS_PER_DAY_WITH_SNACKS = 4
NO_CALORIE_TARGET_MESSAGE = "Client does not have calorie targets set"

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes shared with a coach."""

    def get_recipe(self, coach_id: UUID, recipe_id: UUID) -> RecipeRecord | None:
        """Return a recipe owned by the coach, public or system, if present."""

    def list_recipes_in_calorie_range(
        self,
        coach_id: UUID,
        calorie_min: float,
        calorie_max: float,
        category: str | None,
        limit: int,
    ) -> list[RecipeRecord]:
        """Return visible recipes in a calorie range, most used first."""


def per_meal_targets(
    client: ClientRecord, meal_type: str | None
) -> NutritionalProfile | None:
    """Split a client's daily targets into a single meal's share."""
    if not client.target_calories:
        return None
    meals = MEALS_PER_DAY_WITH_SNACKS if meal_type == "snack" else MAIN_MEALS_PER_DAY
    calories = round_half_up(client.target_calories / meals)
    if calories <= 0:
        return None

    def share(daily: float | None) -> int | None:
        return round_half_up(daily / meals) if daily else None

    return NutritionalProfile(
        calories=calories,
        protein=share(client.protein_target),
        carbs=share(client.carbs_target),
        fats=share(client.fats_target),
    )


@dataclass
class RecipeMatchService:
    """Finds similar recipes, recommends recipes and compares adjustments."""

    recipes: RecipeRepository
    clients: ClientService
    dedup_scorer: MatchScorer = field(
        default_factory=lambda: MatchScorer(DEDUPLICATION_WEIGHTS)
    )
    recommendation_scorer: MatchScorer = field(
        default_factory=lambda: MatchScorer(RECOMMENDATION_WEIGHTS)
    )
    similar_tolerance: float = 0.15
    recommendation_tolerance: float = 0.10
    similar_fetch_limit: int = 10
    recommendation_fetch_limit: int = 50

    def find_similar_recipes(  # noqa: PLR0913
        self,
        coach_id: UUID,
        target: NutritionalProfile,
        tolerance: float | None = None,
        dietary_tags: Iterable[str] = (),
        meal_type: str | None = None,
        limit: int | None = None,
    ) -> list[RecipeMatch]:
        """Return existing recipes close to a target, to avoid near-duplicates."""
        resolved_tolerance = (
            self.similar_tolerance if tolerance is None else tolerance
        )
        query = MatchQuery(
            target=target,
            tolerance=resolved_tolerance,
            required_tags=frozenset(dietary_tags),
        )
        validate_query(target, resolved_tolerance)
        recipes = self._fetch_candidates(
            coach_id, query, meal_type, self.similar_fetch_limit
        )
        matches = _to_matches(
            self.dedup_scorer.rank(
                query, [recipe.as_candidate() for recipe in recipes], limit
            ),
            recipes,
        )
        _logger.info(
            "Similar recipe search: coach=%s fetched=%s matched=%s",
            coach_id,
            len(recipes),
            len(matches),
        )
        return matches

    def get_client_recommendations(  # noqa: PLR0913
        self,
        coach_id: UUID,
        client_id: UUID,
        meal_type: str | None = None,
        limit: int = 10,
        tolerance: float | None = None,
    ) -> ClientRecommendations:
        """Recommend recipes that fit one meal of a client's daily targets."""
        client = self.clients.require_client(coach_id, client_id)

        meal_targets = per_meal_targets(client, meal_type)
        if meal_targets is None:
            return ClientRecommendations(
                client=client,
                meal_targets=None,
                recommendations=[],
                message=NO_CALORIE_TARGET_MESSAGE,
            )

        query = MatchQuery(
            target=meal_targets,
            tolerance=(
                self.recommendation_tolerance if tolerance is None else tolerance
            ),
        )
        validate_query(query.target, query.tolerance)
        recipes = self._fetch_candidates(
            coach_id, query, meal_type, self.recommendation_fetch_limit
        )
        matches = _to_matches(
            self.recommendation_scorer.rank(
                query, [recipe.as_candidate() for recipe in recipes], limit
            ),
            recipes,
        )
        _logger.info(
            "Client recommendations: client=%s fetched=%s returned=%s",
            client_id,
            len(recipes),
            len(matches),
        )
        return ClientRecommendations(
            client=client,
            meal_targets=meal_targets,
            recommendations=matches,
            has_more=len(recipes) >= self.recommendation_fetch_limit,
        )

    def compare_adjustment(  # noqa: PLR0913
        self,
        coach_id: UUID,
        recipe_id: UUID,
        adjusted: NutritionalProfile,
        target: NutritionalProfile,
        tolerance: float | None = None,
    ) -> AdjustmentComparison:
        """Score a recipe and its adjusted macros against the same target."""
        resolved_tolerance = (
            self.recommendation_tolerance if tolerance is None else tolerance
        )
        validate_query(target, resolved_tolerance)
        recipe = self.recipes.get_recipe(coach_id, recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")

        original_candidate = recipe.as_candidate()
        adjusted_candidate = replace(
            recipe,
            calories=adjusted.calories,
            protein=adjusted.protein,
            carbs=adjusted.carbs,
            fats=adjusted.fats,
        ).as_candidate()
        scorer = self.recommendation_scorer
        return AdjustmentComparison(
            recipe=recipe,
            original=scorer.score(target, original_candidate, resolved_tolerance),
            adjusted=scorer.score(target, adjusted_candidate, resolved_tolerance),
        )

    def _fetch_candidates(
        self,
        coach_id: UUID,
        query: MatchQuery,
        meal_type: str | None,
        fetch_limit: int,
    ) -> list[RecipeRecord]:
        calorie_min, calorie_max = calorie_window(
            query.target, query.tolerance, integer_bounds=True
        )
        return self.recipes.list_recipes_in_calorie_range(
            coach_id,
            calorie_min=calorie_min,
            calorie_max=calorie_max,
            category=meal_type,
            limit=fetch_limit,
        )


def _to_matches(
    results: list[MatchResult], recipes: list[RecipeRecord]
) -> list[RecipeMatch]:
    by_id = {recipe.id: recipe for recipe in recipes}
    return [
        RecipeMatch(
            recipe=by_id[result.item.id],
            score=result.score,
            matched_factors=result.matched_factors,
        )
        for result in results
    ]
