"""Supabase repository for recipes shared with a coach."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from coach_nutrition.domain.recipes import RecipeRecord
from coach_nutrition.services.recipes import RecipeRepository

_RECIPE_COLUMNS = (
    "id, coach_id, title, category, calories, protein, carbs, fats, "
    "usage_count, dietary_tags, is_public, is_system"
)


def _visible_to(coach_id: UUID) -> str:
    """Return a PostgREST filter for recipes owned by, or shared with, a coach."""
    return f"coach_id.eq.{coach_id},is_system.eq.true,is_public.eq.true"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipe lookups."""

    client: Client

    def get_recipe(self, coach_id: UUID, recipe_id: UUID) -> RecipeRecord | None:
        """Return a visible recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("id", str(recipe_id))
            .or_(_visible_to(coach_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes_in_calorie_range(
        self,
        coach_id: UUID,
        calorie_min: float,
        calorie_max: float,
        category: str | None,
        limit: int,
    ) -> list[RecipeRecord]:
        """Return visible recipes in a calorie range, most used first."""
        query = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .or_(_visible_to(coach_id))
            .gte("calories", calorie_min)
            .lte("calories", calorie_max)
        )
        if category:
            query = query.eq("category", category)
        response = query.order("usage_count", desc=True).limit(limit).execute()
        return [_parse_recipe(row) for row in response.data or []]


def optional_float(value: object) -> float | None:
    """Convert a nullable numeric column to a float."""
    return float(value) if value is not None else None


def _parse_recipe(row: dict[str, object]) -> RecipeRecord:
    """Parse a recipe row into a domain model."""
    coach_id = row.get("coach_id")
    return RecipeRecord(
        id=UUID(str(row["id"])),
        coach_id=UUID(str(coach_id)) if coach_id else None,
        title=str(row.get("title", "")),
        category=row.get("category"),
        calories=float(row.get("calories") or 0.0),
        protein=optional_float(row.get("protein")),
        carbs=optional_float(row.get("carbs")),
        fats=optional_float(row.get("fats")),
        usage_count=int(row.get("usage_count") or 0),
        dietary_tags=frozenset(row.get("dietary_tags") or ()),
        is_public=bool(row.get("is_public", False)),
        is_system=bool(row.get("is_system", False)),
    )
