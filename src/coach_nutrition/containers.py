"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from coach_nutrition.adapters.supabase_client_repository import (
    SupabaseClientRepository,
)
from coach_nutrition.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from coach_nutrition.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from coach_nutrition.config import Settings
from coach_nutrition.services.clients import ClientService
from coach_nutrition.services.goals import GoalsService
from coach_nutrition.services.recipes import RecipeMatchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    client_service: ClientService
    recipe_match_service: RecipeMatchService
    goals_service: GoalsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    client_service = ClientService(SupabaseClientRepository(supabase_client))
    recipe_match_service = RecipeMatchService(
        recipes=SupabaseRecipeRepository(supabase_client),
        clients=client_service,
        similar_tolerance=resolved_settings.similar_recipe_tolerance,
        recommendation_tolerance=resolved_settings.recommendation_tolerance,
        similar_fetch_limit=resolved_settings.similar_fetch_limit,
        recommendation_fetch_limit=resolved_settings.recommendation_fetch_limit,
    )
    goals_service = GoalsService(
        clients=client_service,
        daily_logs=SupabaseDailyLogRepository(supabase_client),
        tolerance=resolved_settings.goal_tolerance,
        hit_ratio=resolved_settings.goal_hit_ratio,
    )
    return AppContainer(
        settings=resolved_settings,
        client_service=client_service,
        recipe_match_service=recipe_match_service,
        goals_service=goals_service,
    )
