"""Coach-facing endpoints for recipe matching and weekly goals."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from coach_nutrition.api.models import (  # noqa: TC001
    AdjustmentComparisonRequest,
    SimilarRecipesRequest,
)

if TYPE_CHECKING:
    from coach_nutrition.containers import AppContainer
    from coach_nutrition.domain.goals import WeeklyGoals
    from coach_nutrition.domain.matching import NutritionalProfile, ScoreBreakdown
    from coach_nutrition.domain.recipes import RecipeMatch, RecipeRecord

router = APIRouter(prefix="/coach", tags=["coach"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/recipes/similar", dependencies=[Depends(require_api_token)])
async def similar_recipes(
    body: SimilarRecipesRequest,
    request: Request,
    x_coach_id: UUID = Header(),
) -> dict[str, object]:
    """Return existing recipes close to the requested macros."""
    container: AppContainer = request.app.state.container
    matches = container.recipe_match_service.find_similar_recipes(
        x_coach_id,
        body.target.to_profile(),
        tolerance=body.tolerance,
        dietary_tags=body.dietary_tags,
        meal_type=body.meal_type,
        limit=body.limit,
    )
    return {"recipes": [_match_payload(match) for match in matches]}


@router.get(
    "/clients/{client_id}/recipe-recommendations",
    dependencies=[Depends(require_api_token)],
)
async def client_recommendations(  # noqa: PLR0913
    client_id: UUID,
    request: Request,
    x_coach_id: UUID = Header(),
    meal_type: str | None = None,
    limit: int = 10,
    tolerance: float | None = None,
) -> dict[str, object]:
    """Return recipes that fit one meal of a client's targets."""
    container: AppContainer = request.app.state.container
    result = container.recipe_match_service.get_client_recommendations(
        x_coach_id,
        client_id,
        meal_type=meal_type,
        limit=limit,
        tolerance=tolerance,
    )
    client = result.client
    return {
        "client": {
            "id": str(client.id),
            "name": client.name,
            "target_calories": client.target_calories,
            "protein_target": client.protein_target,
            "carbs_target": client.carbs_target,
            "fats_target": client.fats_target,
            "meal_targets": _profile_payload(result.meal_targets),
        },
        "recommendations": [
            _match_payload(match) for match in result.recommendations
        ],
        "has_more": result.has_more,
        "message": result.message,
    }


@router.post(
    "/recipes/{recipe_id}/adjustment-comparison",
    dependencies=[Depends(require_api_token)],
)
async def adjustment_comparison(
    recipe_id: UUID,
    body: AdjustmentComparisonRequest,
    request: Request,
    x_coach_id: UUID = Header(),
) -> dict[str, object]:
    """Compare a recipe's stored macros with an adjusted version."""
    container: AppContainer = request.app.state.container
    comparison = container.recipe_match_service.compare_adjustment(
        x_coach_id,
        recipe_id,
        adjusted=body.adjusted.to_profile(),
        target=body.target.to_profile(),
        tolerance=body.tolerance,
    )
    return {
        "recipe": _recipe_payload(comparison.recipe),
        "original": _score_payload(comparison.original),
        "adjusted": _score_payload(comparison.adjusted),
        "improved": comparison.improved,
    }


@router.get(
    "/clients/{client_id}/weekly-goals", dependencies=[Depends(require_api_token)]
)
async def client_weekly_goals(
    client_id: UUID,
    request: Request,
    x_coach_id: UUID = Header(),
) -> dict[str, object]:
    """Return the last seven days of goal results for a client."""
    container: AppContainer = request.app.state.container
    week = container.goals_service.get_client_week(x_coach_id, client_id)
    return _week_payload(week)


@router.get("/weekly-goals", dependencies=[Depends(require_api_token)])
async def weekly_goals_summary(
    request: Request,
    x_coach_id: UUID = Header(),
    week_offset: int = 0,
) -> dict[str, object]:
    """Return weekly goal results for every client with goals."""
    container: AppContainer = request.app.state.container
    summary = container.goals_service.get_weekly_summary(
        x_coach_id, week_offset=week_offset
    )
    return {
        "week_range": summary.week_range,
        "start": summary.start.isoformat(),
        "end": summary.end.isoformat(),
        "clients": [_week_payload(week) for week in summary.clients],
    }


def _profile_payload(profile: NutritionalProfile | None) -> dict[str, object] | None:
    if profile is None:
        return None
    return {
        "calories": profile.calories,
        "protein": profile.protein,
        "carbs": profile.carbs,
        "fats": profile.fats,
    }


def _recipe_payload(recipe: RecipeRecord) -> dict[str, object]:
    return {
        "id": str(recipe.id),
        "title": recipe.title,
        "category": recipe.category,
        "calories": recipe.calories,
        "protein": recipe.protein,
        "carbs": recipe.carbs,
        "fats": recipe.fats,
        "usage_count": recipe.usage_count,
        "dietary_tags": sorted(recipe.dietary_tags),
    }


def _score_payload(breakdown: ScoreBreakdown) -> dict[str, object]:
    return {
        "match_score": round(breakdown.score, 2),
        "matched_factors": breakdown.matched_factors,
    }


def _match_payload(match: RecipeMatch) -> dict[str, object]:
    return {
        **_recipe_payload(match.recipe),
        "match_score": round(match.score, 2),
        "matched_factors": match.matched_factors,
    }


def _week_payload(week: WeeklyGoals) -> dict[str, object]:
    return {
        "client_id": str(week.client.id),
        "name": week.client.name,
        "goal_achievement_percent": week.goal_achievement_percent,
        "today_progress": week.today_progress,
        "days": [
            {
                "date": day.day.isoformat(),
                "day_name": day.day_name,
                "has_data": day.has_data,
                "is_hit": day.is_hit,
                "goals": {
                    name: {
                        "hit": check.hit,
                        "percent": check.percent,
                        "current": check.current,
                        "target": check.target,
                    }
                    for name, check in day.goals.items()
                },
            }
            for day in week.days
        ],
    }
