"""Domain models for daily logs and weekly goal tracking."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from coach_nutrition.domain.models import ClientRecord


@dataclass(frozen=True)
class DailyLog:
    """Totals a client logged for one day."""

    client_id: UUID
    day: date
    total_calories: float | None = None
    total_protein: float | None = None
    total_carbs: float | None = None
    total_fats: float | None = None
    exercise_minutes: float | None = None
    water_intake: float | None = None
    steps: float | None = None


@dataclass(frozen=True)
class GoalCheck:
    """Whether one goal was hit on a day."""

    hit: bool
    percent: int
    current: float
    target: float


@dataclass(frozen=True)
class DayGoals:
    """Goal results for a single day."""

    day: date
    day_name: str
    has_data: bool
    is_hit: bool
    goals: dict[str, GoalCheck] = field(default_factory=dict)


@dataclass(frozen=True)
class WeeklyGoals:
    """Seven-day goal breakdown for a client."""

    client: ClientRecord
    days: list[DayGoals]
    goal_achievement_percent: int | None
    today_progress: dict[str, dict[str, float | None]] | None = None


@dataclass(frozen=True)
class WeeklyGoalsSummary:
    """Goal breakdowns for every client of a coach over one week."""

    start: date
    end: date
    week_range: str
    clients: list[WeeklyGoals]
