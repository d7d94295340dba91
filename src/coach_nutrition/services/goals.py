"""Weekly goal achievement from client daily logs."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from coach_nutrition.domain.errors import InvalidQueryError
from coach_nutrition.domain.goals import (
    DailyLog,
    DayGoals,
    GoalCheck,
    WeeklyGoals,
    WeeklyGoalsSummary,
)
from coach_nutrition.domain.models import ClientRecord
from coach_nutrition.services.clients import ClientService
from coach_nutrition.services.matching import round_half_up

DAYS_IN_WEEK = 7
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# (goal name, client target attribute, log attribute, must stay under the ceiling)
_GOALS = (
    ("calories", "target_calories", "total_calories", True),
    ("protein", "protein_target", "total_protein", False),
    ("carbs", "carbs_target", "total_carbs", True),
    ("fats", "fats_target", "total_fats", True),
    ("exercise", "exercise_minutes_goal", "exercise_minutes", False),
    ("steps", "steps_goal", "steps", False),
)

_PROGRESS_FIELDS = (
    ("calories", "target_calories", "total_calories"),
    ("protein", "protein_target", "total_protein"),
    ("carbs", "carbs_target", "total_carbs"),
    ("fats", "fats_target", "total_fats"),
    ("exercise", "exercise_minutes_goal", "exercise_minutes"),
    ("water", "water_intake_goal", "water_intake"),
    ("steps", "steps_goal", "steps"),
)

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for client daily logs."""

    def list_daily_logs(
        self, client_ids: list[UUID], start: date, end: date
    ) -> list[DailyLog]:
        """Return logs for the clients between start and end, inclusive."""


def check_goal(
    current: float, target: float, tolerance: float, *, bounded: bool
) -> GoalCheck:
    """Check a logged value against its target.

    Bounded goals (calories, carbs, fats) must land within ``tolerance`` of the
    target on either side; the others only need to reach ``1 - tolerance`` of it.
    """
    lower = target * (1 - tolerance)
    upper = target * (1 + tolerance)
    hit = lower <= current <= upper if bounded else current >= lower
    return GoalCheck(
        hit=hit,
        percent=round_half_up(current / target * 100),
        current=current,
        target=target,
    )


def evaluate_day(
    client: ClientRecord,
    day: date,
    log: DailyLog | None,
    tolerance: float,
    hit_ratio: float,
) -> DayGoals:
    """Evaluate every goal a client has for one day."""
    day_name = DAY_NAMES[day.weekday()]
    if log is None:
        return DayGoals(day=day, day_name=day_name, has_data=False, is_hit=False)

    goals: dict[str, GoalCheck] = {}
    for name, target_attr, log_attr, bounded in _GOALS:
        target = getattr(client, target_attr)
        current = getattr(log, log_attr)
        if not target or not current:
            continue
        goals[name] = check_goal(current, target, tolerance, bounded=bounded)

    met = sum(1 for check in goals.values() if check.hit)
    is_hit = bool(goals) and met / len(goals) >= hit_ratio
    return DayGoals(
        day=day, day_name=day_name, has_data=True, is_hit=is_hit, goals=goals
    )


def build_weekly_goals(
    client: ClientRecord,
    logs: list[DailyLog],
    end_day: date,
    tolerance: float = 0.10,
    hit_ratio: float = 0.8,
) -> WeeklyGoals:
    """Build the seven-day breakdown ending on ``end_day``, oldest day first."""
    start_day = end_day - timedelta(days=DAYS_IN_WEEK - 1)
    window_logs = {
        log.day: log
        for log in logs
        if log.client_id == client.id and start_day <= log.day <= end_day
    }
    days = [
        evaluate_day(
            client,
            start_day + timedelta(days=offset),
            window_logs.get(start_day + timedelta(days=offset)),
            tolerance,
            hit_ratio,
        )
        for offset in range(DAYS_IN_WEEK)
    ]
    achievement = None
    if window_logs:
        days_hit = sum(1 for day in days if day.is_hit)
        achievement = round_half_up(days_hit / DAYS_IN_WEEK * 100)
    return WeeklyGoals(
        client=client,
        days=days,
        goal_achievement_percent=achievement,
        today_progress=_progress(client, window_logs.get(end_day)),
    )


def week_range_label(start: date, end: date) -> str:
    """Format a week range like ``Mar 3 - Mar 9, 2026``."""
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


@dataclass
class GoalsService:
    """Computes weekly goal achievement for a coach's clients."""

    clients: ClientService
    daily_logs: DailyLogRepository
    tolerance: float = 0.10
    hit_ratio: float = 0.8

    def get_client_week(
        self, coach_id: UUID, client_id: UUID, today: date | None = None
    ) -> WeeklyGoals:
        """Return the last seven days of goal results for one client."""
        client = self.clients.require_client(coach_id, client_id)
        end_day = today or _today()
        start_day = end_day - timedelta(days=DAYS_IN_WEEK - 1)
        logs = self.daily_logs.list_daily_logs([client.id], start_day, end_day)
        return build_weekly_goals(
            client, logs, end_day, self.tolerance, self.hit_ratio
        )

    def get_weekly_summary(
        self, coach_id: UUID, week_offset: int = 0, today: date | None = None
    ) -> WeeklyGoalsSummary:
        """Return goal results for every client with goals, shifted by whole weeks."""
        if week_offset > 0:
            raise InvalidQueryError("Week offset cannot be in the future")
        end_day = (today or _today()) + timedelta(days=DAYS_IN_WEEK * week_offset)
        start_day = end_day - timedelta(days=DAYS_IN_WEEK - 1)
        clients = self.clients.list_clients_with_goals(coach_id)
        logs_by_client: dict[UUID, list[DailyLog]] = defaultdict(list)
        if clients:
            for log in self.daily_logs.list_daily_logs(
                [client.id for client in clients], start_day, end_day
            ):
                logs_by_client[log.client_id].append(log)
        _logger.info(
            "Weekly goals summary: coach=%s clients=%s start=%s",
            coach_id,
            len(clients),
            start_day,
        )
        return WeeklyGoalsSummary(
            start=start_day,
            end=end_day,
            week_range=week_range_label(start_day, end_day),
            clients=[
                build_weekly_goals(
                    client,
                    logs_by_client[client.id],
                    end_day,
                    self.tolerance,
                    self.hit_ratio,
                )
                for client in clients
            ],
        )


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _progress(
    client: ClientRecord, log: DailyLog | None
) -> dict[str, dict[str, float | None]] | None:
    if log is None:
        return None
    return {
        name: {
            "current": getattr(log, log_attr),
            "target": getattr(client, target_attr),
        }
        for name, target_attr, log_attr in _PROGRESS_FIELDS
    }
