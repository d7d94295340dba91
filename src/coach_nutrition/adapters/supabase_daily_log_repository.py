"""Supabase repository for client daily logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from coach_nutrition.adapters.supabase_recipe_repository import optional_float
from coach_nutrition.domain.goals import DailyLog
from coach_nutrition.services.goals import DailyLogRepository

_LOG_COLUMNS = (
    "client_id, date, total_calories, total_protein, total_carbs, total_fats, "
    "exercise_minutes, water_intake, steps"
)


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily log queries."""

    client: Client

    def list_daily_logs(
        self, client_ids: list[UUID], start: date, end: date
    ) -> list[DailyLog]:
        """Return logs for the clients between start and end, inclusive."""
        if not client_ids:
            return []
        response = (
            self.client.table("daily_logs")
            .select(_LOG_COLUMNS)
            .in_("client_id", [str(client_id) for client_id in client_ids])
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]


def _parse_day(raw: object) -> date:
    """Parse a date column that may be stored as a date or a timestamp."""
    text = str(raw)
    if len(text) > len("YYYY-MM-DD"):
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def _parse_log(row: dict[str, object]) -> DailyLog:
    return DailyLog(
        client_id=UUID(str(row["client_id"])),
        day=_parse_day(row["date"]),
        total_calories=optional_float(row.get("total_calories")),
        total_protein=optional_float(row.get("total_protein")),
        total_carbs=optional_float(row.get("total_carbs")),
        total_fats=optional_float(row.get("total_fats")),
        exercise_minutes=optional_float(row.get("exercise_minutes")),
        water_intake=optional_float(row.get("water_intake")),
        steps=optional_float(row.get("steps")),
    )
