"""Supabase repository for a coach's clients."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from coach_nutrition.adapters.supabase_recipe_repository import optional_float
from coach_nutrition.domain.models import ClientRecord
from coach_nutrition.services.clients import ClientRepository

_CLIENT_COLUMNS = (
    "id, coach_id, name, target_calories, protein_target, carbs_target, "
    "fats_target, exercise_minutes_goal, water_intake_goal, steps_goal"
)


@dataclass
class SupabaseClientRepository(ClientRepository):
    """Supabase implementation for client lookups."""

    client: Client

    def get_client(self, coach_id: UUID, client_id: UUID) -> ClientRecord | None:
        """Return a client of the coach, if present."""
        response = (
            self.client.table("clients")
            .select(_CLIENT_COLUMNS)
            .eq("id", str(client_id))
            .eq("coach_id", str(coach_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_client(response.data[0])

    def list_clients(self, coach_id: UUID) -> list[ClientRecord]:
        """Return all clients of the coach ordered by name."""
        response = (
            self.client.table("clients")
            .select(_CLIENT_COLUMNS)
            .eq("coach_id", str(coach_id))
            .order("name", desc=False)
            .execute()
        )
        return [_parse_client(row) for row in response.data or []]


def _parse_client(row: dict[str, object]) -> ClientRecord:
    return ClientRecord(
        id=UUID(str(row["id"])),
        coach_id=UUID(str(row["coach_id"])),
        name=str(row.get("name", "")),
        target_calories=optional_float(row.get("target_calories")),
        protein_target=optional_float(row.get("protein_target")),
        carbs_target=optional_float(row.get("carbs_target")),
        fats_target=optional_float(row.get("fats_target")),
        exercise_minutes_goal=optional_float(row.get("exercise_minutes_goal")),
        water_intake_goal=optional_float(row.get("water_intake_goal")),
        steps_goal=optional_float(row.get("steps_goal")),
    )
