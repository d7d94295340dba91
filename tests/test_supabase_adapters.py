"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from coach_nutrition.adapters.supabase_client_repository import (
    SupabaseClientRepository,
)
from coach_nutrition.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from coach_nutrition.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    responses: list[list[dict[str, object]]] = field(default_factory=list)
    filters: list[tuple[str, str, object]] = field(default_factory=list)
    orders: list[tuple[str, bool]] = field(default_factory=list)
    limits: list[int] = field(default_factory=list)

    def queue(self, data: list[dict[str, object]]) -> None:
        self.responses.append(data)

    def select(self, *_args) -> "FakeTable":
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("in", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("lte", column, value))
        return self

    def or_(self, value: str) -> "FakeTable":
        self.filters.append(("or", "", value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.limits.append(count)
        return self

    def execute(self) -> FakeResponse:
        data = self.responses.pop(0) if self.responses else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_recipe_repository_lists_calorie_range() -> None:
    client = FakeSupabaseClient()
    recipes_table = client.table("recipes")
    coach_id = uuid4()
    recipe_id = str(uuid4())
    recipes_table.queue(
        [
            {
                "id": recipe_id,
                "coach_id": None,
                "title": "Oats",
                "category": "breakfast",
                "calories": 410,
                "protein": 20,
                "carbs": None,
                "fats": 9.5,
                "usage_count": 7,
                "dietary_tags": ["vegetarian"],
                "is_public": False,
                "is_system": True,
            }
        ]
    )

    repository = SupabaseRecipeRepository(client)
    recipes = repository.list_recipes_in_calorie_range(
        coach_id, calorie_min=360, calorie_max=440, category="breakfast", limit=50
    )

    assert len(recipes) == 1
    recipe = recipes[0]
    assert str(recipe.id) == recipe_id
    assert recipe.coach_id is None
    assert recipe.carbs is None
    assert recipe.fats == 9.5
    assert recipe.dietary_tags == frozenset({"vegetarian"})
    assert recipe.is_system is True
    assert (
        "or",
        "",
        f"coach_id.eq.{coach_id},is_system.eq.true,is_public.eq.true",
    ) in recipes_table.filters
    assert ("gte", "calories", 360) in recipes_table.filters
    assert ("lte", "calories", 440) in recipes_table.filters
    assert ("eq", "category", "breakfast") in recipes_table.filters
    assert recipes_table.orders == [("usage_count", True)]
    assert recipes_table.limits == [50]


def test_supabase_recipe_repository_get_recipe_missing() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseRecipeRepository(client)

    assert repository.get_recipe(uuid4(), uuid4()) is None


def test_supabase_client_repository() -> None:
    client = FakeSupabaseClient()
    clients_table = client.table("clients")
    coach_id = uuid4()
    row = {
        "id": str(uuid4()),
        "coach_id": str(coach_id),
        "name": "Morgan",
        "target_calories": 2100,
        "protein_target": None,
        "steps_goal": 8000,
    }
    clients_table.queue([row])
    clients_table.queue([row, {**row, "id": str(uuid4()), "name": "Quinn"}])

    repository = SupabaseClientRepository(client)
    fetched = repository.get_client(coach_id, uuid4())
    listed = repository.list_clients(coach_id)

    assert fetched is not None
    assert fetched.target_calories == 2100.0
    assert fetched.protein_target is None
    assert fetched.steps_goal == 8000.0
    assert [record.name for record in listed] == ["Morgan", "Quinn"]
    assert ("eq", "coach_id", str(coach_id)) in clients_table.filters


def test_supabase_daily_log_repository() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("daily_logs")
    client_id = uuid4()
    logs_table.queue(
        [
            {
                "client_id": str(client_id),
                "date": "2026-03-05",
                "total_calories": 1900,
                "total_protein": None,
            },
            {
                "client_id": str(client_id),
                "date": "2026-03-06T00:00:00+00:00",
                "steps": 10400,
            },
        ]
    )

    repository = SupabaseDailyLogRepository(client)
    logs = repository.list_daily_logs(
        [client_id], date(2026, 3, 2), date(2026, 3, 8)
    )

    assert [log.day for log in logs] == [date(2026, 3, 5), date(2026, 3, 6)]
    assert logs[0].total_calories == 1900.0
    assert logs[0].total_protein is None
    assert logs[1].steps == 10400.0
    assert ("in", "client_id", [str(client_id)]) in logs_table.filters
    assert ("gte", "date", "2026-03-02") in logs_table.filters
    assert ("lte", "date", "2026-03-08") in logs_table.filters


def test_supabase_daily_log_repository_without_clients() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseDailyLogRepository(client)

    assert repository.list_daily_logs([], date(2026, 3, 2), date(2026, 3, 8)) == []
    assert "daily_logs" not in client.tables
