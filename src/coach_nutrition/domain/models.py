"""Domain models for the coaching practice."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ClientRecord:
    """A coach's client with daily nutrition and activity targets."""

    id: UUID
    coach_id: UUID
    name: str
    target_calories: float | None = None
    protein_target: float | None = None
    carbs_target: float | None = None
    fats_target: float | None = None
    exercise_minutes_goal: float | None = None
    water_intake_goal: float | None = None
    steps_goal: float | None = None

    def has_goals(self) -> bool:
        """Return True when at least one tracked target is set."""
        return any(
            (
                self.target_calories,
                self.protein_target,
                self.carbs_target,
                self.fats_target,
                self.exercise_minutes_goal,
                self.steps_goal,
            )
        )
