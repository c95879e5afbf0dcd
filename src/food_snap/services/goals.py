"""Nutritional goals service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from food_snap.domain.goals import GoalProgress, NutritionalGoals
from food_snap.domain.stats import DailyTotals


class GoalsRepository(Protocol):
    """Persistence interface for nutritional goals."""

    def get_goals(self, user_id: UUID) -> NutritionalGoals | None:
        """Return stored goals for a user, if any."""

    def set_goals(self, user_id: UUID, goals: NutritionalGoals) -> None:
        """Persist goals for a user."""


@dataclass
class GoalsService:
    """Service for reading goals and tracking progress against them."""

    repository: GoalsRepository

    def get_goals(self, user_id: UUID) -> NutritionalGoals:
        """Return the user's goals, or defaults when none are stored."""
        return self.repository.get_goals(user_id) or NutritionalGoals()

    def set_goals(self, user_id: UUID, goals: NutritionalGoals) -> NutritionalGoals:
        """Persist and return the user's goals."""
        self.repository.set_goals(user_id, goals)
        return goals

    @staticmethod
    def progress(goals: NutritionalGoals, totals: DailyTotals) -> list[GoalProgress]:
        """Return progress for every enabled goal."""
        tracked = (
            ("calories", goals.calories, totals.calories),
            ("protein_g", goals.protein_g, totals.protein_g),
            ("carbs_g", goals.carbs_g, totals.carbs_g),
            ("fat_g", goals.fat_g, totals.fat_g),
        )
        progress: list[GoalProgress] = []
        for nutrient, target, consumed in tracked:
            if not target.enabled:
                continue
            percent = consumed / target.value * 100 if target.value > 0 else 0.0
            progress.append(
                GoalProgress(
                    nutrient=nutrient,
                    consumed=consumed,
                    target=target.value,
                    remaining=target.value - consumed,
                    percent=percent,
                )
            )
        return progress
