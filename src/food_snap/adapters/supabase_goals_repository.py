"""Supabase repository for nutritional goals stored on profiles."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_snap.domain.goals import GlobalGoal, GoalTarget, NutritionalGoals
from food_snap.services.goals import GoalsRepository

_logger = logging.getLogger(__name__)

# Goal columns keep the French names used by the profiles table.
_COLUMNS = {
    "calories": "calories",
    "protein_g": "proteines",
    "carbs_g": "glucides",
    "fat_g": "lipides",
}


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for goals; a null column means disabled."""

    client: Client

    def get_goals(self, user_id: UUID) -> NutritionalGoals | None:
        """Return goals stored on the user's profile."""
        response = (
            self.client.table("profiles")
            .select("calories, proteines, glucides, lipides, goal")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        defaults = NutritionalGoals()
        targets = {}
        for field_name, column in _COLUMNS.items():
            value = row.get(column)
            if value:
                targets[field_name] = GoalTarget(value=float(value), enabled=True)
            else:
                targets[field_name] = getattr(defaults, field_name)
        return NutritionalGoals(
            **targets,
            global_goal=_parse_goal(row.get("goal")),
        )

    def set_goals(self, user_id: UUID, goals: NutritionalGoals) -> None:
        """Write goals on the user's profile."""
        payload: dict[str, object] = {"goal": goals.global_goal.value}
        for field_name, column in _COLUMNS.items():
            target: GoalTarget = getattr(goals, field_name)
            payload[column] = target.value if target.enabled else None
        self.client.table("profiles").update(payload).eq("id", str(user_id)).execute()


def _parse_goal(value: object) -> GlobalGoal:
    if not value:
        return GlobalGoal.MAINTENANCE
    try:
        return GlobalGoal(value)
    except ValueError:
        _logger.warning("Unknown global goal %r; using maintenance", value)
        return GlobalGoal.MAINTENANCE
