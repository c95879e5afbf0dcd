"""Supabase repository for meal statistics."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_snap.domain.stats import MealLogRow
from food_snap.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogRow]:
        """Return meals logged in the time range."""
        response = (
            self.client.table("meals")
            .select(
                "id, created_at, total_calories, total_carbs, total_proteins, "
                "total_fats, glycemic_load"
            )
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealLogRow:
    return MealLogRow(
        meal_id=UUID(row["id"]),
        logged_at=datetime.fromisoformat(row["created_at"]),
        total_calories=float(row.get("total_calories") or 0.0),
        total_carbs_g=float(row.get("total_carbs") or 0.0),
        total_protein_g=float(row.get("total_proteins") or 0.0),
        total_fat_g=float(row.get("total_fats") or 0.0),
        glycemic_load=float(row.get("glycemic_load") or 0.0),
    )
