"""Supabase repository for saved meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_snap.domain.meals import FoodEntry, MealTotals, SavedMeal
from food_snap.services.meals import MealRepository
from food_snap.services.parsing import entry_from_payload, entry_to_payload

_MEAL_COLUMNS = (
    "id, user_id, name, created_at, total_calories, total_carbs, total_proteins, "
    "total_fats, total_sugars, total_fibers, total_saturated_fats, "
    "glycemic_index, glycemic_load, foods, photo_url"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        totals: MealTotals,
        entries: list[FoodEntry],
        photo_url: str | None,
    ) -> UUID:
        """Insert a meal row and return its id."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "created_at": logged_at.isoformat(),
                    "photo_url": photo_url,
                    "foods": [entry_to_payload(entry) for entry in entries],
                    **_totals_columns(totals),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return UUID(response.data[0]["id"])

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        """Return a meal row by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: UUID, limit: int) -> list[SavedMeal]:
        """Return recent meals for a user."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def update_meal(
        self, meal_id: UUID, totals: MealTotals, entries: list[FoodEntry]
    ) -> None:
        """Replace entries and totals of a meal row."""
        self.client.table("meals").update(
            {
                "foods": [entry_to_payload(entry) for entry in entries],
                **_totals_columns(totals),
            }
        ).eq("id", str(meal_id)).execute()


def _totals_columns(totals: MealTotals) -> dict[str, object]:
    return {
        "total_calories": totals.calories,
        "total_carbs": totals.carbs_g,
        "total_proteins": totals.protein_g,
        "total_fats": totals.fat_g,
        "total_sugars": totals.sugars_g,
        "total_fibers": totals.fiber_g,
        "total_saturated_fats": totals.saturated_fat_g,
        "glycemic_index": (
            totals.weighted_glycemic_index if totals.has_glycemic_data else None
        ),
        "glycemic_load": totals.glycemic_load,
    }


def _parse_meal(row: dict[str, object]) -> SavedMeal:
    glycemic_index = row.get("glycemic_index")
    totals = MealTotals(
        calories=float(row.get("total_calories") or 0.0),
        carbs_g=float(row.get("total_carbs") or 0.0),
        protein_g=float(row.get("total_proteins") or 0.0),
        fat_g=float(row.get("total_fats") or 0.0),
        sugars_g=float(row.get("total_sugars") or 0.0),
        fiber_g=float(row.get("total_fibers") or 0.0),
        saturated_fat_g=float(row.get("total_saturated_fats") or 0.0),
        weighted_glycemic_index=float(glycemic_index or 0.0),
        glycemic_load=float(row.get("glycemic_load") or 0.0),
        has_glycemic_data=glycemic_index is not None,
    )
    return SavedMeal(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name") or ""),
        logged_at=datetime.fromisoformat(row["created_at"]),
        totals=totals,
        entries=[entry_from_payload(food) for food in row.get("foods") or []],
        photo_url=row.get("photo_url"),
    )
