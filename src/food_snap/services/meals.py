"""Meal building and persistence service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from food_snap.domain.errors import ValidationError
from food_snap.domain.meals import FoodEntry, Meal, MealSummary, MealTotals, SavedMeal
from food_snap.services.aggregator import aggregate, scale_entries
from food_snap.services.editing import MealEditor, QuantityPolicy
from food_snap.services.parsing import entry_from_payload
from food_snap.services.rounding import round_totals

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for saved meals."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        totals: MealTotals,
        entries: list[FoodEntry],
        photo_url: str | None,
    ) -> UUID:
        """Create a meal row and return its id."""

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        """Return a saved meal by id."""

    def list_meals(self, user_id: UUID, limit: int) -> list[SavedMeal]:
        """Return the most recent meals of a user."""

    def update_meal(
        self, meal_id: UUID, totals: MealTotals, entries: list[FoodEntry]
    ) -> None:
        """Replace the entries and totals of a saved meal."""


@dataclass
class MealService:
    """Service that aggregates meals and hands snapshots to persistence."""

    repository: MealRepository
    policy: QuantityPolicy = QuantityPolicy.REJECT

    def parse_entries(self, payloads: list[dict[str, object]]) -> list[FoodEntry]:
        """Validate raw entry payloads into food entries."""
        return [entry_from_payload(payload, self.policy) for payload in payloads]

    def preview(self, entries: list[FoodEntry], name: str = "") -> MealSummary:
        """Compute per-entry values and totals without persisting."""
        items = scale_entries(entries)
        totals = aggregate(entries)
        return MealSummary(
            name=name,
            items=items,
            totals=totals,
            display_totals=round_totals(totals),
        )

    def save_meal(
        self,
        user_id: UUID,
        name: str,
        entries: list[FoodEntry],
        photo_url: str | None = None,
    ) -> SavedMeal:
        """Aggregate the entries and persist the meal."""
        if not entries:
            raise ValidationError("A meal needs at least one food")
        # Raises on duplicate ids before anything is written.
        meal = Meal(name=name)
        for entry in entries:
            meal = meal.add(entry)
        totals = round_totals(aggregate(meal.entries))
        logged_at = datetime.now(tz=UTC)
        meal_id = self.repository.create_meal(
            user_id=user_id,
            name=name,
            logged_at=logged_at,
            totals=totals,
            entries=list(meal.entries),
            photo_url=photo_url,
        )
        _logger.info(
            "Saved meal: meal_id=%s entries=%s calories=%s glycemic_load=%s",
            meal_id,
            len(meal.entries),
            totals.calories,
            totals.glycemic_load,
        )
        return SavedMeal(
            id=meal_id,
            user_id=user_id,
            name=name,
            logged_at=logged_at,
            totals=totals,
            entries=list(meal.entries),
            photo_url=photo_url,
        )

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        """Return a saved meal."""
        return self.repository.get_meal(meal_id)

    def list_meals(self, user_id: UUID, limit: int = 10) -> list[SavedMeal]:
        """Return recent meals of a user."""
        return self.repository.list_meals(user_id, limit)

    def update_entry_quantity(
        self, meal_id: UUID, entry_id: str, raw_quantity: object
    ) -> SavedMeal | None:
        """Change an entry quantity of a saved meal and refresh its totals.

        Values are recomputed from the stored reference profiles, not from the
        previously stored totals.
        """
        saved = self.repository.get_meal(meal_id)
        if saved is None:
            return None
        editor = MealEditor.from_meal(
            Meal(name=saved.name, entries=tuple(saved.entries)), self.policy
        )
        editor.set_quantity(entry_id, raw_quantity)
        meal, totals = editor.snapshot()
        rounded = round_totals(totals)
        entries = list(meal.entries)
        self.repository.update_meal(meal_id, rounded, entries)
        _logger.info(
            "Updated meal entry: meal_id=%s entry_id=%s calories=%s",
            meal_id,
            entry_id,
            rounded.calories,
        )
        return replace(saved, totals=rounded, entries=entries)
