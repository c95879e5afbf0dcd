"""Domain models for meals."""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from food_snap.domain.errors import ValidationError
from food_snap.domain.nutrition import NutrientProfile, ScaledNutrients

DEFAULT_UNIT = "g"


@dataclass(frozen=True)
class FoodEntry:
    """One line item of a meal.

    ``profile`` holds nutrient values for ``reference_quantity`` of the food,
    expressed in ``unit``. Only ``quantity`` changes over the entry lifetime.
    """

    id: str
    name: str
    profile: NutrientProfile | None
    reference_quantity: float
    quantity: float
    unit: str = DEFAULT_UNIT
    photo_url: str | None = None
    glycemic_source: str | None = None

    def with_quantity(self, quantity: float) -> "FoodEntry":
        """Return a copy of the entry at a new quantity."""
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class MealTotals:
    """Aggregate nutrients for a list of entries."""

    calories: float
    carbs_g: float
    protein_g: float
    fat_g: float
    sugars_g: float
    fiber_g: float
    saturated_fat_g: float
    weighted_glycemic_index: float
    glycemic_load: float
    has_glycemic_data: bool = False

    @classmethod
    def zero(cls) -> "MealTotals":
        """Return totals for an empty meal."""
        return cls(
            calories=0.0,
            carbs_g=0.0,
            protein_g=0.0,
            fat_g=0.0,
            sugars_g=0.0,
            fiber_g=0.0,
            saturated_fat_g=0.0,
            weighted_glycemic_index=0.0,
            glycemic_load=0.0,
        )


@dataclass(frozen=True)
class Meal:
    """Immutable snapshot of a meal being built."""

    name: str = ""
    entries: tuple[FoodEntry, ...] = ()

    def get(self, entry_id: str) -> FoodEntry | None:
        """Return an entry by id, if present."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(self, entry: FoodEntry) -> "Meal":
        """Return a meal with the entry appended."""
        if self.get(entry.id) is not None:
            raise ValidationError(f"Entry {entry.id} is already part of the meal")
        return replace(self, entries=(*self.entries, entry))

    def remove(self, entry_id: str) -> "Meal":
        """Return a meal without the given entry."""
        if self.get(entry_id) is None:
            raise ValidationError(f"Unknown entry {entry_id}")
        return replace(
            self, entries=tuple(entry for entry in self.entries if entry.id != entry_id)
        )

    def with_quantity(self, entry_id: str, quantity: float) -> "Meal":
        """Return a meal where one entry has a new quantity."""
        if self.get(entry_id) is None:
            raise ValidationError(f"Unknown entry {entry_id}")
        return replace(
            self,
            entries=tuple(
                entry.with_quantity(quantity) if entry.id == entry_id else entry
                for entry in self.entries
            ),
        )


@dataclass(frozen=True)
class ScaledEntry:
    """Entry paired with its scaled nutrients."""

    entry: FoodEntry
    nutrients: ScaledNutrients


@dataclass(frozen=True)
class MealSummary:
    """Previewed meal with per-entry and total values."""

    name: str
    items: list[ScaledEntry]
    totals: MealTotals
    display_totals: MealTotals


@dataclass(frozen=True)
class SavedMeal:
    """Meal as stored by the persistence layer."""

    id: UUID
    user_id: UUID
    name: str
    logged_at: datetime
    totals: MealTotals
    entries: list[FoodEntry]
    photo_url: str | None = None
