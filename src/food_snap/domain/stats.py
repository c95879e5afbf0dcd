"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class MealLogRow:
    """Summary data for a saved meal."""

    meal_id: UUID
    logged_at: datetime
    total_calories: float
    total_carbs_g: float
    total_protein_g: float
    total_fat_g: float
    glycemic_load: float = 0.0


@dataclass(frozen=True)
class DailyTotals:
    """Daily intake totals."""

    day: date
    calories: float
    carbs_g: float
    protein_g: float
    fat_g: float
    glycemic_load: float = 0.0
