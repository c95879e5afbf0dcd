"""Nutrition domain models."""

import math
from dataclasses import dataclass, fields

from food_snap.domain.errors import ValidationError

MAX_GLYCEMIC_INDEX = 100.0


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values for a food at its reference quantity.

    The reference quantity itself lives on the owning ``FoodEntry``.
    ``glycemic_index`` is ``None`` when unknown, which is not the same as 0.
    """

    calories: float
    carbs_g: float
    protein_g: float
    fat_g: float
    sugars_g: float = 0.0
    fiber_g: float = 0.0
    saturated_fat_g: float = 0.0
    glycemic_index: float | None = None

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            if not math.isfinite(value):
                raise ValidationError(f"{field.name} must be finite, got {value}")
            if value < 0:
                raise ValidationError(f"{field.name} must be non-negative, got {value}")
        if (
            self.glycemic_index is not None
            and self.glycemic_index > MAX_GLYCEMIC_INDEX
        ):
            raise ValidationError(
                f"glycemic_index must be between 0 and 100, got {self.glycemic_index}"
            )


@dataclass(frozen=True)
class ScaledNutrients:
    """Absolute nutrient values for an entry at its current quantity."""

    calories: float
    carbs_g: float
    protein_g: float
    fat_g: float
    sugars_g: float
    fiber_g: float
    saturated_fat_g: float
    glycemic_index: float | None
    glycemic_load: float


@dataclass(frozen=True)
class FoodSuggestion:
    """Search result from the food discovery service."""

    name: str
    serving_qty: float | None
    serving_unit: str | None
    photo_url: str | None


@dataclass(frozen=True)
class GlycemicMatch:
    """Glycemic index table entry matched for a food name."""

    name: str
    glycemic_index: float
