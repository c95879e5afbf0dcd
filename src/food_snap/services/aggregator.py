"""Aggregation of meal entries into meal totals."""

from collections.abc import Iterable

from food_snap.domain.meals import FoodEntry, MealTotals, ScaledEntry
from food_snap.domain.nutrition import ScaledNutrients
from food_snap.services.scaler import scale_entry


def scale_entries(entries: Iterable[FoodEntry]) -> list[ScaledEntry]:
    """Scale each entry in input order."""
    return [ScaledEntry(entry=entry, nutrients=scale_entry(entry)) for entry in entries]


def aggregate(entries: Iterable[FoodEntry]) -> MealTotals:
    """Fold entries into full-precision meal totals.

    Only entries with a known glycemic index and positive carbohydrates take
    part in the weighted glycemic index and the glycemic load.
    """
    scaled = scale_entries(entries)
    if not scaled:
        return MealTotals.zero()

    calories = 0.0
    carbs_g = 0.0
    protein_g = 0.0
    fat_g = 0.0
    sugars_g = 0.0
    fiber_g = 0.0
    saturated_fat_g = 0.0
    for item in scaled:
        nutrients = item.nutrients
        calories += nutrients.calories
        carbs_g += nutrients.carbs_g
        protein_g += nutrients.protein_g
        fat_g += nutrients.fat_g
        sugars_g += nutrients.sugars_g
        fiber_g += nutrients.fiber_g
        saturated_fat_g += nutrients.saturated_fat_g

    qualifying = [
        item.nutrients
        for item in scaled
        if item.nutrients.glycemic_index is not None and item.nutrients.carbs_g > 0
    ]
    return MealTotals(
        calories=calories,
        carbs_g=carbs_g,
        protein_g=protein_g,
        fat_g=fat_g,
        sugars_g=sugars_g,
        fiber_g=fiber_g,
        saturated_fat_g=saturated_fat_g,
        weighted_glycemic_index=_weighted_glycemic_index(qualifying),
        glycemic_load=_glycemic_load(qualifying),
        has_glycemic_data=bool(qualifying),
    )


def _weighted_glycemic_index(qualifying: list[ScaledNutrients]) -> float:
    numerator = 0.0
    denominator = 0.0
    for nutrients in qualifying:
        numerator += nutrients.glycemic_index * nutrients.carbs_g
        denominator += nutrients.carbs_g
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def _glycemic_load(qualifying: list[ScaledNutrients]) -> float:
    total = 0.0
    for nutrients in qualifying:
        total += nutrients.carbs_g * nutrients.glycemic_index / 100
    return total
