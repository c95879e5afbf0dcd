"""Rounding policy applied at the presentation boundary."""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from food_snap.domain.meals import MealTotals
from food_snap.domain.nutrition import ScaledNutrients

GRAM_DECIMALS = 1
GLYCEMIC_DECIMALS = 1


def round_grams(value: float) -> float:
    """Round a gram amount to one decimal."""
    return _round_half_up(value, GRAM_DECIMALS)


def round_calories(value: float) -> float:
    """Round calories to a whole number."""
    return _round_half_up(value, 0)


def round_glycemic(value: float) -> float:
    """Round a glycemic index or load to one decimal."""
    return _round_half_up(value, GLYCEMIC_DECIMALS)


def round_scaled(nutrients: ScaledNutrients) -> ScaledNutrients:
    """Return scaled nutrients rounded for display."""
    return replace(
        nutrients,
        calories=round_calories(nutrients.calories),
        carbs_g=round_grams(nutrients.carbs_g),
        protein_g=round_grams(nutrients.protein_g),
        fat_g=round_grams(nutrients.fat_g),
        sugars_g=round_grams(nutrients.sugars_g),
        fiber_g=round_grams(nutrients.fiber_g),
        saturated_fat_g=round_grams(nutrients.saturated_fat_g),
        glycemic_load=round_glycemic(nutrients.glycemic_load),
    )


def round_totals(totals: MealTotals) -> MealTotals:
    """Return meal totals rounded for display or storage."""
    return replace(
        totals,
        calories=round_calories(totals.calories),
        carbs_g=round_grams(totals.carbs_g),
        protein_g=round_grams(totals.protein_g),
        fat_g=round_grams(totals.fat_g),
        sugars_g=round_grams(totals.sugars_g),
        fiber_g=round_grams(totals.fiber_g),
        saturated_fat_g=round_grams(totals.saturated_fat_g),
        weighted_glycemic_index=round_glycemic(totals.weighted_glycemic_index),
        glycemic_load=round_glycemic(totals.glycemic_load),
    )


def glycemic_index_level(value: float) -> str:
    """Classify a glycemic index as low, medium or high."""
    if value <= 55:  # noqa: PLR2004
        return "low"
    if value <= 70:  # noqa: PLR2004
        return "medium"
    return "high"


def glycemic_load_level(value: float) -> str:
    """Classify a glycemic load as low, medium or high."""
    if value <= 10:  # noqa: PLR2004
        return "low"
    if value <= 20:  # noqa: PLR2004
        return "medium"
    return "high"


def _round_half_up(value: float, decimals: int) -> float:
    """Round halves away from zero, as the mobile app displays values."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
