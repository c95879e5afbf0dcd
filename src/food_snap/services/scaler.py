"""Scaling of reference nutrient profiles to a target quantity."""

import math

from food_snap.domain.errors import MissingDataError, ValidationError
from food_snap.domain.meals import FoodEntry
from food_snap.domain.nutrition import NutrientProfile, ScaledNutrients


def scale(
    profile: NutrientProfile, reference_quantity: float, target_quantity: float
) -> ScaledNutrients:
    """Return absolute nutrients for ``target_quantity`` of a food.

    Values are always derived from the reference profile, never from a
    previously scaled result, and are not rounded.
    """
    if not math.isfinite(reference_quantity) or reference_quantity <= 0:
        raise ValidationError(
            f"Reference quantity must be positive, got {reference_quantity}"
        )
    if not math.isfinite(target_quantity) or target_quantity < 0:
        raise ValidationError(
            f"Target quantity must be a non-negative number, got {target_quantity}"
        )
    ratio = target_quantity / reference_quantity
    carbs_g = profile.carbs_g * ratio
    if profile.glycemic_index is None:
        glycemic_load = 0.0
    else:
        glycemic_load = carbs_g * profile.glycemic_index / 100
    return ScaledNutrients(
        calories=profile.calories * ratio,
        carbs_g=carbs_g,
        protein_g=profile.protein_g * ratio,
        fat_g=profile.fat_g * ratio,
        sugars_g=profile.sugars_g * ratio,
        fiber_g=profile.fiber_g * ratio,
        saturated_fat_g=profile.saturated_fat_g * ratio,
        glycemic_index=profile.glycemic_index,
        glycemic_load=glycemic_load,
    )


def scale_entry(entry: FoodEntry) -> ScaledNutrients:
    """Scale an entry at its current quantity."""
    if entry.profile is None:
        raise MissingDataError(f"Entry {entry.id} ({entry.name}) has no nutrients")
    return scale(entry.profile, entry.reference_quantity, entry.quantity)
