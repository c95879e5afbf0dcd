"""Tests for the nutrient scaler."""

import math

import pytest

from food_snap.domain.errors import MissingDataError, ValidationError
from food_snap.domain.meals import FoodEntry
from food_snap.domain.nutrition import NutrientProfile
from food_snap.services.scaler import scale, scale_entry
from tests.conftest import RICE_PROFILE


def test_scale_applies_ratio_to_every_field() -> None:
    scaled = scale(RICE_PROFILE, 100, 150)

    assert scaled.calories == pytest.approx(195)
    assert scaled.carbs_g == pytest.approx(42)
    assert scaled.protein_g == pytest.approx(4.05)
    assert scaled.fat_g == pytest.approx(0.45)
    assert scaled.sugars_g == pytest.approx(0.15)
    assert scaled.fiber_g == pytest.approx(0.6)
    assert scaled.saturated_fat_g == pytest.approx(0.15)
    assert scaled.glycemic_index == 73
    assert scaled.glycemic_load == pytest.approx(42 * 73 / 100)


def test_scale_uses_non_default_reference_quantity() -> None:
    scaled = scale(RICE_PROFILE, 158, 79)

    assert scaled.calories == pytest.approx(65)
    assert scaled.carbs_g == pytest.approx(14)


def test_scale_is_idempotent() -> None:
    first = scale(RICE_PROFILE, 100, 87.5)
    second = scale(RICE_PROFILE, 100, 87.5)

    assert first == second


def test_edit_path_does_not_change_result() -> None:
    entry = FoodEntry(
        id="rice",
        name="Rice",
        profile=RICE_PROFILE,
        reference_quantity=100,
        quantity=100,
    )

    via_detour = entry.with_quantity(150).with_quantity(80)
    direct = entry.with_quantity(80)
    many_edits = entry
    for quantity in (133.3, 7, 999.9, 0.1, 80):
        many_edits = many_edits.with_quantity(quantity)

    assert scale_entry(via_detour) == scale_entry(direct)
    assert scale_entry(many_edits) == scale_entry(direct)
    assert scale_entry(direct) == scale(RICE_PROFILE, 100, 80)


def test_zero_quantity_yields_zero_nutrients() -> None:
    scaled = scale(RICE_PROFILE, 100, 0)

    assert scaled.calories == 0
    assert scaled.carbs_g == 0
    assert scaled.protein_g == 0
    assert scaled.fat_g == 0
    assert scaled.glycemic_load == 0


def test_missing_glycemic_index_gives_zero_load() -> None:
    profile = NutrientProfile(calories=52, carbs_g=14, protein_g=0.3, fat_g=0.2)

    scaled = scale(profile, 100, 200)

    assert scaled.carbs_g == pytest.approx(28)
    assert scaled.glycemic_index is None
    assert scaled.glycemic_load == 0


@pytest.mark.parametrize("reference", [0, -100])
def test_non_positive_reference_is_rejected(reference: float) -> None:
    with pytest.raises(ValidationError):
        scale(RICE_PROFILE, reference, 50)


def test_negative_target_is_rejected() -> None:
    with pytest.raises(ValidationError):
        scale(RICE_PROFILE, 100, -1)


def test_scale_entry_without_profile_raises_missing_data() -> None:
    entry = FoodEntry(
        id="unknown", name="Mystery", profile=None, reference_quantity=100, quantity=50
    )

    with pytest.raises(MissingDataError):
        scale_entry(entry)


def test_profile_rejects_negative_values() -> None:
    with pytest.raises(ValidationError):
        NutrientProfile(calories=-1, carbs_g=0, protein_g=0, fat_g=0)


def test_profile_rejects_glycemic_index_above_100() -> None:
    with pytest.raises(ValidationError):
        NutrientProfile(calories=0, carbs_g=0, protein_g=0, fat_g=0, glycemic_index=120)


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_profile_rejects_non_finite_values(value: float) -> None:
    with pytest.raises(ValidationError):
        NutrientProfile(calories=value, carbs_g=10, protein_g=1, fat_g=1)


@pytest.mark.parametrize("reference, target", [(math.inf, 10), (100, math.inf)])
def test_scale_rejects_non_finite_quantities(reference: float, target: float) -> None:
    with pytest.raises(ValidationError):
        scale(RICE_PROFILE, reference, target)
