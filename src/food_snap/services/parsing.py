"""Mapping of untyped food payloads into engine types."""

from typing import TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from food_snap.domain.discovery import NutritionixFood, OpenFoodFactsResult
from food_snap.domain.errors import MissingDataError, ValidationError
from food_snap.domain.meals import DEFAULT_UNIT, FoodEntry
from food_snap.domain.nutrition import GlycemicMatch, NutrientProfile
from food_snap.domain.vision import DishAnalysis, VisionNutrition
from food_snap.services.editing import QuantityPolicy, parse_quantity

DEFAULT_REFERENCE_GRAMS = 100.0
GRAM_UNITS = frozenset({"g", "gr", "gram", "grams", "gramme", "grammes"})

ModelT = TypeVar("ModelT", bound=BaseModel)


class ProfilePayload(BaseModel):
    """Nutrient profile as exchanged over the API and stored with meals."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float = Field(ge=0.0)
    carbs_g: float = Field(ge=0.0)
    protein_g: float = Field(ge=0.0)
    fat_g: float = Field(ge=0.0)
    sugars_g: float = Field(default=0.0, ge=0.0)
    fiber_g: float = Field(default=0.0, ge=0.0)
    saturated_fat_g: float = Field(default=0.0, ge=0.0)
    glycemic_index: float | None = Field(default=None, ge=0.0, le=100.0)


class EntryPayload(BaseModel):
    """Food entry as exchanged over the API and stored with meals."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str | None = None
    name: str
    profile: ProfilePayload | None = None
    reference_quantity: float = Field(default=DEFAULT_REFERENCE_GRAMS, gt=0.0)
    quantity: float
    unit: str = DEFAULT_UNIT
    photo_url: str | None = None
    glycemic_source: str | None = None


def entry_from_payload(
    payload: dict[str, object], policy: QuantityPolicy = QuantityPolicy.REJECT
) -> FoodEntry:
    """Validate a generic entry payload and build a food entry."""
    raw_quantity = payload.get("quantity", 0)
    quantity = parse_quantity(raw_quantity, policy)
    model = _validate(EntryPayload, {**payload, "quantity": quantity})
    if model.profile is None:
        raise MissingDataError(f"Food {model.name!r} has no nutrient profile")
    return FoodEntry(
        id=model.id or _new_id(),
        name=model.name,
        profile=NutrientProfile(**model.profile.model_dump()),
        reference_quantity=model.reference_quantity,
        quantity=model.quantity,
        unit=model.unit,
        photo_url=model.photo_url,
        glycemic_source=model.glycemic_source,
    )


def entry_to_payload(entry: FoodEntry) -> dict[str, object]:
    """Serialize a food entry to its JSON payload."""
    profile = entry.profile
    return {
        "id": entry.id,
        "name": entry.name,
        "profile": (
            {
                "calories": profile.calories,
                "carbs_g": profile.carbs_g,
                "protein_g": profile.protein_g,
                "fat_g": profile.fat_g,
                "sugars_g": profile.sugars_g,
                "fiber_g": profile.fiber_g,
                "saturated_fat_g": profile.saturated_fat_g,
                "glycemic_index": profile.glycemic_index,
            }
            if profile
            else None
        ),
        "reference_quantity": entry.reference_quantity,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "photo_url": entry.photo_url,
        "glycemic_source": entry.glycemic_source,
    }


def profile_from_nutritionix(
    food: NutritionixFood, glycemic_index: float | None
) -> NutrientProfile:
    """Build a nutrient profile from a Nutritionix food."""
    core = (
        food.nf_calories,
        food.nf_total_carbohydrate,
        food.nf_protein,
        food.nf_total_fat,
    )
    if all(value is None for value in core):
        raise MissingDataError(f"Food {food.food_name!r} has no nutrient data")
    return NutrientProfile(
        calories=food.nf_calories or 0.0,
        carbs_g=food.nf_total_carbohydrate or 0.0,
        protein_g=food.nf_protein or 0.0,
        fat_g=food.nf_total_fat or 0.0,
        sugars_g=food.nf_sugars or 0.0,
        fiber_g=food.nf_dietary_fiber or 0.0,
        saturated_fat_g=food.nf_saturated_fat or 0.0,
        glycemic_index=glycemic_index,
    )


def entry_from_nutritionix(
    payload: dict[str, object],
    match: GlycemicMatch | None = None,
    fallback_photo_url: str | None = None,
) -> FoodEntry:
    """Build a food entry from a raw Nutritionix food.

    The serving weight becomes the reference quantity and the initial
    quantity, so a freshly added food shows one default serving.
    """
    food = _validate(NutritionixFood, payload)
    profile = profile_from_nutritionix(
        food, match.glycemic_index if match else None
    )
    reference = food.serving_weight_grams
    if reference is None or reference <= 0:
        reference = DEFAULT_REFERENCE_GRAMS
    photo_url = food.photo.thumb if food.photo and food.photo.thumb else None
    return FoodEntry(
        id=_new_id(),
        name=food.food_name,
        profile=profile,
        reference_quantity=reference,
        quantity=reference,
        photo_url=photo_url or fallback_photo_url,
        glycemic_source=match.name if match else None,
    )


def entry_from_openfoodfacts(
    payload: dict[str, object], match: GlycemicMatch | None = None
) -> FoodEntry:
    """Build a food entry from an OpenFoodFacts barcode lookup.

    Nutriments are given per 100 g, which becomes the reference quantity and
    the initial quantity.
    """
    result = _validate(OpenFoodFactsResult, payload)
    code = result.code or "?"
    if result.status != 1 or result.product is None:
        raise MissingDataError(f"No product found for barcode {code}")
    product = result.product
    nutriments = product.nutriments
    if nutriments is None or all(
        value is None
        for value in (
            nutriments.energy_kcal_100g,
            nutriments.carbohydrates_100g,
            nutriments.proteins_100g,
            nutriments.fat_100g,
        )
    ):
        raise MissingDataError(f"Product {code} has no nutriments")
    profile = NutrientProfile(
        calories=nutriments.energy_kcal_100g or 0.0,
        carbs_g=nutriments.carbohydrates_100g or 0.0,
        protein_g=nutriments.proteins_100g or 0.0,
        fat_g=nutriments.fat_100g or 0.0,
        sugars_g=nutriments.sugars_100g or 0.0,
        fiber_g=nutriments.fiber_100g or 0.0,
        saturated_fat_g=nutriments.saturated_fat_100g or 0.0,
        glycemic_index=match.glycemic_index if match else None,
    )
    return FoodEntry(
        id=_new_id(),
        name=product.product_name or code,
        profile=profile,
        reference_quantity=DEFAULT_REFERENCE_GRAMS,
        quantity=DEFAULT_REFERENCE_GRAMS,
        photo_url=product.image_url,
        glycemic_source=match.name if match else None,
    )


def entries_from_vision(analysis: DishAnalysis) -> list[FoodEntry]:
    """Build entries from the ingredients of a dish analysis."""
    entries: list[FoodEntry] = []
    for ingredient in analysis.ingredients:
        if ingredient.nutrition_per_100g is None:
            raise MissingDataError(
                f"Ingredient {ingredient.name!r} has no nutrient estimate"
            )
        # Profiles are per 100 g, so quantities must be grams too.
        if ingredient.unit.strip().lower() not in GRAM_UNITS:
            raise ValidationError(
                f"Ingredient {ingredient.name!r} is measured in "
                f"{ingredient.unit!r}, expected grams"
            )
        entries.append(
            FoodEntry(
                id=_new_id(),
                name=ingredient.name,
                profile=_profile_from_vision(ingredient.nutrition_per_100g),
                reference_quantity=DEFAULT_REFERENCE_GRAMS,
                quantity=ingredient.quantity,
                unit=DEFAULT_UNIT,
            )
        )
    return entries


def _profile_from_vision(nutrition: VisionNutrition) -> NutrientProfile:
    return NutrientProfile(
        calories=nutrition.calories,
        carbs_g=nutrition.carbs_g,
        protein_g=nutrition.protein_g,
        fat_g=nutrition.fat_g,
        sugars_g=nutrition.sugars_g or 0.0,
        fiber_g=nutrition.fiber_g or 0.0,
        saturated_fat_g=nutrition.saturated_fat_g or 0.0,
        glycemic_index=nutrition.glycemic_index,
    )


def _validate(model: type[ModelT], payload: object) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(str(exc)) from exc


def _new_id() -> str:
    return uuid4().hex
