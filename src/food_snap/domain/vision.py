"""Models for image recognition results."""

from pydantic import BaseModel, ConfigDict, Field


class VisionNutrition(BaseModel):
    """Nutrient estimate per 100 g of an ingredient."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float = Field(ge=0.0)
    protein_g: float = Field(ge=0.0)
    carbs_g: float = Field(ge=0.0)
    fat_g: float = Field(ge=0.0)
    sugars_g: float | None = Field(default=None, ge=0.0)
    fiber_g: float | None = Field(default=None, ge=0.0)
    saturated_fat_g: float | None = Field(default=None, ge=0.0)
    glycemic_index: float | None = Field(default=None, ge=0.0, le=100.0)


class VisionIngredient(BaseModel):
    """Single ingredient recognized in a dish photo."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    quantity: float = Field(ge=0.0)
    unit: str = "g"
    nutrition_per_100g: VisionNutrition | None = None


class DishAnalysis(BaseModel):
    """Structured output for a dish photo."""

    dish_name: str
    ingredients: list[VisionIngredient]
