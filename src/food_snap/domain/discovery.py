"""Models for food discovery API payloads."""

from pydantic import BaseModel, ConfigDict, Field


class NutritionixPhoto(BaseModel):
    """Photo URLs attached to a Nutritionix food."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    thumb: str | None = None
    highres: str | None = None


class NutritionixFood(BaseModel):
    """Food returned by the Nutritionix natural nutrients endpoint.

    Nutrient fields are optional because the API omits them for some foods;
    a food carrying none of the core fields has no usable profile.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    food_name: str
    serving_qty: float | None = None
    serving_unit: str | None = None
    serving_weight_grams: float | None = None
    nf_calories: float | None = Field(default=None, ge=0.0)
    nf_total_carbohydrate: float | None = Field(default=None, ge=0.0)
    nf_protein: float | None = Field(default=None, ge=0.0)
    nf_total_fat: float | None = Field(default=None, ge=0.0)
    nf_sugars: float | None = Field(default=None, ge=0.0)
    nf_dietary_fiber: float | None = Field(default=None, ge=0.0)
    nf_saturated_fat: float | None = Field(default=None, ge=0.0)
    photo: NutritionixPhoto | None = None


class NutritionixCommonFood(BaseModel):
    """Common food returned by the instant search endpoint."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    food_name: str
    serving_qty: float | None = None
    serving_unit: str | None = None
    photo: NutritionixPhoto | None = None


class NutritionixSearchResult(BaseModel):
    """Instant search payload."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    common: list[NutritionixCommonFood] = Field(default_factory=list)


class OpenFoodFactsNutriments(BaseModel):
    """Per-100 g nutriments of an OpenFoodFacts product."""

    model_config = ConfigDict(
        extra="ignore", allow_inf_nan=False, populate_by_name=True
    )

    energy_kcal_100g: float | None = Field(
        default=None, alias="energy-kcal_100g", ge=0.0
    )
    carbohydrates_100g: float | None = Field(default=None, ge=0.0)
    proteins_100g: float | None = Field(default=None, ge=0.0)
    fat_100g: float | None = Field(default=None, ge=0.0)
    sugars_100g: float | None = Field(default=None, ge=0.0)
    fiber_100g: float | None = Field(default=None, ge=0.0)
    saturated_fat_100g: float | None = Field(
        default=None, alias="saturated-fat_100g", ge=0.0
    )


class OpenFoodFactsProduct(BaseModel):
    """Product section of an OpenFoodFacts lookup."""

    model_config = ConfigDict(extra="ignore")

    product_name: str | None = None
    brands: str | None = None
    image_url: str | None = None
    nutriments: OpenFoodFactsNutriments | None = None


class OpenFoodFactsResult(BaseModel):
    """Barcode lookup payload; ``status`` is 1 when the product exists."""

    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    status: int = 0
    product: OpenFoodFactsProduct | None = None
