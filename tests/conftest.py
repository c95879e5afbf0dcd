"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from food_snap.adapters.nutritionix_client import NutritionixClient
from food_snap.adapters.openfoodfacts_client import OpenFoodFactsClient
from food_snap.config import Settings
from food_snap.containers import AppContainer
from food_snap.domain.goals import NutritionalGoals
from food_snap.domain.meals import FoodEntry, MealTotals, SavedMeal
from food_snap.domain.nutrition import NutrientProfile
from food_snap.domain.stats import MealLogRow
from food_snap.services.barcode import BarcodeService
from food_snap.services.cache import InMemoryCache
from food_snap.services.foods import FoodSearchService
from food_snap.services.glycemic import GlycemicIndexTable
from food_snap.services.goals import GoalsRepository, GoalsService
from food_snap.services.meals import MealRepository, MealService
from food_snap.services.stats import StatsRepository, StatsService
from food_snap.services.vision import VisionClient, VisionService


def make_entry(  # noqa: PLR0913
    carbs_g: float,
    glycemic_index: float | None,
    quantity: float,
    reference_quantity: float = 100,
    calories: float = 0,
    protein_g: float = 0,
    fat_g: float = 0,
    entry_id: str | None = None,
    name: str = "food",
) -> FoodEntry:
    """Build a food entry with a simple profile."""
    return FoodEntry(
        id=entry_id or uuid4().hex,
        name=name,
        profile=NutrientProfile(
            calories=calories,
            carbs_g=carbs_g,
            protein_g=protein_g,
            fat_g=fat_g,
            glycemic_index=glycemic_index,
        ),
        reference_quantity=reference_quantity,
        quantity=quantity,
    )


RICE_PROFILE = NutrientProfile(
    calories=130,
    carbs_g=28,
    protein_g=2.7,
    fat_g=0.3,
    sugars_g=0.1,
    fiber_g=0.4,
    saturated_fat_g=0.1,
    glycemic_index=73,
)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, SavedMeal] = field(default_factory=dict)

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        totals: MealTotals,
        entries: list[FoodEntry],
        photo_url: str | None,
    ) -> UUID:
        meal_id = uuid4()
        self.meals[meal_id] = SavedMeal(
            id=meal_id,
            user_id=user_id,
            name=name,
            logged_at=logged_at,
            totals=totals,
            entries=list(entries),
            photo_url=photo_url,
        )
        return meal_id

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        return self.meals.get(meal_id)

    def list_meals(self, user_id: UUID, limit: int) -> list[SavedMeal]:
        meals = [meal for meal in self.meals.values() if meal.user_id == user_id]
        return sorted(meals, key=lambda meal: meal.logged_at, reverse=True)[:limit]

    def update_meal(
        self, meal_id: UUID, totals: MealTotals, entries: list[FoodEntry]
    ) -> None:
        current = self.meals[meal_id]
        self.meals[meal_id] = SavedMeal(
            id=current.id,
            user_id=current.user_id,
            name=current.name,
            logged_at=current.logged_at,
            totals=totals,
            entries=list(entries),
            photo_url=current.photo_url,
        )


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory stats repository for tests."""

    logs: list[MealLogRow] = field(default_factory=list)

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogRow]:
        return [log for log in self.logs if start <= log.logged_at < end]


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory goals repository for tests."""

    goals: dict[UUID, NutritionalGoals] = field(default_factory=dict)

    def get_goals(self, user_id: UUID) -> NutritionalGoals | None:
        return self.goals.get(user_id)

    def set_goals(self, user_id: UUID, goals: NutritionalGoals) -> None:
        self.goals[user_id] = goals


@dataclass
class FakeNutritionixClient(NutritionixClient):
    """Fake Nutritionix client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "common": [
                {
                    "food_name": "riz blanc",
                    "serving_qty": 1,
                    "serving_unit": "tasse",
                    "photo": {"thumb": "https://example.com/riz.jpg"},
                },
                {
                    "food_name": "riz complet",
                    "serving_qty": 1,
                    "serving_unit": "tasse",
                    "photo": {"thumb": None},
                },
            ]
        }
    )
    nutrients_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "food_name": "riz blanc",
                    "serving_qty": 1,
                    "serving_unit": "tasse",
                    "serving_weight_grams": 158,
                    "nf_calories": 205.4,
                    "nf_total_carbohydrate": 44.5,
                    "nf_protein": 4.3,
                    "nf_total_fat": 0.4,
                    "nf_sugars": 0.1,
                    "nf_dietary_fiber": 0.6,
                    "nf_saturated_fat": 0.1,
                    "photo": {"thumb": "https://example.com/riz.jpg"},
                }
            ]
        }
    )
    search_calls: int = 0
    nutrients_calls: int = 0

    async def search_instant(self, query: str) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload

    async def natural_nutrients(self, query: str) -> dict[str, object]:
        self.nutrients_calls += 1
        return self.nutrients_payload


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake OpenFoodFacts client knowing a single product."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "3017620422003": {
                "code": "3017620422003",
                "status": 1,
                "product": {
                    "product_name": "Nutella",
                    "brands": "Ferrero",
                    "image_url": "https://example.com/nutella.jpg",
                    "nutriments": {
                        "energy-kcal_100g": 539,
                        "carbohydrates_100g": 57.5,
                        "proteins_100g": 6.3,
                        "fat_100g": 30.9,
                        "sugars_100g": 56.3,
                        "saturated-fat_100g": 10.6,
                    },
                },
            }
        }
    )
    calls: int = 0

    async def get_product(self, code: str) -> dict[str, object]:
        self.calls += 1
        return self.products.get(code, {"code": code, "status": 0})


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed dish analysis."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "dish_name": "Poulet au riz",
            "ingredients": [
                {
                    "name": "riz",
                    "quantity": 150,
                    "unit": "g",
                    "nutrition_per_100g": {
                        "calories": 130,
                        "protein_g": 2.7,
                        "carbs_g": 28,
                        "fat_g": 0.3,
                        "sugars_g": None,
                        "fiber_g": 0.4,
                        "saturated_fat_g": None,
                        "glycemic_index": 73,
                    },
                },
                {
                    "name": "poulet",
                    "quantity": 120,
                    "unit": "g",
                    "nutrition_per_100g": {
                        "calories": 165,
                        "protein_g": 31,
                        "carbs_g": 0,
                        "fat_g": 3.6,
                        "sugars_g": 0,
                        "fiber_g": 0,
                        "saturated_fat_g": 1,
                        "glycemic_index": None,
                    },
                },
            ],
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        nutritionix_app_id="app-id",
        nutritionix_api_key="app-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository()


@pytest.fixture
def nutritionix_client() -> FakeNutritionixClient:
    return FakeNutritionixClient()


@pytest.fixture
def container(
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    stats_repository: InMemoryStatsRepository,
    goals_repository: InMemoryGoalsRepository,
    nutritionix_client: FakeNutritionixClient,
) -> AppContainer:
    glycemic_table = GlycemicIndexTable.from_mapping({"Riz blanc": 73, "Nutella": 33})
    food_search_service = FoodSearchService(
        client=nutritionix_client,
        cache=InMemoryCache(),
        glycemic_table=glycemic_table,
    )
    barcode_service = BarcodeService(
        client=FakeOpenFoodFactsClient(),
        cache=InMemoryCache(),
        glycemic_table=glycemic_table,
    )
    vision_service = VisionService(
        client=FakeVisionClient(),
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_search_service=food_search_service,
        barcode_service=barcode_service,
        vision_service=vision_service,
        meal_service=MealService(meal_repository),
        stats_service=StatsService(stats_repository),
        goals_service=GoalsService(goals_repository),
        close_resources=close_resources,
    )
