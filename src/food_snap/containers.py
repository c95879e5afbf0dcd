"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_snap.adapters.nutritionix_client import HttpxNutritionixClient
from food_snap.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from food_snap.adapters.openai_vision_client import OpenAIVisionClient
from food_snap.adapters.supabase_goals_repository import SupabaseGoalsRepository
from food_snap.adapters.supabase_meal_repository import SupabaseMealRepository
from food_snap.adapters.supabase_stats_repository import SupabaseStatsRepository
from food_snap.config import Settings
from food_snap.services.barcode import BarcodeService
from food_snap.services.cache import InMemoryCache
from food_snap.services.foods import FoodSearchService
from food_snap.services.glycemic import GlycemicIndexTable
from food_snap.services.goals import GoalsService
from food_snap.services.meals import MealService
from food_snap.services.stats import StatsService
from food_snap.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_search_service: FoodSearchService
    barcode_service: BarcodeService
    vision_service: VisionService
    meal_service: MealService
    stats_service: StatsService
    goals_service: GoalsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    nutritionix_client = HttpxNutritionixClient.create(
        app_id=resolved_settings.nutritionix_app_id,
        api_key=resolved_settings.nutritionix_api_key,
        base_url=resolved_settings.nutritionix_base_url,
        locale=resolved_settings.nutritionix_locale,
    )
    glycemic_table = GlycemicIndexTable.from_file(
        resolved_settings.glycemic_index_path
    )
    cache = InMemoryCache()
    food_search_service = FoodSearchService(
        client=nutritionix_client,
        cache=cache,
        glycemic_table=glycemic_table,
        debug=resolved_settings.debug,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    barcode_service = BarcodeService(
        client=openfoodfacts_client, cache=cache, glycemic_table=glycemic_table
    )
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    meal_service = MealService(
        repository=SupabaseMealRepository(supabase_client),
        policy=resolved_settings.quantity_policy,
    )
    stats_service = StatsService(SupabaseStatsRepository(supabase_client))
    goals_service = GoalsService(SupabaseGoalsRepository(supabase_client))

    async def close_resources() -> None:
        await nutritionix_client.close()
        await openfoodfacts_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_search_service=food_search_service,
        barcode_service=barcode_service,
        vision_service=vision_service,
        meal_service=meal_service,
        stats_service=stats_service,
        goals_service=goals_service,
        close_resources=close_resources,
    )
