"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_snap.services.editing import QuantityPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    nutritionix_app_id: str
    nutritionix_api_key: str
    nutritionix_base_url: str = "https://trackapi.nutritionix.com/v2"
    nutritionix_locale: str = "fr_FR"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "medium"
    openai_store: bool = False
    glycemic_index_path: str | None = None
    quantity_policy: QuantityPolicy = QuantityPolicy.REJECT
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
