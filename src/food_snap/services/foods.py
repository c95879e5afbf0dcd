"""Food discovery service backed by Nutritionix."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from food_snap.adapters.nutritionix_client import NutritionixClient
from food_snap.domain.discovery import NutritionixSearchResult
from food_snap.domain.errors import MissingDataError, ValidationError
from food_snap.domain.meals import FoodEntry
from food_snap.domain.nutrition import FoodSuggestion, GlycemicMatch
from food_snap.services.cache import Cache
from food_snap.services.glycemic import GlycemicIndexTable
from food_snap.services.parsing import entry_from_nutritionix

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class FoodSearchService:
    """Search foods and resolve them into meal entries."""

    client: NutritionixClient
    cache: Cache
    glycemic_table: GlycemicIndexTable
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSuggestion]:
        """Return common foods matching a name."""
        query = _require_query(query)
        if limit < 1:
            raise ValidationError(f"Search limit must be positive, got {limit}")
        cache_key = f"nutritionix:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_instant(query), action="search"
        )
        result = NutritionixSearchResult.model_validate(payload)
        suggestions = [
            FoodSuggestion(
                name=food.food_name,
                serving_qty=food.serving_qty,
                serving_unit=food.serving_unit,
                photo_url=food.photo.thumb if food.photo else None,
            )
            for food in result.common[:limit]
        ]
        self.cache.set(cache_key, suggestions, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info(
                "Food search: query=%s results=%s", query, len(suggestions)
            )
        return suggestions

    async def get_food(self, query: str) -> tuple[FoodEntry, GlycemicMatch | None]:
        """Resolve a food name into a new entry at one default serving."""
        query = _require_query(query)
        cache_key = f"nutritionix:food:{query.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            payload = cached
        else:
            payload = await self._call_with_retry(
                lambda: self.client.natural_nutrients(query),
                action=f"natural_nutrients:{query}",
            )
            self.cache.set(cache_key, payload, ttl_seconds=self.food_ttl_seconds)

        foods = payload.get("foods") or []
        if not isinstance(foods, list) or not foods:
            raise MissingDataError(f"No food found for {query!r}")
        match = self.glycemic_table.lookup(query)
        entry = entry_from_nutritionix(foods[0], match)
        if self.debug:
            _logger.info(
                "Food details: query=%s glycemic_match=%s",
                query,
                match.name if match else None,
            )
        return entry, match

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutritionix %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _require_query(query: str) -> str:
    cleaned = query.strip() if query else ""
    if not cleaned:
        raise ValidationError("A search query is required")
    return cleaned


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
