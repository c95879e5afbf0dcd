"""Nutritionix v2 API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class NutritionixClient(Protocol):
    """Interface for Nutritionix API interactions."""

    async def search_instant(self, query: str) -> dict[str, object]:
        """Search foods by name and return raw API data."""

    async def natural_nutrients(self, query: str) -> dict[str, object]:
        """Return raw nutrient data for a natural-language query."""


@dataclass
class HttpxNutritionixClient(NutritionixClient):
    """HTTPX-backed Nutritionix client."""

    app_id: str
    api_key: str
    base_url: str
    locale: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, app_id: str, api_key: str, base_url: str, locale: str = "fr_FR"
    ) -> "HttpxNutritionixClient":
        """Create a Nutritionix client with a managed httpx session."""
        return cls(
            app_id=app_id,
            api_key=api_key,
            base_url=base_url,
            locale=locale,
            http_client=httpx.AsyncClient(),
        )

    def _headers(self) -> dict[str, str]:
        return {"x-app-id": self.app_id, "x-app-key": self.api_key}

    async def search_instant(self, query: str) -> dict[str, object]:
        """Search foods by name."""
        response = await self.http_client.get(
            f"{self.base_url}/search/instant/",
            params={"locale": self.locale, "query": query},
            headers=self._headers(),
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def natural_nutrients(self, query: str) -> dict[str, object]:
        """Fetch nutrient details for a food query."""
        response = await self.http_client.post(
            f"{self.base_url}/natural/nutrients",
            json={"query": query, "locale": self.locale},
            headers=self._headers(),
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
