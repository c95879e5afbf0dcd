"""OpenFoodFacts product API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

USER_AGENT = "FoodSnap/0.1 (https://food-snap.vercel.app)"


class OpenFoodFactsClient(Protocol):
    """Interface for OpenFoodFacts barcode lookups."""

    async def get_product(self, code: str) -> dict[str, object]:
        """Return the raw product payload for a barcode."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/api/v0/product/{code}.json",
            headers={"User-Agent": USER_AGENT},
            timeout=15,
        )
        # Unknown barcodes may come back as 404 instead of status 0.
        if response.status_code == httpx.codes.NOT_FOUND:
            return {"code": code, "status": 0}
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
