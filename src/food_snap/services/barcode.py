"""Packaged food lookup by barcode, backed by OpenFoodFacts."""

import logging
from dataclasses import dataclass

from food_snap.adapters.openfoodfacts_client import OpenFoodFactsClient
from food_snap.domain.errors import ValidationError
from food_snap.domain.meals import FoodEntry
from food_snap.domain.nutrition import GlycemicMatch
from food_snap.services.cache import Cache
from food_snap.services.glycemic import GlycemicIndexTable
from food_snap.services.parsing import entry_from_openfoodfacts

_logger = logging.getLogger(__name__)

MIN_BARCODE_LENGTH = 8
MAX_BARCODE_LENGTH = 14


@dataclass
class BarcodeService:
    """Resolve scanned barcodes into meal entries of 100 g."""

    client: OpenFoodFactsClient
    cache: Cache
    glycemic_table: GlycemicIndexTable
    product_ttl_seconds: int = 86400

    async def lookup(self, code: str) -> tuple[FoodEntry, GlycemicMatch | None]:
        """Return an entry for the product behind a barcode."""
        code = _require_barcode(code)
        cache_key = f"openfoodfacts:product:{code}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            payload = cached
        else:
            try:
                payload = await self.client.get_product(code)
            except Exception:
                _logger.warning("OpenFoodFacts lookup failed: code=%s", code)
                raise
            self.cache.set(cache_key, payload, ttl_seconds=self.product_ttl_seconds)

        product = payload.get("product")
        name = product.get("product_name") if isinstance(product, dict) else None
        match = self.glycemic_table.lookup(name) if isinstance(name, str) else None
        return entry_from_openfoodfacts({"code": code, **payload}, match), match


def _require_barcode(code: str) -> str:
    cleaned = code.strip() if code else ""
    if (
        not (cleaned.isascii() and cleaned.isdigit())
        or not MIN_BARCODE_LENGTH <= len(cleaned) <= MAX_BARCODE_LENGTH
    ):
        raise ValidationError(f"Invalid barcode {code!r}")
    return cleaned
