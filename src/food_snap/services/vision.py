"""Dish recognition service using LLM vision."""

import base64
from dataclasses import dataclass
from typing import Protocol

from food_snap.domain.meals import FoodEntry
from food_snap.domain.vision import DishAnalysis
from food_snap.services.parsing import entries_from_vision

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

DISH_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "dish_name": {"type": "string"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number", "minimum": 0},
                    "unit": {"type": "string", "enum": ["g"]},
                    "nutrition_per_100g": {
                        "anyOf": [
                            {
                                "type": "object",
                                "properties": {
                                    "calories": {"type": "number", "minimum": 0},
                                    "protein_g": {"type": "number", "minimum": 0},
                                    "carbs_g": {"type": "number", "minimum": 0},
                                    "fat_g": {"type": "number", "minimum": 0},
                                    "sugars_g": _NULLABLE_NUMBER,
                                    "fiber_g": _NULLABLE_NUMBER,
                                    "saturated_fat_g": _NULLABLE_NUMBER,
                                    "glycemic_index": {
                                        "anyOf": [
                                            {
                                                "type": "number",
                                                "minimum": 0,
                                                "maximum": 100,
                                            },
                                            {"type": "null"},
                                        ]
                                    },
                                },
                                "required": [
                                    "calories",
                                    "protein_g",
                                    "carbs_g",
                                    "fat_g",
                                    "sugars_g",
                                    "fiber_g",
                                    "saturated_fat_g",
                                    "glycemic_index",
                                ],
                                "additionalProperties": False,
                            },
                            {"type": "null"},
                        ]
                    },
                },
                "required": ["name", "quantity", "unit", "nutrition_per_100g"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["dish_name", "ingredients"],
    "additionalProperties": False,
}

DISH_PROMPT = (
    "Analyze this food image. Give the name of the dish and, for each "
    "ingredient, its name, its estimated quantity in grams (unit \"g\", never "
    "pieces or portions) and its nutritional values per 100 g. Set "
    "glycemic_index to null when you do not know it; do not guess 0."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_bytes: bytes) -> DishAnalysis:
        """Recognize the dish and its ingredients in a photo."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=DISH_SCHEMA,
            prompt=DISH_PROMPT,
        )
        return DishAnalysis.model_validate(raw)

    async def analyze_entries(
        self, image_bytes: bytes
    ) -> tuple[DishAnalysis, list[FoodEntry]]:
        """Recognize a dish and map its ingredients to meal entries."""
        analysis = await self.analyze(image_bytes)
        return analysis, entries_from_vision(analysis)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
