"""Tests for vision service."""

import asyncio

import pytest

from food_snap.domain.errors import MissingDataError
from food_snap.services.vision import (
    DISH_PROMPT,
    DISH_SCHEMA,
    VisionService,
    _to_data_url,
)
from tests.conftest import FakeVisionClient


def _service(client: FakeVisionClient) -> VisionService:
    return VisionService(
        client=client,
        model="gpt-5.2",
        reasoning_effort="high",
        store=False,
    )


def test_vision_service_returns_structured_dish() -> None:
    client = FakeVisionClient()

    result = asyncio.run(_service(client).analyze(b"image-bytes"))

    assert result.dish_name == "Poulet au riz"
    assert result.ingredients[0].name == "riz"
    assert result.ingredients[1].nutrition_per_100g.glycemic_index is None
    assert client.prompts == [DISH_PROMPT]


def test_analyze_entries_maps_ingredients() -> None:
    analysis, entries = asyncio.run(
        _service(FakeVisionClient()).analyze_entries(b"image-bytes")
    )

    assert analysis.dish_name == "Poulet au riz"
    assert [entry.quantity for entry in entries] == [150, 120]
    assert all(entry.reference_quantity == 100 for entry in entries)


def test_analyze_entries_without_nutrition_raises() -> None:
    client = FakeVisionClient()
    client.payload["ingredients"][1]["nutrition_per_100g"] = None

    with pytest.raises(MissingDataError):
        asyncio.run(_service(client).analyze_entries(b"image-bytes"))


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    data = b"unknown"
    url = _to_data_url(data)

    assert url.startswith("data:image/jpeg;base64,")


def test_dish_schema_only_allows_grams() -> None:
    ingredient = DISH_SCHEMA["properties"]["ingredients"]["items"]
    assert ingredient["properties"]["unit"] == {"type": "string", "enum": ["g"]}
    assert "grams" in DISH_PROMPT
