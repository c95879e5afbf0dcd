"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from food_snap.adapters.nutritionix_client import HttpxNutritionixClient
from food_snap.adapters.openai_vision_client import OpenAIVisionClient
from food_snap.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _extract(client: OpenAIVisionClient) -> dict[str, object]:
    return asyncio.run(
        client.extract(
            model="gpt-5.2",
            reasoning_effort="high",
            store=False,
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            prompt="Analyze this food image",
        )
    )


def test_openai_vision_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"dish_name": "Salade", "ingredients": []}))
    client = OpenAIVisionClient(client=fake)

    result = _extract(client)

    assert result == {"dish_name": "Salade", "ingredients": []}
    payload = fake.responses.last_payload
    assert payload["reasoning"] == {"effort": "high"}
    assert payload["text"]["format"]["name"] == "dish_analysis"


def test_openai_vision_client_rejects_empty_output() -> None:
    client = OpenAIVisionClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        _extract(client)


def _nutritionix(handler) -> HttpxNutritionixClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxNutritionixClient(
        app_id="app-id",
        api_key="app-key",
        base_url="https://api.test/v2",
        locale="fr_FR",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_nutritionix_client_search_and_nutrients() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        assert request.headers["x-app-id"] == "app-id"
        assert request.headers["x-app-key"] == "app-key"
        if request.url.path.endswith("/search/instant/"):
            return httpx.Response(200, json={"common": []})
        return httpx.Response(200, json={"foods": [{"food_name": "riz"}]})

    client = _nutritionix(handler)

    search = asyncio.run(client.search_instant("riz"))
    nutrients = asyncio.run(client.natural_nutrients("riz"))

    assert search == {"common": []}
    assert nutrients["foods"][0]["food_name"] == "riz"
    assert seen[0].method == "GET"
    assert seen[0].url.params["locale"] == "fr_FR"
    assert seen[0].url.params["query"] == "riz"
    assert seen[1].method == "POST"
    assert json.loads(seen[1].content) == {"query": "riz", "locale": "fr_FR"}


def test_nutritionix_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "unauthorized"})

    client = _nutritionix(handler)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_instant("riz"))


def _openfoodfacts(handler) -> HttpxOpenFoodFactsClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxOpenFoodFactsClient(
        base_url="https://off.test",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_openfoodfacts_client_fetches_product() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"code": "3017620422003", "status": 1, "product": {}}
        )

    client = _openfoodfacts(handler)

    payload = asyncio.run(client.get_product("3017620422003"))

    assert payload["status"] == 1
    assert seen[0].url.path == "/api/v0/product/3017620422003.json"
    assert seen[0].headers["User-Agent"].startswith("FoodSnap/")


def test_openfoodfacts_client_maps_404_to_unknown_product() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"status": 0})

    payload = asyncio.run(_openfoodfacts(handler).get_product("12345678"))

    assert payload == {"code": "12345678", "status": 0}


def test_openfoodfacts_client_raises_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_openfoodfacts(handler).get_product("12345678"))
