"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

import httpx
from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from food_snap.api.models import (
    GoalsRequest,
    MealPreviewRequest,
    QuantityUpdateRequest,
    SaveMealRequest,
)
from food_snap.app_logging import configure_logging
from food_snap.containers import AppContainer
from food_snap.domain.errors import MissingDataError, ValidationError
from food_snap.domain.meals import FoodEntry, MealSummary
from food_snap.domain.nutrition import GlycemicMatch
from food_snap.services.rounding import (
    glycemic_index_level,
    glycemic_load_level,
    round_scaled,
)
from food_snap.services.scaler import scale_entry

MAX_SEARCH_LIMIT = 50


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(MissingDataError)
    async def missing_data_handler(
        request: Request, exc: MissingDataError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/search")
    async def search_foods(
        request: Request,
        query: str | None = None,
        limit: int = Query(5, ge=1, le=MAX_SEARCH_LIMIT),
    ) -> dict[str, object]:
        """Search foods by name."""
        if not query:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="The query parameter is required",
            )
        state_container: AppContainer = request.app.state.container
        try:
            suggestions = await state_container.food_search_service.search(
                query, limit=limit
            )
        except httpx.HTTPError as exc:
            logger.exception("Food search failed", extra={"query": query})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Food search is unavailable",
            ) from exc
        return {"foods": suggestions}

    @app.get("/api/food-info")
    async def food_info(request: Request, query: str | None = None) -> dict[str, object]:
        """Return a food entry at one default serving with its glycemic data."""
        if not query:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="The query parameter is required",
            )
        state_container: AppContainer = request.app.state.container
        try:
            entry, match = await state_container.food_search_service.get_food(query)
        except httpx.HTTPError as exc:
            logger.exception("Food lookup failed", extra={"query": query})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Food lookup is unavailable",
            ) from exc
        return _food_response(entry, match)

    @app.get("/api/barcode/{code}")
    async def barcode(code: str, request: Request) -> dict[str, object]:
        """Return a packaged food entry of 100 g for a scanned barcode."""
        state_container: AppContainer = request.app.state.container
        try:
            entry, match = await state_container.barcode_service.lookup(code)
        except httpx.HTTPError as exc:
            logger.exception("Barcode lookup failed", extra={"code": code})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Barcode lookup is unavailable",
            ) from exc
        return _food_response(entry, match)

    @app.post("/meals/preview")
    async def preview_meal(
        payload: MealPreviewRequest, request: Request
    ) -> dict[str, object]:
        """Aggregate entries without saving them."""
        meal_service = request.app.state.container.meal_service
        entries = meal_service.parse_entries(payload.entries)
        return _summary_response(meal_service.preview(entries, payload.name))

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def save_meal(payload: SaveMealRequest, request: Request) -> dict[str, object]:
        """Aggregate and persist a meal."""
        meal_service = request.app.state.container.meal_service
        entries = meal_service.parse_entries(payload.entries)
        saved = meal_service.save_meal(
            user_id=payload.user_id,
            name=payload.name,
            entries=entries,
            photo_url=payload.photo_url,
        )
        return {"meal": saved}

    @app.get("/meals/{meal_id}")
    async def get_meal(meal_id: UUID, request: Request) -> dict[str, object]:
        """Return a saved meal."""
        saved = request.app.state.container.meal_service.get_meal(meal_id)
        if saved is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal": saved}

    @app.patch("/meals/{meal_id}/entries/{entry_id}")
    async def update_entry_quantity(
        meal_id: UUID,
        entry_id: str,
        payload: QuantityUpdateRequest,
        request: Request,
    ) -> dict[str, object]:
        """Change the quantity of one entry of a saved meal."""
        saved = request.app.state.container.meal_service.update_entry_quantity(
            meal_id, entry_id, payload.quantity
        )
        if saved is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal": saved}

    @app.get("/users/{user_id}/meals")
    async def list_meals(
        user_id: UUID, request: Request, limit: int = Query(10, ge=1, le=100)
    ) -> dict[str, object]:
        """Return recent meals for a user."""
        meals = request.app.state.container.meal_service.list_meals(user_id, limit)
        return {"meals": meals}

    @app.get("/users/{user_id}/today")
    async def today(
        user_id: UUID, request: Request, timezone: str = "UTC"
    ) -> dict[str, object]:
        """Return today's intake and progress towards goals."""
        state_container: AppContainer = request.app.state.container
        totals, logs = state_container.stats_service.get_day(user_id, timezone)
        goals = state_container.goals_service.get_goals(user_id)
        return {
            "totals": totals,
            "meals": logs,
            "progress": state_container.goals_service.progress(goals, totals),
        }

    @app.get("/users/{user_id}/week")
    async def week(
        user_id: UUID, request: Request, timezone: str = "UTC"
    ) -> dict[str, object]:
        """Return the last seven days of intake."""
        summary = request.app.state.container.stats_service.get_week(
            user_id, timezone
        )
        return {"summary": summary}

    @app.get("/users/{user_id}/goals")
    async def get_goals(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's nutritional goals."""
        return {"goals": request.app.state.container.goals_service.get_goals(user_id)}

    @app.put("/users/{user_id}/goals")
    async def set_goals(
        user_id: UUID, payload: GoalsRequest, request: Request
    ) -> dict[str, object]:
        """Replace the user's nutritional goals."""
        goals = request.app.state.container.goals_service.set_goals(
            user_id, payload.to_goals()
        )
        return {"goals": goals}

    @app.post("/analyze")
    async def analyze(request: Request) -> dict[str, object]:
        """Recognize a dish photo and preview its ingredients as a meal."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Image body is empty"
            )
        try:
            analysis, entries = await state_container.vision_service.analyze_entries(
                image_bytes
            )
        except (ValidationError, MissingDataError):
            raise
        except Exception as exc:
            logger.exception("Dish analysis failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Dish analysis is unavailable",
            ) from exc
        summary = state_container.meal_service.preview(entries, analysis.dish_name)
        return _summary_response(summary)

    return app


def _food_response(entry: FoodEntry, match: GlycemicMatch | None) -> dict[str, object]:
    return {
        "entry": entry,
        "nutrients": round_scaled(scale_entry(entry)),
        "glycemic_match": match,
        "glycemic_index_level": (
            glycemic_index_level(match.glycemic_index) if match else None
        ),
    }


def _summary_response(summary: MealSummary) -> dict[str, object]:
    display = summary.display_totals
    return {
        "name": summary.name,
        "items": [
            {"entry": item.entry, "nutrients": round_scaled(item.nutrients)}
            for item in summary.items
        ],
        "totals": display,
        "glycemic_index_level": (
            glycemic_index_level(display.weighted_glycemic_index)
            if display.has_glycemic_data
            else None
        ),
        "glycemic_load_level": glycemic_load_level(display.glycemic_load),
    }
