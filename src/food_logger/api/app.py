"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from food_logger.api.models import (
    AnalyzeRequest,
    EntryCreateRequest,
    GoalsRequest,
    SettingsUpdateRequest,
)
from food_logger.app_logging import configure_logging
from food_logger.containers import AppContainer
from food_logger.domain.entries import DailySummary, Entry
from food_logger.domain.errors import FoodLoggerError
from food_logger.domain.nutrition import FoodAnalysis, GoalEstimate
from food_logger.domain.settings import UserSettings


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FoodLoggerError)
    async def handle_food_logger_error(
        request: Request, exc: FoodLoggerError
    ) -> JSONResponse:
        logger.exception(
            "Request failed",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request.app.state.container, exc),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={"detail": jsonable_encoder(errors)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/analyze")
    async def analyze(body: AnalyzeRequest, request: Request) -> FoodAnalysis:
        """Estimate nutrition for a meal photo or description."""
        state_container: AppContainer = request.app.state.container
        return await state_container.analysis_service.analyze_food(
            image=body.image, text=body.text
        )

    @app.post("/goals")
    async def calculate_goals(body: GoalsRequest, request: Request) -> GoalEstimate:
        """Estimate daily calorie and macro goals."""
        state_container: AppContainer = request.app.state.container
        return await state_container.analysis_service.calculate_goals(
            body.to_user_stats()
        )

    @app.get("/entries")
    async def list_entries(
        request: Request,
        day: date | None = Query(default=None, alias="date"),
        timezone: str = "UTC",
    ) -> list[Entry]:
        """Return logged entries, optionally for one local calendar day."""
        state_container: AppContainer = request.app.state.container
        return state_container.entry_service.list_entries(day, timezone)

    @app.post("/entries")
    async def create_entry(body: EntryCreateRequest, request: Request) -> Entry:
        """Log a confirmed meal."""
        state_container: AppContainer = request.app.state.container
        return state_container.entry_service.create_entry(
            name=body.name,
            nutrition=body.nutrition,
            items=body.items,
            image_url=body.image_url,
        )

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: str, request: Request) -> dict[str, bool]:
        """Delete an entry; unknown ids still succeed."""
        state_container: AppContainer = request.app.state.container
        state_container.entry_service.delete_entry(entry_id)
        return {"success": True}

    @app.get("/summary")
    async def daily_summary(
        request: Request,
        day: date | None = Query(default=None, alias="date"),
        timezone: str = "UTC",
    ) -> DailySummary:
        """Return a day's totals against the goals."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.user_settings_service.get()
        return state_container.entry_service.daily_summary(settings, day, timezone)

    @app.get("/settings")
    async def get_settings(request: Request) -> UserSettings:
        """Return the current settings."""
        state_container: AppContainer = request.app.state.container
        return state_container.user_settings_service.get()

    @app.post("/settings")
    async def update_settings(
        body: SettingsUpdateRequest, request: Request
    ) -> UserSettings:
        """Merge the provided fields into the settings."""
        state_container: AppContainer = request.app.state.container
        return state_container.user_settings_service.update(body.changes())

    return app


def _error_body(state_container: AppContainer, exc: FoodLoggerError) -> dict[str, str]:
    """Return the error payload, with the error type in local environments."""
    body = {"error": str(exc) or type(exc).__name__}
    if state_container.settings.environment == "local":
        body["debug"] = type(exc).__name__
    return body
