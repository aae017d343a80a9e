"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrition_coach.api.plans import router as plans_router
from nutrition_coach.api.tracking import router as tracking_router
from nutrition_coach.app_logging import configure_logging
from nutrition_coach.containers import AppContainer
from nutrition_coach.services.plans import PlanGenerationError
from nutrition_coach.services.vision import FoodRecognitionError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(tracking_router)
    app.include_router(plans_router)

    @app.exception_handler(PlanGenerationError)
    async def plan_generation_failed(
        request: Request, exc: PlanGenerationError
    ) -> JSONResponse:
        logger.warning("Plan generation failed: path=%s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(FoodRecognitionError)
    async def food_recognition_failed(
        request: Request, exc: FoodRecognitionError
    ) -> JSONResponse:
        logger.warning("Food recognition failed: path=%s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
