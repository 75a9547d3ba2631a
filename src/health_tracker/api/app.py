"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from health_tracker.api.days import router as days_router
from health_tracker.api.sync import router as sync_router
from health_tracker.app_logging import configure_logging
from health_tracker.containers import AppContainer
from health_tracker.domain.errors import NothingToExportError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.container.open_resources()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(days_router)
    app.include_router(sync_router)

    @app.exception_handler(NothingToExportError)
    async def nothing_to_export(
        request: Request, exc: NothingToExportError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ValueError)
    async def invalid_input(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Rejected request to %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
