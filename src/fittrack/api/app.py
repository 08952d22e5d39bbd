"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fittrack.api.auth import router as auth_router
from fittrack.api.nutrition import router as nutrition_router
from fittrack.api.users import router as users_router
from fittrack.app_logging import configure_logging
from fittrack.containers import AppContainer
from fittrack.domain.errors import (
    FitTrackError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[FitTrackError], int], ...] = (
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FitTrack", lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(nutrition_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(FitTrackError)
    async def handle_domain_error(
        request: Request, exc: FitTrackError
    ) -> JSONResponse:
        status_code = status_for_error(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "%s %s failed: %s", request.method, request.url.path, exc.message
            )
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "error": exc.message},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )

    return app


def status_for_error(exc: FitTrackError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
