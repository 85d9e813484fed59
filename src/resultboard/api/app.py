"""FastAPI application factory for resultboard."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from resultboard import __version__
from resultboard.api.deps import init_filter_service, reset_filter_service
from resultboard.api.middleware import RequestTimingMiddleware
from resultboard.api.routers import dates, dialects, filters
from resultboard.api.schemas import HealthResponse
from resultboard.service.report_filters import ReportFilterService
from resultboard.settings import Settings

logger = logging.getLogger("resultboard.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the ReportFilterService (and its group table) before serving."""
    settings: Settings = app.state.settings
    service = ReportFilterService.from_settings(settings)
    init_filter_service(service, default_dialect=settings.default_dialect)
    logger.info(
        "Filter service ready (empty selections: %s, default dialect: %s)",
        settings.empty_selection_policy.value,
        settings.default_dialect,
    )
    try:
        yield
    finally:
        reset_filter_service()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="resultboard",
        description="Compiles exam-report filter selections into injection-safe SQL conditions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)

    app.include_router(filters.router, prefix="/filters", tags=["filters"])
    app.include_router(dates.router, prefix="/dates", tags=["dates"])
    app.include_router(dialects.router, prefix="/dialects", tags=["dialects"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "resultboard API server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "resultboard.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
