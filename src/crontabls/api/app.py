"""FastAPI application factory for the crontab analysis API."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from crontabls import __version__
from crontabls.api.deps import init_document_store, reset_document_store
from crontabls.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from crontabls.api.routers import documents, validate
from crontabls.api.schemas import HealthResponse
from crontabls.parser.validator import CrontabValidator
from crontabls.service.document_store import DocumentStore
from crontabls.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Create the DocumentStore for the lifetime of the application."""
    settings: Settings = app.state.settings
    init_document_store(DocumentStore(CrontabValidator(source=settings.diagnostic_source)))
    try:
        yield
    finally:
        reset_document_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Crontab Language Server API",
        description="Diagnostics, hover text and semantic tokens for crontab files.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware)

    app.include_router(documents.router, prefix="/documents", tags=["documents"])
    app.include_router(validate.router, prefix="/validate", tags=["validate"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("crontabls.api")
    logger.info(
        "Crontab API Server v%s starting (host=%s, port=%d)",
        __version__,
        settings.api_server_host,
        settings.effective_port,
    )

    uvicorn.run(
        "crontabls.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
