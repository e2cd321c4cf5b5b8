"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from claim_report.api.middleware import register_error_handlers
from claim_report.api.routes import health, pdf
from claim_report.core.config import AppSettings
from claim_report.core.logging_config import setup_logging
from claim_report.core.startup_checks import validate_settings
from claim_report.exceptions import ConfigurationError
from claim_report.services.report_service import ReportService

log = logging.getLogger(__name__)


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("claim-report")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(settings: AppSettings | None = None, service: ReportService | None = None) -> FastAPI:
    """Build the API. *service* overrides the Supabase-backed default (tests, offline use)."""
    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        setup_logging(settings.observability)
        try:
            validate_settings(settings)
        except ConfigurationError as exc:
            # Surfaced again as a 500 on every /pdf request until fixed
            log.error(f"Startup check failed: {exc}")
        app.state.settings = settings
        app.state.report_service = service
        yield

    app = FastAPI(
        title=settings.api.title,
        description=settings.api.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(pdf.router)
    return app


app = create_app()
