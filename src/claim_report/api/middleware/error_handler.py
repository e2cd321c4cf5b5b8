"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from claim_report.exceptions import (
    BadRequestError,
    ClaimNotFoundError,
    ClaimReportError,
    ConfigurationError,
    ContentOverflowError,
    UpstreamFetchError,
)

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(request: Request, exc: BadRequestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "bad_request"})

    @app.exception_handler(ClaimNotFoundError)
    async def handle_not_found(request: Request, exc: ClaimNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc), "type": "not_found"})

    @app.exception_handler(UpstreamFetchError)
    async def handle_upstream_error(request: Request, exc: UpstreamFetchError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "type": "upstream_fetch_error", "upstream_status": exc.status_code},
        )

    @app.exception_handler(ConfigurationError)
    async def handle_config_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        log.error(f"Configuration error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "configuration_error"})

    @app.exception_handler(ContentOverflowError)
    async def handle_overflow(request: Request, exc: ContentOverflowError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "content_overflow"})

    @app.exception_handler(ClaimReportError)
    async def handle_generic_error(request: Request, exc: ClaimReportError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "claim_report_error"})
