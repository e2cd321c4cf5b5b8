"""Claim report endpoint: ``GET /pdf?claim=<warranty_claim_id>``."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response

from claim_report.formatters.pdf_formatter import PDFFormatter
from claim_report.services.report_service import ReportService
from claim_report.sources import create_claim_source

router = APIRouter(tags=["reports"])


def get_report_service(request: Request) -> ReportService:
    """Return the app's report service, building it on first use.

    Building raises ConfigurationError while the anon key is missing, so
    every request reports the misconfiguration instead of the app failing
    to boot.
    """
    service: ReportService | None = getattr(request.app.state, "report_service", None)
    if service is None:
        settings = request.app.state.settings
        service = ReportService(
            create_claim_source(settings),
            PDFFormatter(settings),
            filename_prefix=settings.report.filename_prefix,
        )
        request.app.state.report_service = service
    return service


@router.get(
    "/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}, "description": "Single-page claim report"}},
)
async def claim_pdf(
    claim: str | None = Query(default=None, description="Warranty claim id"),
    service: ReportService = Depends(get_report_service),
) -> Response:
    """Render the warranty claim report as an inline PDF."""
    report = await service.render(claim)
    return Response(
        content=report.content,
        media_type=report.content_type,
        headers={"Content-Disposition": f"inline; filename={report.filename}"},
    )


@router.options("/pdf")
async def claim_pdf_options() -> Response:
    """Bare OPTIONS without CORS preflight headers; real preflights are answered by the middleware."""
    return Response(status_code=204, headers={"Allow": "GET, OPTIONS"})
