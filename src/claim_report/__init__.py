"""claim-report: warranty claim diagnostic reports rendered as single-page PDFs.

::

    from claim_report import ClaimRecord, ReportLayoutEngine, PDFFormatter

    claim = ClaimRecord.from_row(row)
    ops = ReportLayoutEngine().render(claim)
    pdf_bytes = PDFFormatter().format(claim)
"""

from __future__ import annotations

from claim_report.core.config import AppSettings, LayoutConfig
from claim_report.exceptions import (
    BadRequestError,
    ClaimNotFoundError,
    ClaimReportError,
    ConfigurationError,
    ContentOverflowError,
    SchemaError,
    UpstreamFetchError,
)
from claim_report.formatters import PDFFormatter, RecordingCanvas, ReportLabCanvas
from claim_report.layout import LayoutResult, RectOp, ReportLayoutEngine, TextOp
from claim_report.models import SCHEMAS, ClaimRecord, ClaimSchema, get_schema
from claim_report.services import RenderedReport, ReportService
from claim_report.sources import MemoryClaimSource, SupabaseClaimSource

__all__ = [
    "AppSettings",
    "BadRequestError",
    "ClaimNotFoundError",
    "ClaimRecord",
    "ClaimReportError",
    "ClaimSchema",
    "ConfigurationError",
    "ContentOverflowError",
    "LayoutConfig",
    "LayoutResult",
    "MemoryClaimSource",
    "PDFFormatter",
    "RecordingCanvas",
    "RectOp",
    "RenderedReport",
    "ReportLabCanvas",
    "ReportLayoutEngine",
    "ReportService",
    "SCHEMAS",
    "SchemaError",
    "SupabaseClaimSource",
    "TextOp",
    "UpstreamFetchError",
    "get_schema",
]
