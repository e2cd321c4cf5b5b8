"""Application services."""

from __future__ import annotations

from claim_report.services.report_service import RenderedReport, ReportService

__all__ = ["RenderedReport", "ReportService"]
