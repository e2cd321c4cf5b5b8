"""Output formatters: the reportlab PDF page and an in-memory recorder."""

from __future__ import annotations

from claim_report.formatters.pdf_formatter import PDFFormatter, ReportLabCanvas, replay
from claim_report.formatters.protocols import IOutputFormatter, IPageCanvas
from claim_report.formatters.recording import RecordingCanvas

__all__ = [
    "IOutputFormatter",
    "IPageCanvas",
    "PDFFormatter",
    "RecordingCanvas",
    "ReportLabCanvas",
    "replay",
]
