"""Report layout: value formatting, draw operations and the layout engine."""

from __future__ import annotations

from claim_report.layout.engine import ReportLayoutEngine
from claim_report.layout.formatting import (
    PLACEHOLDER,
    format_date,
    format_number_trimmed,
    pad_or_dash,
    wrap_fixed,
    yes_no,
)
from claim_report.layout.ops import DrawOp, LayoutResult, RectOp, TextOp

__all__ = [
    "PLACEHOLDER",
    "DrawOp",
    "LayoutResult",
    "RectOp",
    "ReportLayoutEngine",
    "TextOp",
    "format_date",
    "format_number_trimmed",
    "pad_or_dash",
    "wrap_fixed",
    "yes_no",
]
