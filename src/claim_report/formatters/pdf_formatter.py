"""PDF output formatter using reportlab.

The layout engine decides where everything goes; this module only paints the
resulting ops onto a single reportlab page with the standard Helvetica pair.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from io import BytesIO
from pathlib import Path

from reportlab.lib import colors as rl_colors
from reportlab.pdfgen import canvas as rl_canvas

from claim_report.core.config import AppSettings
from claim_report.formatters.protocols import IPageCanvas
from claim_report.layout.engine import ReportLayoutEngine
from claim_report.layout.ops import DrawOp, RectOp, TextOp
from claim_report.models import ClaimRecord

log = logging.getLogger(__name__)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


# ── Unicode sanitization ────────────────────────────────────────────
# The standard Type 1 Helvetica only covers WinAnsi. The placeholder
# em-dash is in that set; these look-alikes are not.

_UNICODE_REPLACEMENTS: dict[str, str] = {
    "\u2010": "-",       # hyphen
    "\u2011": "-",       # non-breaking hyphen
    "\u2012": "-",       # figure dash
    "\u2015": "\u2014",  # horizontal bar
    "\u2212": "-",       # minus sign
    "\u202f": " ",       # narrow no-break space
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    "\u200b": "",        # zero-width space
    "\u2192": "->",      # rightwards arrow
    "\u2264": "<=",      # less-than or equal
    "\u2265": ">=",      # greater-than or equal
}


def sanitize_text(text: str) -> str:
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


# ── reportlab page ──────────────────────────────────────────────────


class ReportLabCanvas:
    """One-page reportlab canvas writing into an in-memory buffer."""

    def __init__(self, page_size: tuple[float, float] = (595.0, 842.0), title: str = "") -> None:
        self._buffer = BytesIO()
        # invariant=1 pins the creation date and document id so output is reproducible
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=page_size, invariant=1)
        if title:
            self._canvas.setTitle(title)
        self._canvas.setFillColor(rl_colors.black)
        self._canvas.setStrokeColor(rl_colors.black)

    def draw_text(self, content: str, x: float, y: float, *, bold: bool = False, size: int = 10) -> None:
        self._canvas.setFont(FONT_BOLD if bold else FONT_REGULAR, size)
        self._canvas.drawString(x, y, sanitize_text(str(content)))

    def draw_rect(self, x: float, y: float, width: float, height: float, border_width: float = 1.0) -> None:
        self._canvas.setLineWidth(border_width)
        self._canvas.rect(x, y, width, height, stroke=1, fill=0)

    def serialize(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()


def replay(ops: Iterable[DrawOp], page: IPageCanvas) -> None:
    """Paint *ops* onto *page* in order."""
    for op in ops:
        if isinstance(op, TextOp):
            page.draw_text(op.content, op.x, op.y, bold=op.bold, size=op.size)
        elif isinstance(op, RectOp):
            page.draw_rect(op.x, op.y, op.width, op.height, op.border_width)
        else:
            raise TypeError(f"Unsupported draw op: {op!r}")


# ── PDFFormatter ─────────────────────────────────────────────────────


class PDFFormatter:
    """Renders a ``ClaimRecord`` as a single-page warranty claim PDF."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        engine: ReportLayoutEngine | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._engine = engine or ReportLayoutEngine(
            self._settings.layout,
            title=self._settings.report.company_name,
        )

    @property
    def engine(self) -> ReportLayoutEngine:
        return self._engine

    def format(self, claim: ClaimRecord) -> bytes:
        """Render *claim* to PDF bytes."""
        start = time.perf_counter()
        result = self._engine.layout(claim)
        layout = self._engine.config
        page = ReportLabCanvas(
            (layout.page_width, layout.page_height),
            title=f"Warranty Claim {claim.get(self._engine.schema.id_field) or ''}".strip(),
        )
        replay(result.ops, page)
        data = page.serialize()
        log.debug(
            f"Rendered {len(result.ops)} ops into {len(data)} bytes "
            f"in {(time.perf_counter() - start) * 1000:.1f} ms"
        )
        return data

    def format_to_file(self, claim: ClaimRecord, path: Path) -> Path:
        """Write PDF to *path* and return it."""
        path.write_bytes(self.format(claim))
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"
