"""Fixed-grid layout engine for the warranty claim report.

Turns one ``ClaimRecord`` into an ordered list of ``TextOp`` / ``RectOp``
placed on a single A4 page. Sections are laid out top to bottom; each
section method takes the current cursor (a y coordinate), appends its ops
and returns the next cursor, which is never above the one it received.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from claim_report.core.config import LayoutConfig
from claim_report.exceptions import ContentOverflowError
from claim_report.layout import labels
from claim_report.layout.formatting import (
    PLACEHOLDER,
    format_date,
    format_number_trimmed,
    pad_or_dash,
    wrap_fixed,
    yes_no,
)
from claim_report.layout.ops import DrawOp, LayoutResult, RectOp, TextOp
from claim_report.models import ClaimRecord, ClaimSchema, get_schema

log = logging.getLogger(__name__)


class ReportLayoutEngine:
    """Lays out a claim record as absolutely positioned draw operations."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        schema: ClaimSchema | None = None,
        title: str = "KAPS AUTO PARTS",
    ) -> None:
        self._config = config or LayoutConfig()
        self._schema = schema or get_schema(self._config.schema_version)
        self._title = title

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def schema(self) -> ClaimSchema:
        return self._schema

    # ── Public API ───────────────────────────────────────────────────

    def render(self, claim: ClaimRecord) -> list[DrawOp]:
        """Return the draw operations for *claim* in paint order."""
        return list(self.layout(claim).ops)

    def layout(self, claim: ClaimRecord) -> LayoutResult:
        """Lay out *claim* and report the final cursor and truncated fields."""
        ops: list[DrawOp] = []
        truncated: list[str] = []

        y = self._config.top_y
        y = self._header(claim, ops, y)
        y = self._claim_info(claim, ops, y)
        y = self._item_info(claim, ops, y)
        y = self._diagnostics(claim, ops, y)
        y = self._assessment(claim, ops, y)
        y = self._evaluation(claim, ops, y, truncated)
        y = self._signatures(claim, ops, y)

        if truncated:
            log.info(
                f"Claim {pad_or_dash(claim.get(self._schema.id_field))}: text cut to "
                f"{self._config.wrap_max_lines} lines in {', '.join(truncated)}"
            )
        self._check_overflow(claim, ops)
        return LayoutResult(ops=tuple(ops), cursor=y, truncated=tuple(truncated))

    def draw_cells(self, values: Sequence[Any], start_y: float) -> tuple[list[DrawOp], float]:
        """Lay out the per-cell voltage table below *start_y*.

        A header row of ``Cell 1..N`` boxes, then a value row a small gap
        below it. Missing readings render the placeholder. Returns the ops
        and the cursor for whatever follows the table.
        """
        cfg = self._config
        ops: list[DrawOp] = []
        header_y = start_y - cfg.cell_header_height
        value_y = header_y - cfg.cell_value_height - cfg.cell_row_gap

        for i in range(cfg.cell_count):
            cx = self._cell_x(i)
            ops.append(RectOp(cx, header_y, cfg.cell_width, cfg.cell_header_height))
            ops.append(
                TextOp(
                    labels.CELL_HEADER_TEMPLATE.format(index=i + 1),
                    cx + cfg.cell_header_text_inset,
                    header_y + cfg.cell_text_baseline,
                    bold=True,
                    size=cfg.table_font_size,
                )
            )

        for i in range(cfg.cell_count):
            cx = self._cell_x(i)
            value = values[i] if i < len(values) else None
            ops.append(RectOp(cx, value_y, cfg.cell_width, cfg.cell_value_height))
            ops.append(
                TextOp(
                    format_number_trimmed(value),
                    cx + cfg.cell_value_text_inset,
                    value_y + cfg.cell_text_baseline,
                    size=cfg.table_font_size,
                )
            )

        return ops, value_y - cfg.cell_padding_below

    def draw_wrapped(self, text: Any, x: float, top_y: float) -> list[TextOp]:
        """Hard-wrap *text* into fixed-width lines starting at *top_y*.

        At most ``wrap_max_lines`` lines are emitted; the rest is dropped.
        """
        lines, _ = wrap_fixed(str(text), self._config.wrap_chars_per_line, self._config.wrap_max_lines)
        return [
            TextOp(line, x, top_y - self._config.wrap_line_step * i, size=self._config.wrap_font_size)
            for i, line in enumerate(lines)
        ]

    # ── Sections ─────────────────────────────────────────────────────

    def _header(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        ops.append(TextOp(self._title, cfg.margin_left, y, bold=True, size=cfg.title_font_size))
        ops.append(
            TextOp(
                labels.CLAIM_NUMBER_PREFIX + pad_or_dash(claim.get(self._schema.id_field)),
                cfg.claim_number_x,
                y,
                bold=True,
                size=cfg.title_font_size,
            )
        )
        return y - cfg.header_step

    def _claim_info(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        date_label, customer_label, address_label = labels.CLAIM_INFO_LABELS
        self._label_value(ops, date_label, format_date(claim.get(self._schema.date_field)), y)
        y -= cfg.line_step
        self._label_value(ops, customer_label, pad_or_dash(claim.get(self._schema.customer_field)), y)
        y -= cfg.line_step
        self._label_value(ops, address_label, pad_or_dash(self._schema.address(claim)), y)
        return y - cfg.section_gap_step

    def _item_info(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        y = self._heading(ops, labels.ITEM_HEADING, y)
        self._label_value(ops, labels.BARCODE_LABEL, pad_or_dash(claim.get(self._schema.barcode_field)), y)
        y -= cfg.line_step
        self._label_value(ops, labels.SKU_LABEL, pad_or_dash(claim.get(self._schema.sku_field)), y)
        return y - cfg.item_end_step

    def _diagnostics(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        schema = self._schema
        y = self._heading(ops, labels.DIAGNOSTIC_HEADING, y)

        ops.append(TextOp(labels.BEFORE_CHARGING_HEADING, cfg.margin_left, y, bold=True, size=cfg.body_font_size))
        y -= cfg.subsection_step
        self._reading(ops, labels.OPEN_CIRCUIT_VOLTAGE_LABEL, format_number_trimmed(claim.get(schema.voltage_before_field)), y)
        if schema.electrolyte_field:
            y -= cfg.subsection_step
            self._reading(ops, labels.ELECTROLYTE_LABEL, pad_or_dash(claim.get(schema.electrolyte_field)), y)
        y -= cfg.line_step
        cell_ops, y = self.draw_cells([claim.get(f) for f in schema.cells_before], y)
        ops.extend(cell_ops)
        y -= cfg.cells_before_gap

        ops.append(TextOp(labels.AFTER_CHARGING_HEADING, cfg.margin_left, y, bold=True, size=cfg.body_font_size))
        y -= cfg.subsection_step
        self._reading(ops, labels.OPEN_CIRCUIT_VOLTAGE_LABEL, format_number_trimmed(claim.get(schema.voltage_after_field)), y)
        y -= cfg.line_step
        cell_ops, y = self.draw_cells([claim.get(f) for f in schema.cells_after], y)
        ops.extend(cell_ops)
        return y - cfg.cells_after_gap

    def _assessment(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        ops.append(TextOp(labels.ASSESSMENT_HEADING, cfg.margin_left, y, bold=True, size=cfg.body_font_size))
        y -= cfg.line_step

        columns = len(cfg.assessment_label_x)
        fields = self._schema.assessment_fields
        for row_start in range(0, len(fields), columns):
            if row_start:
                y -= cfg.line_step
            for col, name in enumerate(fields[row_start : row_start + columns]):
                label = labels.ASSESSMENT_LABELS.get(name) or labels.field_label(name) + ":"
                ops.append(TextOp(label, cfg.assessment_label_x[col], y, bold=True, size=cfg.body_font_size))
                ops.append(TextOp(yes_no(claim.get(name)), cfg.assessment_value_x[col], y, size=cfg.body_font_size))
        return y - cfg.assessment_end_step

    def _evaluation(self, claim: ClaimRecord, ops: list[DrawOp], y: float, truncated: list[str]) -> float:
        cfg = self._config
        for name in self._schema.evaluation_fields:
            label = labels.EVALUATION_LABELS.get(name) or labels.field_label(name)
            value = pad_or_dash(claim.get(name))
            ops.append(TextOp(label + ":", cfg.margin_left, y, bold=True, size=cfg.body_font_size))
            ops.append(RectOp(cfg.eval_box_x, y - cfg.eval_box_drop, cfg.eval_box_width, cfg.eval_box_height))
            ops.extend(self.draw_wrapped(value, cfg.eval_box_x + cfg.eval_text_inset, y + cfg.wrap_top_offset))
            if len(value) > cfg.wrap_chars_per_line * cfg.wrap_max_lines:
                truncated.append(name)
            y -= cfg.eval_step
        return y

    def _signatures(self, claim: ClaimRecord, ops: list[DrawOp], y: float) -> float:
        cfg = self._config
        schema = self._schema
        diag_name = pad_or_dash(claim.first_present(*schema.diagnosed_by_fields))
        recv_name = pad_or_dash(claim.get(schema.received_by_field))

        diag_x = cfg.margin_left
        recv_x = diag_x + cfg.signature_diag_width + cfg.signature_gap
        box_y = y - cfg.signature_box_drop
        name_y = y - cfg.signature_name_drop

        ops.append(TextOp(labels.DIAGNOSED_BY_LABEL, diag_x, y, bold=True, size=cfg.body_font_size))
        ops.append(RectOp(diag_x, box_y, cfg.signature_diag_width, cfg.signature_height))
        ops.append(TextOp(diag_name, diag_x + cfg.signature_name_inset, name_y, size=cfg.body_font_size))

        ops.append(TextOp(labels.RECEIVED_BY_LABEL, recv_x, y, bold=True, size=cfg.body_font_size))
        ops.append(RectOp(recv_x, box_y, cfg.signature_recv_width, cfg.signature_height))
        if recv_name != PLACEHOLDER:
            ops.append(TextOp(recv_name, recv_x + cfg.signature_name_inset, name_y, size=cfg.body_font_size))
        return box_y

    # ── Helpers ──────────────────────────────────────────────────────

    def _heading(self, ops: list[DrawOp], text: str, y: float) -> float:
        ops.append(TextOp(text, self._config.margin_left, y, bold=True, size=self._config.section_font_size))
        return y - self._config.line_step

    def _label_value(self, ops: list[DrawOp], label: str, value: str, y: float) -> None:
        cfg = self._config
        ops.append(TextOp(label, cfg.margin_left, y, bold=True, size=cfg.body_font_size))
        ops.append(TextOp(value, cfg.value_x, y, size=cfg.body_font_size))

    def _reading(self, ops: list[DrawOp], label: str, value: str, y: float) -> None:
        cfg = self._config
        ops.append(TextOp(label, cfg.margin_left, y, size=cfg.body_font_size))
        ops.append(TextOp(value, cfg.diagnostic_value_x, y, size=cfg.body_font_size))

    def _cell_x(self, index: int) -> float:
        return self._config.margin_left + index * (self._config.cell_width + self._config.cell_gap)

    def _check_overflow(self, claim: ClaimRecord, ops: list[DrawOp]) -> None:
        lowest = min(op.y for op in ops)
        if lowest >= self._config.bottom_margin:
            return
        if self._config.overflow_policy == "raise":
            raise ContentOverflowError(lowest, self._config.bottom_margin)
        log.warning(
            f"Claim {pad_or_dash(claim.get(self._schema.id_field))}: content reaches y={lowest:g}, "
            f"below the bottom margin {self._config.bottom_margin:g}"
        )
