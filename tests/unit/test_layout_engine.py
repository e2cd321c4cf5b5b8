"""Tests for the fixed-grid report layout engine."""

from __future__ import annotations

import logging

import pytest

from claim_report.core.config import LayoutConfig
from claim_report.exceptions import ContentOverflowError
from claim_report.layout.engine import ReportLayoutEngine
from claim_report.layout.ops import DrawOp, RectOp, TextOp
from claim_report.models import ClaimRecord, get_schema
from tests.fakes.sample_rows import make_row


def _texts(ops: list[DrawOp]) -> list[TextOp]:
    return [op for op in ops if isinstance(op, TextOp)]


def _rects(ops: list[DrawOp]) -> list[RectOp]:
    return [op for op in ops if isinstance(op, RectOp)]


def _find_text(ops: list[DrawOp], content: str) -> TextOp:
    matches = [op for op in _texts(ops) if op.content == content]
    assert matches, f"no text op {content!r}"
    return matches[0]


def _evaluation_value(ops: list[DrawOp], label: str, config: LayoutConfig) -> list[str]:
    """Wrapped lines drawn inside the evaluation box next to *label*."""
    label_op = _find_text(ops, label + ":")
    top = label_op.y + config.wrap_top_offset
    x = config.eval_box_x + config.eval_text_inset
    lowest = top - config.wrap_line_step * (config.wrap_max_lines - 1)
    return [op.content for op in _texts(ops) if op.x == x and lowest <= op.y <= top]


class TestCellTable:
    def test_twelve_rects_and_twelve_texts(self, engine: ReportLayoutEngine) -> None:
        ops, _ = engine.draw_cells([2.1, 2.0, 2.05, 1.9, 2.1, 2.0], 592)
        assert len(_rects(ops)) == 12
        assert len(_texts(ops)) == 12

    def test_headers_labelled_in_order(self, engine: ReportLayoutEngine) -> None:
        ops, _ = engine.draw_cells([1, 2, 3, 4, 5, 6], 592)
        headers = [op.content for op in _texts(ops) if op.bold]
        assert headers == ["Cell 1", "Cell 2", "Cell 3", "Cell 4", "Cell 5", "Cell 6"]

    def test_values_formatted_trimmed(self, engine: ReportLayoutEngine) -> None:
        ops, _ = engine.draw_cells([2.1, "2.000", 1.995, None, "abc", 2.08], 592)
        values = [op.content for op in _texts(ops) if not op.bold]
        assert values == ["2.1", "2", "1.995", "—", "—", "2.08"]

    def test_geometry(self, engine: ReportLayoutEngine) -> None:
        ops, next_y = engine.draw_cells([1] * 6, 592)
        rects = _rects(ops)
        header, values = rects[:6], rects[6:]
        assert [r.x for r in header] == [30, 82, 134, 186, 238, 290]
        assert all(r.y == 580 and r.width == 50 and r.height == 12 for r in header)
        assert all(r.y == 564 and r.height == 14 for r in values)
        assert next_y == 550

    def test_returned_cursor_below_start(self, engine: ReportLayoutEngine) -> None:
        _, next_y = engine.draw_cells([None] * 6, 400)
        assert next_y < 400

    def test_short_value_list_pads_with_placeholder(self, engine: ReportLayoutEngine) -> None:
        ops, _ = engine.draw_cells([2.1], 592)
        values = [op.content for op in _texts(ops) if not op.bold]
        assert values == ["2.1"] + ["—"] * 5

    def test_small_font(self, engine: ReportLayoutEngine) -> None:
        ops, _ = engine.draw_cells([1] * 6, 592)
        assert {op.size for op in _texts(ops)} == {8}


class TestTextWrapper:
    def test_long_text_yields_three_full_lines(self, engine: ReportLayoutEngine) -> None:
        ops = engine.draw_wrapped("a" * 300, 134, 100)
        assert [len(op.content) for op in ops] == [88, 88, 88]

    def test_short_text_yields_one_line(self, engine: ReportLayoutEngine) -> None:
        ops = engine.draw_wrapped("0123456789", 134, 100)
        assert len(ops) == 1
        assert ops[0].content == "0123456789"

    def test_line_positions(self, engine: ReportLayoutEngine) -> None:
        ops = engine.draw_wrapped("b" * 200, 134, 100)
        assert [(op.x, op.y) for op in ops] == [(134, 100), (134, 88), (134, 76)]
        assert {op.size for op in ops} == {9}

    def test_hard_wrap_keeps_character_order(self, engine: ReportLayoutEngine) -> None:
        text = "".join(chr(ord("a") + i % 26) for i in range(200))
        ops = engine.draw_wrapped(text, 134, 100)
        assert "".join(op.content for op in ops) == text


class TestEndToEnd:
    def test_voltage_before_charge_trimmed(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(voltage_before_charge=12.400)))
        assert any(op.content == "12.4" for op in _texts(ops))

    def test_unreadable_readings_degrade_to_placeholder(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(cell1_before=10**400, cell2_before="1_000")))
        cells = [op.content for op in _texts(ops) if op.size == 8 and not op.bold]
        assert cells[:2] == ["—", "—"]
        assert "1000" not in [op.content for op in _texts(ops)]

    def test_defective_false_renders_no(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(defective=False)))
        label = _find_text(ops, "Defective:")
        value = [op for op in _texts(ops) if op.y == label.y and op.x == 150]
        assert [op.content for op in value] == ["No"]

    def test_missing_remarks_renders_placeholder(
        self, engine: ReportLayoutEngine, layout_config: LayoutConfig
    ) -> None:
        row = make_row()
        del row["remarks"]
        ops = engine.render(ClaimRecord.from_row(row))
        assert _evaluation_value(ops, "Remarks", layout_config) == ["—"]

    def test_header(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        title, claim_no = _texts(ops)[:2]
        assert (title.content, title.x, title.y, title.bold, title.size) == ("KAPS AUTO PARTS", 30, 800, True, 12)
        assert (claim_no.content, claim_no.x, claim_no.y) == ("Claim No.: WC-2024-0042", 420, 800)
        assert claim_no.bold and claim_no.size == 12

    def test_claim_metadata_columns(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        date_label = _find_text(ops, "Date Claimed:")
        date_value = _find_text(ops, "2024-03-05")
        assert (date_label.x, date_label.y, date_label.bold) == (30, 760, True)
        assert (date_value.x, date_value.y, date_value.bold) == (130, 760, False)
        assert _find_text(ops, "Dela Cruz Motor Supply").y == 744
        assert _find_text(ops, "12 Rizal Ave, Quezon City").y == 728

    def test_item_metadata(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        heading = _find_text(ops, "Item Information")
        assert heading.size == 11 and heading.bold
        assert _find_text(ops, "4800123456789").y == heading.y - 16
        assert _find_text(ops, "NS60L-MF").y == heading.y - 32

    def test_diagnostic_values_column(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        assert _find_text(ops, "12.4").x == 180
        assert _find_text(ops, "12.75").x == 180
        assert _find_text(ops, "Low").x == 180

    def test_two_cell_tables(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        headers = [op for op in _texts(ops) if op.content.startswith("Cell ")]
        assert len(headers) == 12
        before, after = headers[:6], headers[6:]
        assert [op.x for op in before] == [op.x for op in after]
        assert after[0].y < before[0].y

    def test_assessment_grid(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        grid = {
            label: _find_text(ops, label)
            for label in ("Defective:", "Non-Adjustable:", "Recharge:", "No Defect:")
        }
        assert (grid["Defective:"].x, grid["Non-Adjustable:"].x) == (30, 280)
        assert (grid["Recharge:"].x, grid["No Defect:"].x) == (30, 280)
        assert grid["Defective:"].y == grid["Non-Adjustable:"].y
        assert grid["Recharge:"].y == grid["Defective:"].y - 16

        def value_at(label: TextOp) -> str:
            x = 150 if label.x == 30 else 420
            return next(op.content for op in _texts(ops) if op.x == x and op.y == label.y)

        assert value_at(grid["Defective:"]) == "Yes"
        assert value_at(grid["Non-Adjustable:"]) == "No"
        assert value_at(grid["Recharge:"]) == "Yes"
        assert value_at(grid["No Defect:"]) == "No"

    def test_absent_flags_render_no(self, engine: ReportLayoutEngine) -> None:
        row = make_row()
        for name in ("defective", "non_adjustable", "recharge", "no_defect"):
            del row[name]
        ops = engine.render(ClaimRecord.from_row(row))
        assert [op.content for op in _texts(ops) if op.x in (150, 420) and op.content in ("Yes", "No")] == ["No"] * 4

    def test_evaluation_boxes(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        boxes = [r for r in _rects(ops) if r.x == 130 and r.width == 430]
        assert len(boxes) == 6
        assert all(r.height == 36 for r in boxes)
        assert [boxes[i].y - boxes[i + 1].y for i in range(5)] == [44] * 5

    def test_evaluation_labels_order(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        wanted = ["Result:", "Factory Defect:", "Non-Factory Defect:", "Remarks:", "Findings:", "Final Result:"]
        labels = [op.content for op in _texts(ops) if op.content in wanted]
        assert labels == wanted

    def test_signature_block(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        diag = _find_text(ops, "Diagnosed By")
        recv = _find_text(ops, "Received By")
        assert (diag.x, recv.x) == (30, 345)
        assert diag.y == recv.y
        sig_boxes = [r for r in _rects(ops) if r.y == diag.y - 18]
        assert [(r.x, r.width, r.height) for r in sig_boxes] == [(30, 300, 36), (345, 220, 36)]
        assert _find_text(ops, "R. Santos").x == 36
        assert _find_text(ops, "M. Reyes").x == 351

    def test_received_by_omitted_when_absent(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(received_by=None)))
        recv = _find_text(ops, "Received By")
        assert not [op for op in _texts(ops) if op.x == 351 and op.y == recv.y - 6]

    def test_diagnosed_by_falls_back_to_name_column(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(diagnosed_by=None, diagnosed_by_name="J. Cruz")))
        assert _find_text(ops, "J. Cruz").x == 36

    def test_diagnosed_by_placeholder_always_drawn(self, engine: ReportLayoutEngine) -> None:
        ops = engine.render(ClaimRecord.from_row(make_row(diagnosed_by=None)))
        diag = _find_text(ops, "Diagnosed By")
        name = [op for op in _texts(ops) if op.x == 36 and op.y == diag.y - 6]
        assert [op.content for op in name] == ["—"]

    def test_empty_record_renders_complete_report(self, engine: ReportLayoutEngine) -> None:
        result = engine.layout(ClaimRecord())
        assert _find_text(list(result.ops), "Claim No.: —")
        assert len(result.rects) == 12 + 12 + 6 + 2
        assert result.truncated == ()


class TestCursorDiscipline:
    def test_content_stays_on_page(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        result = engine.layout(sample_claim)
        for op in result.ops:
            assert 30 <= op.y <= 842
            right = op.x + op.width if isinstance(op, RectOp) else op.x
            assert 0 <= right <= 595

    def test_final_cursor(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        assert engine.layout(sample_claim).cursor == 114

    def test_section_labels_descend(self, engine: ReportLayoutEngine, sample_claim: ClaimRecord) -> None:
        ops = engine.render(sample_claim)
        order = [
            "Date Claimed:",
            "Item Information",
            "Diagnostic Report",
            "A. Testing Before Charging",
            "B. Testing After Charging",
            "C. Assessment / Status",
            "Result:",
            "Final Result:",
            "Diagnosed By",
        ]
        ys = [_find_text(ops, label).y for label in order]
        assert ys == sorted(ys, reverse=True)
        assert len(set(ys)) == len(ys)


class TestIdempotence:
    def test_same_record_same_ops(self, engine: ReportLayoutEngine, sample_row: dict) -> None:
        first = engine.render(ClaimRecord.from_row(sample_row))
        second = engine.render(ClaimRecord.from_row(dict(sample_row)))
        assert first == second

    def test_separate_engines_agree(self, layout_config: LayoutConfig, sample_claim: ClaimRecord) -> None:
        assert ReportLayoutEngine(layout_config).render(sample_claim) == ReportLayoutEngine(layout_config).render(
            sample_claim
        )


class TestTruncationAndOverflow:
    def test_long_evaluation_text_reported(
        self, engine: ReportLayoutEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="claim_report")
        result = engine.layout(ClaimRecord.from_row(make_row(findings="f" * 300)))
        assert result.truncated == ("findings",)
        assert "findings" in caplog.text

    def test_overflow_warns_by_default(self, sample_claim: ClaimRecord, caplog: pytest.LogCaptureFixture) -> None:
        engine = ReportLayoutEngine(LayoutConfig(top_y=400, overflow_policy="warn"))
        with caplog.at_level(logging.WARNING, logger="claim_report"):
            result = engine.layout(sample_claim)
        assert result.ops
        assert "below the bottom margin" in caplog.text

    def test_overflow_raises_when_configured(self, sample_claim: ClaimRecord) -> None:
        engine = ReportLayoutEngine(LayoutConfig(top_y=400, overflow_policy="raise"))
        with pytest.raises(ContentOverflowError, match="overflows the page"):
            engine.layout(sample_claim)

    def test_default_layout_does_not_overflow(self, sample_claim: ClaimRecord) -> None:
        ReportLayoutEngine(LayoutConfig(overflow_policy="raise")).layout(sample_claim)


class TestSchemas:
    def test_composite_address_joined(self, layout_config: LayoutConfig) -> None:
        engine = ReportLayoutEngine(layout_config, get_schema("composite_address"))
        row = make_row(address_street="12 Rizal Ave", address_city="", address_province="Metro Manila")
        ops = engine.render(ClaimRecord.from_row(row))
        assert _find_text(ops, "12 Rizal Ave, Metro Manila").x == 130

    def test_composite_address_all_blank(self, layout_config: LayoutConfig) -> None:
        engine = ReportLayoutEngine(layout_config, get_schema("composite_address"))
        ops = engine.render(ClaimRecord.from_row(make_row()))
        address = _find_text(ops, "Address:")
        assert next(op.content for op in _texts(ops) if op.x == 130 and op.y == address.y) == "—"

    def test_schema_without_electrolyte(self, layout_config: LayoutConfig, sample_claim: ClaimRecord) -> None:
        engine = ReportLayoutEngine(layout_config, get_schema("no_electrolyte"))
        ops = engine.render(sample_claim)
        assert not [op for op in _texts(ops) if op.content == "Electrolyte:"]
        ocv = [op for op in _texts(ops) if op.content == "Open Circuit Voltage:"]
        assert len(ocv) == 2

    def test_schema_from_config(self, sample_claim: ClaimRecord) -> None:
        engine = ReportLayoutEngine(LayoutConfig(schema_version="no_electrolyte"))
        assert engine.schema.version == "no_electrolyte"

    def test_custom_title(self, layout_config: LayoutConfig, sample_claim: ClaimRecord) -> None:
        ops = ReportLayoutEngine(layout_config, title="ACME BATTERIES").render(sample_claim)
        assert _texts(ops)[0].content == "ACME BATTERIES"
