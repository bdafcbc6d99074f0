"""Tests for pipe table marks."""

import logging

import pytest

from mdmarks.config import RenderConfig, TableBorder
from mdmarks.core.context import ConcealMap, ConcealRange
from mdmarks.core.marks import Anchor
from mdmarks.core.node_view import Document
from mdmarks.geometry.pipe_table import Alignment, TableColumn
from mdmarks.render.table import delimiter_section, delimiter_text
from tests.harness import md, on_row, render, virt, virt_line, with_anchor

TABLE = [
    "| Name | Qty |",
    "| :--- | --: |",
    "| abc  | 1   |",
]

BOLD = [
    "| a     | b |",
    "| ----- | - |",
    "| **a** | b |",
]
BOLD_CONCEAL = ConcealMap([ConcealRange(2, 2, 4), ConcealRange(2, 5, 7)])


def _render(lines, table=None, **options):
    doc = Document(lines)
    root = md.document(doc, md.pipe_table(doc, 0, len(lines) - 1))
    return render(doc, root, RenderConfig.from_dict({"pipe_table": table or {}}), **options)


# ─── Delimiter sections ──────────────────────────────────────────────────────


class TestDelimiterSection:
    @pytest.mark.parametrize(
        "width,alignment,expected",
        [
            (5, Alignment.LEFT, ":----"),
            (5, Alignment.RIGHT, "----:"),
            (5, Alignment.CENTER, "--:--"),
            (6, Alignment.CENTER, "---:--"),
            (4, Alignment.LEFT, ":---"),
            (6, Alignment.DEFAULT, "------"),
            (3, Alignment.LEFT, "---"),
        ],
    )
    def test_sections(self, width, alignment, expected):
        assert delimiter_section(TableColumn(width, alignment), ":", "-") == expected

    @pytest.mark.parametrize("width", range(1, 12))
    @pytest.mark.parametrize("alignment", list(Alignment))
    def test_section_width_matches_column(self, width, alignment):
        section = delimiter_section(TableColumn(width, alignment), "━", "─")
        assert len(section) == width

    def test_wide_indicator_is_dropped(self):
        assert delimiter_section(TableColumn(6, Alignment.LEFT), "⇐⇐", "-") == "------"

    def test_delimiter_length(self):
        columns = (TableColumn(6, Alignment.LEFT), TableColumn(3, Alignment.CENTER), TableColumn(9, Alignment.DEFAULT))
        text = delimiter_text(columns, "━", TableBorder())
        assert len(text) == 6 + 3 + 9 + (len(columns) - 1) + 2

    def test_delimiter_text_joins_with_border(self):
        columns = (TableColumn(6, Alignment.LEFT), TableColumn(5, Alignment.RIGHT))
        assert delimiter_text(columns, "━", TableBorder()) == "├━─────┼────━┤"


# ─── Rows ────────────────────────────────────────────────────────────────────


class TestRows:
    def test_pipes_become_vertical_borders(self):
        marks = _render(TABLE)
        for row, highlight in ((0, "RenderMarkdownTableHead"), (2, "RenderMarkdownTableRow")):
            pipes = [m for m in on_row(marks, row) if virt(m) == "│"]
            assert [m.start_col for m in pipes] == [0, 7, 13]
            assert {m.virt_text[0].highlight for m in pipes} == {highlight}

    def test_delimiter_regenerated(self):
        marks = _render(TABLE)
        [delim] = with_anchor(on_row(marks, 1), Anchor.OVERLAY)
        assert virt(delim) == "├━─────┼────━┤"
        assert (delim.start_col, delim.end_col) == (0, 14)

    def test_concealed_cell_gets_filler(self):
        marks = _render(BOLD, concealed=BOLD_CONCEAL)
        [filler] = with_anchor(on_row(marks, 2), Anchor.INLINE)
        assert virt(filler) == "    "
        assert filler.start_col == 7
        assert filler.virt_text[0].highlight == "RenderMarkdownTableFill"

    def test_raw_cells_have_no_filler(self):
        marks = _render(BOLD, {"cell": "raw"}, concealed=BOLD_CONCEAL)
        assert with_anchor(marks, Anchor.INLINE) == []

    def test_overlay_cells_replace_row_text(self):
        marks = _render(TABLE, {"cell": "overlay"})
        [head] = with_anchor(on_row(marks, 0), Anchor.OVERLAY)
        assert virt(head) == "│ Name │ Qty │"
        [body] = with_anchor(on_row(marks, 2), Anchor.OVERLAY)
        assert virt(body) == "│ abc  │ 1   │"


# ─── Outer borders ───────────────────────────────────────────────────────────


class TestBorders:
    def test_full_style_draws_top_and_bottom(self):
        marks = _render(TABLE)
        [top] = [m for m in marks if m.virt_lines and m.virt_lines_above]
        [bottom] = [m for m in marks if m.virt_lines and not m.virt_lines_above]
        assert top.start_row == 0
        assert virt_line(top.virt_lines[0]) == "┌──────┬─────┐"
        assert bottom.start_row == 2
        assert virt_line(bottom.virt_lines[0]) == "└──────┴─────┘"

    def test_header_only_table_bottom_under_delimiter(self):
        marks = _render(TABLE[:2])
        [bottom] = [m for m in marks if m.virt_lines and not m.virt_lines_above]
        assert bottom.start_row == 1

    def test_ragged_rows_skip_borders(self):
        marks = _render(TABLE[:2] + ["| abcdefg | 1 |"])
        assert [m for m in marks if m.virt_lines] == []
        assert len(with_anchor(on_row(marks, 2), Anchor.OVERLAY)) == 3

    def test_padded_concealed_row_keeps_borders(self):
        marks = _render(BOLD, concealed=BOLD_CONCEAL)
        assert len([m for m in marks if m.virt_lines]) == 2

    def test_raw_concealed_row_skips_borders(self):
        marks = _render(BOLD, {"cell": "raw"}, concealed=BOLD_CONCEAL)
        assert [m for m in marks if m.virt_lines] == []

    def test_normal_style_has_no_borders(self):
        marks = _render(TABLE, {"style": "normal"})
        assert [m for m in marks if m.virt_lines] == []
        assert marks

    def test_custom_border_glyphs(self):
        marks = _render(TABLE, {"border": list("╭┬╮├┼┤╰┴╯│─")})
        [top] = [m for m in marks if m.virt_lines and m.virt_lines_above]
        assert virt_line(top.virt_lines[0]) == "╭──────┬─────╮"


# ─── Skips ───────────────────────────────────────────────────────────────────


class TestSkips:
    def test_style_none(self):
        assert _render(TABLE, {"style": "none"}) == []

    def test_cell_count_mismatch_renders_nothing(self, caplog):
        with caplog.at_level(logging.INFO, logger="mdmarks"):
            marks = _render(["| a | b |", "| - | - |", "| 1 |"])
        assert marks == []
        assert "skipping table at row 2" in caplog.text
