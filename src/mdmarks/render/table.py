"""Pipe table renderer: cell borders, regenerated delimiter row, outer borders."""

from __future__ import annotations

import logging

from mdmarks.config import TableBorder
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, VirtText
from mdmarks.core.node_view import NodeView
from mdmarks.geometry import pipe_table
from mdmarks.geometry.errors import GeometryError
from mdmarks.geometry.pipe_table import Alignment, ParsedTable, TableColumn

logger = logging.getLogger(__name__)


def render(node: NodeView, rp: RenderPass) -> None:
    config = rp.config.pipe_table
    if not config.enabled or config.style == "none":
        return
    parsed = pipe_table.parse(node)
    if isinstance(parsed, GeometryError):
        logger.info("skipping table at row %d: %s", parsed.row, parsed.details)
        return

    _row(parsed.head, rp, config.head)
    _delimiter(parsed, rp)
    for row in parsed.rows:
        _row(row, rp, config.row)
    if config.style == "full":
        _full(parsed, rp)


# ─── Delimiter row ───────────────────────────────────────────────────────────


def delimiter_section(column: TableColumn, indicator: str, fill: str) -> str:
    """One column of the regenerated delimiter row, exactly column.width cells."""
    # Small columns have no room for an indicator, and it must be one cell wide
    if column.width < 4 or text_util.width(indicator) != 1 or column.alignment is Alignment.DEFAULT:
        return fill * column.width
    left = fill * (column.width // 2)
    right = fill * ((column.width + 1) // 2 - 1)
    if column.alignment is Alignment.LEFT:
        return indicator + left + right
    if column.alignment is Alignment.RIGHT:
        return left + right + indicator
    return left + indicator + right


def delimiter_text(columns: tuple[TableColumn, ...], indicator: str, border: TableBorder) -> str:
    sections = [delimiter_section(column, indicator, border.horizontal) for column in columns]
    return border.mid_left + border.mid_mid.join(sections) + border.mid_right


def _delimiter(parsed: ParsedTable, rp: RenderPass) -> None:
    config = rp.config.pipe_table
    row = parsed.delim
    text = delimiter_text(parsed.columns, config.alignment_indicator, config.border)
    rp.add(
        True,
        row.start_row,
        row.start_col,
        end_row=row.end_row,
        end_col=row.end_col,
        virt_text=(VirtText(text, config.head),),
        anchor=Anchor.OVERLAY,
    )


# ─── Header and body rows ────────────────────────────────────────────────────


def _visual_offset(node: NodeView, rp: RenderPass) -> int:
    """Cells the node shrinks by once concealment and link text apply."""
    return rp.context.concealed(node) - rp.context.link_width(node)


def _row(row: NodeView, rp: RenderPass, highlight: str) -> None:
    config = rp.config.pipe_table
    if config.cell == "overlay":
        rp.add(
            True,
            row.start_row,
            row.start_col,
            end_row=row.end_row,
            end_col=row.end_col,
            virt_text=(VirtText(row.text.replace("|", config.border.vertical), highlight),),
            anchor=Anchor.OVERLAY,
        )
        return

    for cell in row.children():
        if cell.type == "|":
            rp.add(
                True,
                cell.start_row,
                cell.start_col,
                end_row=cell.end_row,
                end_col=cell.end_col,
                virt_text=(VirtText(config.border.vertical, highlight),),
                anchor=Anchor.OVERLAY,
            )
        elif cell.type == "pipe_table_cell":
            if config.cell != "padded":
                continue
            offset = _visual_offset(cell, rp)
            if offset > 0:
                rp.add(
                    True,
                    cell.start_row,
                    cell.end_col,
                    virt_text=(VirtText(text_util.pad(offset), config.filler),),
                    anchor=Anchor.INLINE,
                )
        else:
            logger.warning("unhandled markdown cell type: %s", cell.type)


# ─── Outer borders ───────────────────────────────────────────────────────────


def _full(parsed: ParsedTable, rp: RenderPass) -> None:
    config = rp.config.pipe_table
    border = config.border

    def width(node: NodeView) -> int:
        result = node.width
        if config.cell == "raw":
            # Raw cells are compared after concealment and inline text apply
            result -= _visual_offset(node, rp)
        return result

    first, last = parsed.head, parsed.last
    # The delimiter row never has concealed or inline content
    delim_width = parsed.delim.width
    if delim_width != width(first) or delim_width != width(last):
        logger.debug("table at row %d: row widths differ from delimiter, no outer border", first.start_row)
        return

    sections = [border.horizontal * column.width for column in parsed.columns]

    line_above = border.top_left + border.top_mid.join(sections) + border.top_right
    rp.add(
        False,
        first.start_row,
        first.start_col,
        virt_lines=((VirtText(line_above, config.head),),),
        virt_lines_above=True,
    )

    line_below = border.bottom_left + border.bottom_mid.join(sections) + border.bottom_right
    rp.add(
        False,
        last.start_row,
        last.start_col,
        virt_lines=((VirtText(line_below, config.row),),),
    )
