"""Pipe table geometry: rows, column widths and alignment.

Column width is the cell width of the delimiter-row text between two
pipes (spaces included), so a regenerated delimiter covers the original
one exactly.

// [LAW:dataflow-not-control-flow] parse() is pure: node in, ParsedTable or GeometryError out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from mdmarks.core import text as text_util
from mdmarks.core.node_view import NodeView
from mdmarks.geometry.errors import GeometryError, GeometryErrorKind

logger = logging.getLogger(__name__)


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    DEFAULT = "default"


@dataclass(frozen=True)
class TableColumn:
    width: int
    alignment: Alignment


@dataclass(frozen=True)
class ParsedTable:
    head: NodeView
    delim: NodeView
    rows: tuple[NodeView, ...]
    columns: tuple[TableColumn, ...]

    @property
    def last(self) -> NodeView:
        """Bottom-most row: last body row, or the delimiter for a header-only table."""
        return self.rows[-1] if self.rows else self.delim


def _alignment(cell: NodeView) -> Alignment:
    left = cell.child("pipe_table_align_left") is not None
    right = cell.child("pipe_table_align_right") is not None
    if left and right:
        return Alignment.CENTER
    if left:
        return Alignment.LEFT
    if right:
        return Alignment.RIGHT
    return Alignment.DEFAULT


def _columns(delim: NodeView) -> list[TableColumn]:
    children = list(delim.children())
    columns: list[TableColumn] = []
    for index, cell in enumerate(children):
        if cell.type != "pipe_table_delimiter_cell":
            continue
        before = children[index - 1] if index > 0 else None
        after = children[index + 1] if index + 1 < len(children) else None
        start = before.end_col if before is not None and before.type == "|" else cell.start_col
        end = after.start_col if after is not None and after.type == "|" else cell.end_col
        cell_text = delim.document.slice(delim.start_row, start, delim.start_row, end)
        columns.append(TableColumn(text_util.width(cell_text), _alignment(cell)))
    return columns


def _cell_count(row: NodeView) -> int:
    return sum(1 for child in row.children() if child.type != "|")


def parse(node: NodeView) -> ParsedTable | GeometryError:
    head: NodeView | None = None
    delim: NodeView | None = None
    rows: list[NodeView] = []
    for row in node.children():
        if row.type == "pipe_table_header":
            head = row
        elif row.type == "pipe_table_delimiter_row":
            delim = row
        elif row.type == "pipe_table_row":
            rows.append(row)
        else:
            logger.info("unhandled markdown row type: %s", row.type)

    if head is None or delim is None:
        return GeometryError(
            GeometryErrorKind.MISSING_ROW,
            node.type,
            node.start_row,
            f"table without {'header' if head is None else 'delimiter row'}",
        )
    for row in (head, delim, *rows):
        if row.start_row != row.end_row:
            return GeometryError(
                GeometryErrorKind.MULTI_LINE_ROW, row.type, row.start_row, "row spans several lines"
            )

    columns = _columns(delim)
    for row in (head, *rows):
        if _cell_count(row) != len(columns):
            return GeometryError(
                GeometryErrorKind.COLUMN_MISMATCH,
                row.type,
                row.start_row,
                f"{_cell_count(row)} cells against {len(columns)} columns",
            )
    return ParsedTable(head=head, delim=delim, rows=tuple(rows), columns=tuple(columns))
