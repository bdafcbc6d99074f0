"""Reference host: paint marks over document lines as Rich Text.

Applies a mark list the way an editor would, without touching the
lines: hidden spans disappear, inline text is inserted, overlays and
fixed-column text paint over cells, hl_eol backgrounds run to the
viewport edge, virtual lines are expanded and signs fill a two-cell
gutter. Cells are counted one per character, which is exact for the
narrow glyphs markdown decorations use.

# [LAW:one-source-of-truth] Highlight group → Rich style mapping lives in DEFAULT_THEME.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from rich.style import Style
from rich.text import Text

from mdmarks import colors
from mdmarks.core import text as text_util
from mdmarks.core.marks import Anchor, Highlight, Mark, VirtText
from mdmarks.core.node_view import Document

SIGN_WIDTH = 2

DEFAULT_THEME: dict[str, str] = {
    "Normal": "",
    "RenderMarkdownH1": "bold #89b4fa",
    "RenderMarkdownH2": "bold #f9e2af",
    "RenderMarkdownH3": "bold #a6e3a1",
    "RenderMarkdownH4": "bold #94e2d5",
    "RenderMarkdownH5": "bold #cba6f7",
    "RenderMarkdownH6": "bold #f5c2e7",
    "RenderMarkdownH1Bg": "on #1e2a44",
    "RenderMarkdownH2Bg": "on #3a3423",
    "RenderMarkdownH3Bg": "on #24372a",
    "RenderMarkdownH4Bg": "on #213635",
    "RenderMarkdownH5Bg": "on #31283f",
    "RenderMarkdownH6Bg": "on #3b2735",
    "RenderMarkdownCode": "on #2b2b2b",
    "RenderMarkdownCodeInline": "on #3b3b3b",
    "RenderMarkdownBullet": "#fab387",
    "RenderMarkdownQuote": "#9399b2",
    "RenderMarkdownDash": "#6c7086",
    "RenderMarkdownSign": "on #1e1e1e",
    "RenderMarkdownTableHead": "#89b4fa",
    "RenderMarkdownTableRow": "#9399b2",
    "RenderMarkdownTableFill": "",
    "RenderMarkdownChecked": "#a6e3a1",
    "RenderMarkdownUnchecked": "#9399b2",
    "RenderMarkdownTodo": "#89dceb",
    "RenderMarkdownInfo": "#89dceb",
    "RenderMarkdownSuccess": "#a6e3a1",
    "RenderMarkdownHint": "#cba6f7",
    "RenderMarkdownWarn": "#f9e2af",
    "RenderMarkdownError": "#f38ba8",
}


@dataclass
class _Cell:
    char: str
    style: Style
    src: int | None  # character index in the source line, None for virtual text


class Preview:
    def __init__(self, width: int, theme: Mapping[str, str] | None = None, gutter: bool = True):
        self.width = width
        self.theme = dict(DEFAULT_THEME if theme is None else theme)
        self.gutter = gutter

    # ─── Styles ──────────────────────────────────────────────────────────

    def _group(self, name: str) -> Style:
        derived = colors.lookup(name)
        if derived is None:
            return Style.parse(self.theme.get(name, "") or "none")
        base = self._group(derived.foreground)
        if derived.inverse:
            return Style(color=base.bgcolor)
        background = self._group(derived.background) if derived.background else Style()
        return Style(color=base.color, bgcolor=background.bgcolor, bold=base.bold)

    def style(self, highlight: Highlight | None) -> Style:
        if highlight is None:
            return Style()
        if isinstance(highlight, str):
            return self._group(highlight)
        return Style.combine(self._group(name) for name in highlight)

    def _virt_cells(self, chunks: Iterable[VirtText], base: Style | None = None) -> list[_Cell]:
        cells = []
        for chunk in chunks:
            style = self.style(chunk.highlight)
            if base is not None:
                style = base + style
            cells.extend(_Cell(char, style, None) for char in chunk.text)
        return cells

    # ─── Rows ────────────────────────────────────────────────────────────

    def render(self, document: Document, marks: Iterable[Mark]) -> list[Text]:
        by_row: dict[int, list[Mark]] = {}
        spans: list[Mark] = []
        for mark in marks:
            by_row.setdefault(mark.start_row, []).append(mark)
            if mark.has_span and (mark.hl_group is not None or mark.hide):
                spans.append(mark)

        out: list[Text] = []
        for row, line in enumerate(document.lines):
            row_marks = by_row.get(row, [])
            for mark in row_marks:
                if mark.virt_lines and mark.virt_lines_above:
                    out.extend(self._virt_line(chunks) for chunks in mark.virt_lines)
            out.append(self._row(row, line, row_marks, spans))
            for mark in row_marks:
                if mark.virt_lines and not mark.virt_lines_above:
                    out.extend(self._virt_line(chunks) for chunks in mark.virt_lines)
        return out

    def _virt_line(self, chunks: tuple[VirtText, ...]) -> Text:
        return self._finish(self._virt_cells(chunks), None, None)

    def _row(self, row: int, line: str, row_marks: list[Mark], spans: list[Mark]) -> Text:
        cells = [_Cell(char, Style(), index) for index, char in enumerate(line)]
        hidden: set[int] = set()
        eol_style: Style | None = None

        for mark in spans:
            columns = self._columns_on_row(mark, row, line)
            if columns is None:
                continue
            start, end, covers_eol = columns
            if mark.hide:
                hidden.update(range(start, end))
            if mark.hl_group is not None:
                style = self.style(mark.hl_group)
                for cell in cells[start:end]:
                    cell.style = cell.style + style
                if mark.hl_eol and covers_eol:
                    eol_style = style if eol_style is None else eol_style + style

        display = self._with_inline(line, cells, hidden, row_marks)
        painters = sorted(
            (m for m in row_marks if m.virt_text and m.anchor in (Anchor.OVERLAY, Anchor.WIN_COL)),
            key=lambda m: m.priority,
        )
        for mark in painters:
            if mark.anchor is Anchor.OVERLAY:
                index = text_util.byte_to_char_index(line, mark.start_col)
                position = next((i for i, c in enumerate(display) if c.src is not None and c.src >= index), len(display))
            else:
                position = mark.win_col or 0
            self._paint(display, position, self._virt_cells(mark.virt_text))

        sign = next((m for m in reversed(row_marks) if m.sign_text), None)
        return self._finish(display, eol_style, sign)

    def _columns_on_row(self, mark: Mark, row: int, line: str) -> tuple[int, int, bool] | None:
        """Character range a spanning mark covers on row, and whether it reaches past the line end."""
        end_row = mark.end_row if mark.end_row is not None else mark.start_row
        if row < mark.start_row or row > end_row:
            return None
        if row == end_row and mark.end_col == 0 and end_row > mark.start_row:
            return None
        start = text_util.byte_to_char_index(line, mark.start_col) if row == mark.start_row else 0
        if row == end_row:
            end = text_util.byte_to_char_index(line, mark.end_col or 0)
            return start, end, False
        return start, len(line), True

    def _with_inline(self, line: str, cells: list[_Cell], hidden: set[int], row_marks: list[Mark]) -> list[_Cell]:
        inserts: dict[int, list[Mark]] = {}
        for mark in row_marks:
            if mark.virt_text and mark.anchor is Anchor.INLINE:
                index = text_util.byte_to_char_index(line, mark.start_col)
                inserts.setdefault(index, []).append(mark)
        display: list[_Cell] = []
        for index in range(len(cells) + 1):
            for mark in sorted(inserts.get(index, ()), key=lambda m: m.priority):
                display.extend(self._virt_cells(mark.virt_text))
            if index < len(cells) and index not in hidden:
                display.append(cells[index])
        return display

    @staticmethod
    def _paint(display: list[_Cell], position: int, painted: list[_Cell]) -> None:
        while len(display) < position:
            display.append(_Cell(" ", Style(), None))
        for offset, cell in enumerate(painted):
            target = position + offset
            if target < len(display):
                display[target] = _Cell(cell.char, cell.style, display[target].src)
            else:
                display.append(cell)

    def _finish(self, display: list[_Cell], eol_style: Style | None, sign: Mark | None) -> Text:
        display = display[: self.width]
        if eol_style is not None:
            display.extend(_Cell(" ", eol_style, None) for _ in range(self.width - len(display)))
        result = Text()
        if self.gutter:
            if sign is not None:
                result.append(text_util.pad_to(" " * SIGN_WIDTH, sign.sign_text or ""), self.style(sign.sign_hl_group))
            else:
                result.append(" " * SIGN_WIDTH)
        for cell in display:
            result.append(cell.char, cell.style)
        return result


def render_plain(document: Document, marks: Iterable[Mark], width: int, gutter: bool = False) -> list[str]:
    """Preview as plain strings, trailing spaces removed."""
    preview = Preview(width, gutter=gutter)
    return [line.plain.rstrip() for line in preview.render(document, marks)]
