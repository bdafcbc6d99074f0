"""Per-pass render state.

RenderContext memoizes the two width adjustments other passes impose on
a node (concealed text, collapsed link text) and knows the target
display width. PassState carries the few mutable facts renderers share
within a pass. Both are built fresh for every pass and dropped after it.

// [LAW:no-shared-mutable-globals] Nothing here outlives a single pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from mdmarks.config import RenderConfig
from mdmarks.core import text as text_util
from mdmarks.core.marks import Mark, MarkCollector
from mdmarks.core.node_view import NodeKey, NodeView
from mdmarks.icons import DefaultIcons, IconProvider

WidthSource = Callable[[NodeView], int]


# ─── Host-supplied width sources ─────────────────────────────────────────────


@dataclass(frozen=True)
class ConcealRange:
    """Byte range the host conceals on one row, optionally replaced by text."""

    row: int
    start_col: int
    end_col: int
    replacement: str = ""


class ConcealMap:
    """concealed(node) from a list of ConcealRange entries."""

    def __init__(self, ranges: Iterable[ConcealRange] = ()):
        self._by_row: dict[int, list[ConcealRange]] = {}
        for entry in ranges:
            self._by_row.setdefault(entry.row, []).append(entry)

    def __call__(self, node: NodeView) -> int:
        total = 0
        for row in range(node.start_row, node.end_row + 1):
            row_start = node.start_col if row == node.start_row else 0
            row_end = node.end_col if row == node.end_row else None
            for entry in self._by_row.get(row, ()):
                start = max(entry.start_col, row_start)
                end = entry.end_col if row_end is None else min(entry.end_col, row_end)
                if end <= start:
                    continue
                hidden = text_util.width(node.document.slice(row, start, row, end))
                shown = text_util.width(entry.replacement) if entry.start_col >= row_start else 0
                total += max(hidden - shown, 0)
        return total


@dataclass(frozen=True)
class LinkWidth:
    """Cells an inline link decoration adds at (row, col)."""

    row: int
    col: int
    width: int


class LinkMap:
    """link_width(node) from a list of LinkWidth entries inside the node."""

    def __init__(self, entries: Iterable[LinkWidth] = ()):
        self._entries = tuple(entries)

    def __call__(self, node: NodeView) -> int:
        start = (node.start_row, node.start_col)
        end = (node.end_row, node.end_col)
        return sum(e.width for e in self._entries if start <= (e.row, e.col) < end)


def _zero(_node: NodeView) -> int:
    return 0


# ─── Context ─────────────────────────────────────────────────────────────────


class RenderContext:
    def __init__(
        self,
        width: int,
        concealed: WidthSource | None = None,
        link_width: WidthSource | None = None,
    ):
        self._width = width
        self._concealed_source = concealed or _zero
        self._link_source = link_width or _zero
        self._concealed: dict[NodeKey, int] = {}
        self._links: dict[NodeKey, int] = {}

    @classmethod
    def for_config(
        cls,
        config: RenderConfig,
        viewport_width: int,
        concealed: WidthSource | None = None,
        link_width: WidthSource | None = None,
    ) -> RenderContext:
        width = viewport_width if config.width == "viewport" else int(config.width)
        return cls(width, concealed, link_width)

    def get_width(self) -> int:
        return self._width

    def concealed(self, node: NodeView) -> int:
        key = node.key
        if key not in self._concealed:
            self._concealed[key] = self._concealed_source(node)
        return self._concealed[key]

    def link_width(self, node: NodeView) -> int:
        key = node.key
        if key not in self._links:
            self._links[key] = self._link_source(node)
        return self._links[key]

    def hidden(self, node: NodeView | None) -> bool:
        """True when the node is absent or all of its text is concealed."""
        return node is None or node.width == self.concealed(node)


# ─── Pass plumbing ───────────────────────────────────────────────────────────


@dataclass
class PassState:
    # Row of the blank line the previous heading drew its lower border on
    last_heading_border: int = -1


@dataclass
class RenderPass:
    """Everything a renderer reads or writes during one pass."""

    config: RenderConfig
    context: RenderContext
    marks: MarkCollector = field(default_factory=MarkCollector)
    state: PassState = field(default_factory=PassState)
    icons: IconProvider = field(default_factory=DefaultIcons)

    def add(self, conceal: bool, start_row: int, start_col: int, **fields) -> bool:
        return self.marks.add(Mark(start_row=start_row, start_col=start_col, conceal=conceal, **fields))
