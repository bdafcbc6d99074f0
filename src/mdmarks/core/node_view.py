"""Read-only adapter over a syntax-tree node.

The parser is external: any object shaped like a tree-sitter node works
(``type``, ``start_point``, ``end_point``, ``parent``, ``children``,
``next_sibling``). Points are ``(row, byte_column)`` pairs, exactly as
tree-sitter reports them; text is sliced from the Document by bytes so
multi-byte content keeps its columns.

// [LAW:one-source-of-truth] Node text always comes from Document, never from the node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal

from mdmarks.core import text as text_util


@dataclass(frozen=True)
class NodeKey:
    """Stable identity of a node within one pass."""

    row: int
    col: int
    type: str


class Document:
    """Immutable line view of the buffer being decorated."""

    def __init__(self, lines: list[str] | tuple[str, ...]):
        self._lines: tuple[str, ...] = tuple(lines)

    @classmethod
    def from_text(cls, source: str) -> Document:
        return cls(source.split("\n"))

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str | None:
        if 0 <= row < len(self._lines):
            return self._lines[row]
        return None

    def slice(self, start_row: int, start_col: int, end_row: int, end_col: int) -> str:
        """Text between two (row, byte column) points, newline-joined."""
        if start_row >= len(self._lines):
            return ""
        parts: list[str] = []
        last_row = min(end_row, len(self._lines) - 1)
        for row in range(start_row, last_row + 1):
            raw = self._lines[row].encode("utf-8")
            begin = start_col if row == start_row else 0
            finish = end_col if row == end_row else len(raw)
            parts.append(raw[begin:finish].decode("utf-8", errors="replace"))
        if end_row > last_row:
            # Node ends past the final line (trailing newline of the buffer)
            parts.append("")
        return "\n".join(parts)


class NodeView:
    """One syntax node plus the document it was parsed from."""

    __slots__ = ("document", "node", "type", "start_row", "start_col", "end_row", "end_col", "text")

    def __init__(self, document: Document, node):
        self.document = document
        self.node = node
        self.type: str = node.type
        self.start_row, self.start_col = int(node.start_point[0]), int(node.start_point[1])
        self.end_row, self.end_col = int(node.end_point[0]), int(node.end_point[1])
        self.text: str = document.slice(self.start_row, self.start_col, self.end_row, self.end_col)

    def __repr__(self) -> str:
        return (
            f"NodeView({self.type}, ({self.start_row}, {self.start_col})"
            f"-({self.end_row}, {self.end_col}), {self.text!r})"
        )

    @property
    def key(self) -> NodeKey:
        return NodeKey(self.start_row, self.start_col, self.type)

    @property
    def width(self) -> int:
        return text_util.width(self.text)

    def _wrap(self, node) -> NodeView:
        return NodeView(self.document, node)

    def parent(self, target: str) -> NodeView | None:
        """Nearest ancestor of the given type."""
        current = self.node.parent
        while current is not None:
            if current.type == target:
                return self._wrap(current)
            current = current.parent
        return None

    def sibling(self, target: str) -> NodeView | None:
        """First following sibling of the given type."""
        current = self.node.next_sibling
        while current is not None:
            if current.type == target:
                return self._wrap(current)
            current = current.next_sibling
        return None

    def child(self, target: str, row: int | None = None) -> NodeView | None:
        """First direct child of the given type, optionally starting on row."""
        for child in self.node.children:
            if child.type != target:
                continue
            if row is not None and int(child.start_point[0]) != row:
                continue
            return self._wrap(child)
        return None

    def children(self) -> Iterator[NodeView]:
        for child in self.node.children:
            yield self._wrap(child)

    def level_in_section(self, target: str) -> int:
        """Count ancestors of type target up to the enclosing section."""
        level = 0
        current = self.node.parent
        while current is not None and current.type != "section":
            if current.type == target:
                level += 1
            current = current.parent
        return level

    def line(self, direction: Literal["above", "below"]) -> str | None:
        """Buffer line adjacent to this node, None past either edge."""
        row = self.start_row - 1 if direction == "above" else self.end_row + 1
        return self.document.line(row)

    def lines(self) -> list[str]:
        """Full buffer lines covered by this node, end row exclusive when end_col is 0."""
        last = self.end_row if self.end_col > 0 else self.end_row - 1
        return [self.document.line(row) or "" for row in range(self.start_row, last + 1)]
