"""Tree-sitter shaped fake nodes for renderer tests.

FakeNode exposes the subset of the tree-sitter Node API mdmarks reads:
type, start_point, end_point, parent, children, next_sibling.
"""

from __future__ import annotations


class FakeNode:
    def __init__(self, type_: str, start: tuple[int, int], end: tuple[int, int], children=()):
        self.type = type_
        self.start_point = start
        self.end_point = end
        self.parent: FakeNode | None = None
        self.next_sibling: FakeNode | None = None
        self.prev_sibling: FakeNode | None = None
        self.children: list[FakeNode] = list(children)
        for index, child in enumerate(self.children):
            child.parent = self
            child.prev_sibling = self.children[index - 1] if index > 0 else None
            child.next_sibling = self.children[index + 1] if index + 1 < len(self.children) else None

    def __repr__(self) -> str:
        return "FakeNode({}, {}, {})".format(self.type, self.start_point, self.end_point)

    def find(self, type_: str) -> FakeNode:
        """First descendant (pre-order, self included) of the given type."""
        if self.type == type_:
            return self
        for child in self.children:
            try:
                return child.find(type_)
            except LookupError:
                continue
        raise LookupError(type_)

    def find_all(self, type_: str) -> list[FakeNode]:
        found = [self] if self.type == type_ else []
        for child in self.children:
            found.extend(child.find_all(type_))
        return found


def node(type_: str, start: tuple[int, int], end: tuple[int, int], *children: FakeNode) -> FakeNode:
    return FakeNode(type_, start, end, children)
