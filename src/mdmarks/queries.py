"""Capture streams over a markdown syntax tree.

The grammar query is data: node type → capture name. captures() walks a
tree in document order and yields (capture name, node) pairs for the
dispatcher, for any tree-sitter shaped tree (block or inline grammar).

// [LAW:one-source-of-truth] Which node types are decorated is decided by these tables only.
"""

from __future__ import annotations

from typing import Iterator, Mapping

MARKDOWN_CAPTURES: Mapping[str, str] = {
    "atx_h1_marker": "heading",
    "atx_h2_marker": "heading",
    "atx_h3_marker": "heading",
    "atx_h4_marker": "heading",
    "atx_h5_marker": "heading",
    "atx_h6_marker": "heading",
    "thematic_break": "dash",
    "fenced_code_block": "code",
    "list_marker_plus": "list_marker",
    "list_marker_minus": "list_marker",
    "list_marker_star": "list_marker",
    "task_list_marker_unchecked": "checkbox_unchecked",
    "task_list_marker_checked": "checkbox_checked",
    "block_quote": "quote",
    "pipe_table": "table",
}

QUOTE_CAPTURES: Mapping[str, str] = {
    "block_quote_marker": "quote_marker",
    "block_continuation": "quote_marker",
}

INLINE_CAPTURES: Mapping[str, str] = {
    "code_span": "code",
    "shortcut_link": "callout",
}


def _walk(root) -> Iterator:
    """Pre-order traversal, children left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def captures(root, table: Mapping[str, str] = MARKDOWN_CAPTURES) -> Iterator[tuple[str, object]]:
    for node in _walk(root):
        name = table.get(node.type)
        if name is not None:
            yield name, node


def _nearest_quote(node):
    current = node.parent
    while current is not None and current.type != "block_quote":
        current = current.parent
    return current


def quote_captures(quote) -> Iterator[tuple[str, object]]:
    """Marker captures belonging to this quote, not to quotes nested in it."""
    for name, node in captures(quote, QUOTE_CAPTURES):
        if _nearest_quote(node) == quote:
            yield name, node
