"""Fenced code block geometry.

// [LAW:dataflow-not-control-flow] parse() is pure: node in, ParsedCodeBlock or GeometryError out.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdmarks.config import CodeConfig
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderContext
from mdmarks.core.node_view import NodeView
from mdmarks.geometry.errors import GeometryError, GeometryErrorKind


@dataclass(frozen=True)
class ParsedCodeBlock:
    start_row: int
    end_row: int  # exclusive: the row after the closing fence
    col: int
    width: int
    longest_line: int
    leading_spaces: int
    language_info: NodeView | None
    code_info_hidden: bool
    language_hidden: bool
    start_delim_hidden: bool
    end_delim_hidden: bool

    @property
    def language(self) -> str | None:
        return self.language_info.text if self.language_info is not None else None


def _widths(config: CodeConfig, context: RenderContext, node: NodeView) -> tuple[int, int]:
    """(longest line, block width) including configured padding."""
    code_width = max((text_util.width(line) for line in node.lines()), default=0)
    longest_line = config.left_pad + code_width + config.right_pad
    if config.width == "block":
        width = max(longest_line, config.min_width)
    else:
        width = max(context.get_width(), longest_line, config.min_width)
    return longest_line, width


def parse(config: CodeConfig, context: RenderContext, node: NodeView) -> ParsedCodeBlock | GeometryError:
    # A block needs at least an opening fence row plus one more row
    if node.end_row - node.start_row <= 1:
        return GeometryError(
            GeometryErrorKind.SINGLE_LINE,
            node.type,
            node.start_row,
            "code block spans a single line",
        )
    code_info = node.child("info_string")
    language_info = code_info.child("language") if code_info is not None else None
    longest_line, width = _widths(config, context, node)
    return ParsedCodeBlock(
        start_row=node.start_row,
        end_row=node.end_row,
        col=node.start_col,
        width=width,
        longest_line=longest_line,
        leading_spaces=text_util.leading_spaces(node.text),
        language_info=language_info,
        code_info_hidden=context.hidden(code_info),
        language_hidden=context.hidden(language_info),
        start_delim_hidden=context.hidden(node.child("fenced_code_block_delimiter", node.start_row)),
        end_delim_hidden=context.hidden(node.child("fenced_code_block_delimiter", node.end_row - 1)),
    )
