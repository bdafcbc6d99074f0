"""Fenced code block renderer: language label, background, thin borders, padding."""

from __future__ import annotations

import logging

from mdmarks import colors
from mdmarks.core import text as text_util
from mdmarks.core.context import RenderPass
from mdmarks.core.marks import Anchor, Priority, VirtText
from mdmarks.core.node_view import NodeView
from mdmarks.geometry import code_block
from mdmarks.geometry.code_block import ParsedCodeBlock
from mdmarks.geometry.errors import GeometryError
from mdmarks.render.sign import add_sign

logger = logging.getLogger(__name__)

# Wide enough to cover any window when painted from a fixed column
_FILL = 1024


def render(node: NodeView, rp: RenderPass) -> None:
    code = rp.config.code
    if not code.enabled or code.style == "none":
        return
    parsed = code_block.parse(code, rp.context, node)
    if isinstance(parsed, GeometryError):
        logger.info("skipping code block at row %d: %s", parsed.row, parsed.details)
        return

    add_background = code.draws_background and parsed.language not in code.disable_background
    icon_added = _language(parsed, rp, add_background)
    start_row, end_row = parsed.start_row, parsed.end_row
    if add_background:
        start_row, end_row = _background(parsed, rp, icon_added)
    _left_pad(parsed, rp, start_row, end_row, add_background)


def label_win_col(longest_line: int, label: str, block_width: bool) -> int:
    """Window column of a right-positioned label."""
    if block_width:
        return longest_line - text_util.width(label)
    return longest_line


def _language(parsed: ParsedCodeBlock, rp: RenderPass, add_background: bool) -> bool:
    """Draw the language label; True when an icon mark was placed."""
    code = rp.config.code
    if not code.draws_language:
        return False
    info = parsed.language_info
    if info is None:
        return False
    found = rp.icons.get(info.text)
    if found is None:
        logger.debug("no icon for language %r", info.text)
        return False
    icon, icon_highlight = found
    if code.sign:
        add_sign(rp, info, icon, icon_highlight)

    highlight: tuple[str, ...] = (icon_highlight, code.highlight) if add_background else (icon_highlight,)
    if code.position == "left":
        icon_text = icon + " "
        if parsed.language_hidden:
            # Leading whitespace of nested blocks is folded into the delimiter
            # node, so once concealed the label shifts left by that amount
            icon_text = text_util.pad(parsed.leading_spaces, icon_text + info.text)
        return rp.add(
            True,
            info.start_row,
            info.start_col,
            virt_text=(VirtText(icon_text, highlight),),
            anchor=Anchor.INLINE,
        )
    icon_text = icon + " " + info.text
    return rp.add(
        True,
        info.start_row,
        0,
        virt_text=(VirtText(icon_text, highlight),),
        anchor=Anchor.WIN_COL,
        win_col=label_win_col(parsed.longest_line, icon_text, code.width == "block"),
    )


def _background(parsed: ParsedCodeBlock, rp: RenderPass, icon_added: bool) -> tuple[int, int]:
    """Draw borders and background; return the (start, end) rows left for content."""
    code = rp.config.code
    start_row, end_row = parsed.start_row, parsed.end_row

    if code.border == "thin":
        border_width = parsed.width - parsed.col
        border_highlight = colors.inverse(code.highlight)
        if not icon_added and parsed.code_info_hidden and parsed.start_delim_hidden:
            rp.add(
                True,
                start_row,
                parsed.col,
                virt_text=(VirtText(code.above * border_width, border_highlight),),
                anchor=Anchor.OVERLAY,
            )
            start_row += 1
        if parsed.end_delim_hidden:
            rp.add(
                True,
                end_row - 1,
                parsed.col,
                virt_text=(VirtText(code.below * border_width, border_highlight),),
                anchor=Anchor.OVERLAY,
            )
            end_row -= 1

    rp.add(False, start_row, 0, end_row=end_row, end_col=0, hl_group=code.highlight, hl_eol=True)

    if code.width == "block":
        # Overwrite anything beyond the block with Normal
        for row in range(start_row, end_row):
            rp.add(
                False,
                row,
                0,
                virt_text=(VirtText(text_util.pad(_FILL), "Normal"),),
                anchor=Anchor.WIN_COL,
                win_col=parsed.width,
                priority=Priority.FILL,
            )
    return start_row, end_row


def _left_pad(parsed: ParsedCodeBlock, rp: RenderPass, start_row: int, end_row: int, add_background: bool) -> None:
    code = rp.config.code
    if code.left_pad <= 0:
        return
    highlight = code.highlight if add_background else "Normal"
    padding = text_util.pad(code.left_pad)
    for row in range(start_row, end_row):
        # Low priority so marks placed at the same column land inside the padding
        rp.add(
            False,
            row,
            parsed.col,
            virt_text=(VirtText(padding, highlight),),
            anchor=Anchor.INLINE,
            priority=Priority.FILL,
        )
